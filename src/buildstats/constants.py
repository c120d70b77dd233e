# topmark:header:start
#
#   project      : BuildStats
#   file         : constants.py
#   file_relpath : src/buildstats/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildStats Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    BUILDSTATS_VERSION: str = get_version("buildstats")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    BUILDSTATS_VERSION = "0.0.0"

# Environment variable consulted by `buildstats.config.logging.resolve_env_log_level()`.
LOG_LEVEL_ENV_VAR: Final[str] = "BUILDSTATS_LOG_LEVEL"

# Root type path of a report tree.
ROOT_TYPE: Final[str] = "session"

# Marks a pseudo-element in a preferred order ("kind!", "separator!").
PSEUDO_ELEMENT_SUFFIX: Final[str] = "!"

# Appended to an array type path to address its elements ("session.assets[]").
ARRAY_ITEM_SUFFIX: Final[str] = "[]"

# Default gap between table columns.
DEFAULT_TABLE_SEPARATOR: Final[str] = "  "

# Section holding report options in a TOML document.
TOML_OPTIONS_SECTION: Final[str] = "stats"
PYPROJECT_TOOL_SECTION: Final[str] = "tool.buildstats"
