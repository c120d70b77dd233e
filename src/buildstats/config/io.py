# topmark:header:start
#
#   project      : BuildStats
#   file         : io.py
#   file_relpath : src/buildstats/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load report options from TOML sources.

Options live in a ``[stats]`` table of a standalone TOML file, or in
``[tool.buildstats.stats]`` inside ``pyproject.toml``. Parsing is done with
`tomlkit` and returned as plain `dict` structures.

Example:
    ```toml
    [stats]
    preset = "normal"
    chunks = true
    exclude_assets = ["*.map"]

    [[stats.children]]
    assets = true
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from buildstats.config.logging import get_logger
from buildstats.config.options import MutableStatsOptions
from buildstats.constants import PYPROJECT_TOOL_SECTION, TOML_OPTIONS_SECTION

if TYPE_CHECKING:
    from pathlib import Path

    from buildstats.config.logging import BuildStatsLogger

logger: BuildStatsLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document.

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def get_table_value(table: TomlTable, dotted: str) -> TomlTable:
    """Return the sub-table at ``dotted`` (e.g. ``"tool.buildstats"``) or an empty dict."""
    current: Any = table
    for part in dotted.split("."):
        if not isinstance(current, dict):
            return {}
        current = current.get(part)
    return cast("TomlTable", current) if isinstance(current, dict) else {}


def extract_options_table(data: TomlTable, *, for_pyproject: bool) -> TomlTable:
    """Return the options table from a parsed TOML document.

    Args:
        data: Parsed TOML document.
        for_pyproject: Look under ``[tool.buildstats]`` instead of the document root.

    Returns:
        The ``stats`` table, or an empty dict when absent.
    """
    root: TomlTable = get_table_value(data, PYPROJECT_TOOL_SECTION) if for_pyproject else data
    return get_table_value(root, TOML_OPTIONS_SECTION)


def load_options_toml(path: Path) -> MutableStatsOptions:
    """Load report options from a TOML file into a mutable builder.

    ``pyproject.toml`` files are read from ``[tool.buildstats.stats]``; any
    other file from ``[stats]``.

    Args:
        path: TOML file to read.

    Returns:
        MutableStatsOptions: A builder; empty when the file or table is missing.
    """
    data: TomlTable = load_toml_dict(path)
    table: TomlTable = extract_options_table(data, for_pyproject=path.name == "pyproject.toml")
    if not table:
        logger.debug("No options table found in %s", path)
    return MutableStatsOptions.from_mapping(table)
