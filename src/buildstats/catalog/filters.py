# topmark:header:start
#
#   project      : BuildStats
#   file         : filters.py
#   file_relpath : src/buildstats/catalog/filters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exclusion filters for assets and work units.

``exclude_assets`` and ``exclude_modules`` hold gitignore-style patterns
(matched with `pathspec`). Assets are matched on their output name; work
units on their short name and on their identifier.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from buildstats.config.keys import Opt
from buildstats.config.logging import get_logger
from buildstats.hooks.gates import NamedOption
from buildstats.hooks.kinds import HookKind

if TYPE_CHECKING:
    from buildstats.config.logging import BuildStatsLogger
    from buildstats.config.options import StatsOptions
    from buildstats.extraction.context import ExtractionContext
    from buildstats.hooks.registry import HookRegistry
    from buildstats.session.model import OutputArtifact, WorkUnit

logger: BuildStatsLogger = get_logger(__name__)

PLUGIN_NAME = "filters"


@lru_cache(maxsize=64)
def compile_patterns(patterns: tuple[str, ...]) -> PathSpec:
    """Return a compiled `PathSpec` for gitignore-style ``patterns``."""
    return PathSpec.from_lines(GitWildMatchPattern, patterns)


def _strip_relative(name: str) -> str:
    return name[2:] if name.startswith("./") else name


def keep_asset(asset: OutputArtifact, ctx: ExtractionContext, options: StatsOptions) -> bool:  # noqa: ARG001
    """Return False if the asset name matches ``exclude_assets``."""
    spec: PathSpec = compile_patterns(tuple(options.exclude_assets))
    if spec.match_file(asset.name):
        logger.debug("Excluding asset '%s'", asset.name)
        return False
    return True


def keep_module(unit: WorkUnit, ctx: ExtractionContext, options: StatsOptions) -> bool:  # noqa: ARG001
    """Return False if the unit name or identifier matches ``exclude_modules``."""
    spec: PathSpec = compile_patterns(tuple(options.exclude_modules))
    if spec.match_file(_strip_relative(unit.name)) or spec.match_file(unit.identifier):
        logger.debug("Excluding module '%s'", unit.identifier)
        return False
    return True


FILTERS: tuple[tuple[str, str, Any], ...] = (
    ("session.assets", Opt.EXCLUDE_ASSETS, keep_asset),
    ("session.modules", Opt.EXCLUDE_MODULES, keep_module),
    ("chunk.modules", Opt.EXCLUDE_MODULES, keep_module),
    ("chunk.rootModules", Opt.EXCLUDE_MODULES, keep_module),
)


def register_filters(registry: HookRegistry) -> None:
    """Register the exclusion filters into ``registry``."""
    for type_path, option, handler in FILTERS:
        registry.register(
            HookKind.FILTER,
            type_path,
            handler,
            gate=NamedOption(option),
            plugin=PLUGIN_NAME,
        )
