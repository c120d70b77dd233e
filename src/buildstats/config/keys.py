# topmark:header:start
#
#   project      : BuildStats
#   file         : keys.py
#   file_relpath : src/buildstats/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical option names for BuildStats reports.

The constants here are the keys of a
[`StatsOptions`][buildstats.config.options.StatsOptions] mapping, of the
``[stats]`` TOML table, and the names extractor gates refer to.

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
    - Option keys are Python-style (snake_case); the report tree keeps its own
      camelCase field names (``chunkNames``, ``filteredAssets``).
"""

from __future__ import annotations

from typing import Final


class Opt:
    """Option names understood by the default catalog.

    The ordering of constants mirrors the order in which the ``session``
    extractors are registered.
    """

    # Meta keys (not gates)
    PRESET: Final[str] = "preset"
    COLORS: Final[str] = "colors"
    EXCLUDE_ASSETS: Final[str] = "exclude_assets"
    EXCLUDE_MODULES: Final[str] = "exclude_modules"

    # session
    HASH: Final[str] = "hash"
    VERSION: Final[str] = "version"
    TIMINGS: Final[str] = "timings"
    BUILT_AT: Final[str] = "built_at"
    PUBLIC_PATH: Final[str] = "public_path"
    OUTPUT_PATH: Final[str] = "output_path"
    ASSETS: Final[str] = "assets"
    CHUNKS: Final[str] = "chunks"
    MODULES: Final[str] = "modules"
    ENTRYPOINTS: Final[str] = "entrypoints"
    CHUNK_GROUPS: Final[str] = "chunk_groups"
    ERRORS: Final[str] = "errors"
    WARNINGS: Final[str] = "warnings"
    CHILDREN: Final[str] = "children"

    # asset / chunkGroup
    PERFORMANCE: Final[str] = "performance"

    # chunk
    CHUNK_MODULES: Final[str] = "chunk_modules"
    CHUNK_ROOT_MODULES: Final[str] = "chunk_root_modules"

    # module
    ORPHAN_MODULES: Final[str] = "orphan_modules"
    MODULE_ASSETS: Final[str] = "module_assets"
    REASONS: Final[str] = "reasons"
    USED_EXPORTS: Final[str] = "used_exports"
    PROVIDED_EXPORTS: Final[str] = "provided_exports"
    OPTIMIZATION_BAILOUT: Final[str] = "optimization_bailout"
    DEPTH: Final[str] = "depth"
    NESTED_MODULES: Final[str] = "nested_modules"
    SOURCE: Final[str] = "source"


# Boolean toggles, one per extractable field group.
TOGGLE_KEYS: Final[tuple[str, ...]] = (
    Opt.HASH,
    Opt.VERSION,
    Opt.TIMINGS,
    Opt.BUILT_AT,
    Opt.PUBLIC_PATH,
    Opt.OUTPUT_PATH,
    Opt.ASSETS,
    Opt.CHUNKS,
    Opt.MODULES,
    Opt.ENTRYPOINTS,
    Opt.CHUNK_GROUPS,
    Opt.ERRORS,
    Opt.WARNINGS,
    Opt.PERFORMANCE,
    Opt.CHUNK_MODULES,
    Opt.CHUNK_ROOT_MODULES,
    Opt.ORPHAN_MODULES,
    Opt.MODULE_ASSETS,
    Opt.REASONS,
    Opt.USED_EXPORTS,
    Opt.PROVIDED_EXPORTS,
    Opt.OPTIMIZATION_BAILOUT,
    Opt.DEPTH,
    Opt.NESTED_MODULES,
    Opt.SOURCE,
)

# Keys holding pattern lists.
PATTERN_KEYS: Final[tuple[str, ...]] = (Opt.EXCLUDE_ASSETS, Opt.EXCLUDE_MODULES)

# Keys whose nested settings enable their extractor even when empty.
STRUCTURED_KEYS: Final[tuple[str, ...]] = (Opt.CHILDREN,)
