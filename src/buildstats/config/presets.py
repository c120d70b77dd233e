# topmark:header:start
#
#   project      : BuildStats
#   file         : presets.py
#   file_relpath : src/buildstats/config/presets.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named option presets.

A preset is the base layer of a
[`MutableStatsOptions`][buildstats.config.options.MutableStatsOptions]:
explicitly supplied keys are applied on top of it. Presets only ever name keys
from [`buildstats.config.keys`][buildstats.config.keys].
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from buildstats.config.keys import TOGGLE_KEYS, Opt

if TYPE_CHECKING:
    from collections.abc import Mapping


class Preset(str, Enum):
    """Preset names accepted by the ``preset`` option."""

    NONE = "none"
    ERRORS_ONLY = "errors-only"
    MINIMAL = "minimal"
    NORMAL = "normal"
    VERBOSE = "verbose"


_NORMAL: Final[dict[str, object]] = {
    Opt.HASH: True,
    Opt.VERSION: True,
    Opt.TIMINGS: True,
    Opt.BUILT_AT: True,
    Opt.ASSETS: True,
    Opt.ENTRYPOINTS: True,
    Opt.CHUNKS: False,
    Opt.MODULES: True,
    Opt.ERRORS: True,
    Opt.WARNINGS: True,
    Opt.CHILDREN: True,
    Opt.PERFORMANCE: True,
    Opt.CHUNK_MODULES: True,
    Opt.ORPHAN_MODULES: False,
    Opt.NESTED_MODULES: True,
}

PRESETS: Final[Mapping[Preset, Mapping[str, object]]] = MappingProxyType(
    {
        Preset.NONE: MappingProxyType({key: False for key in TOGGLE_KEYS}),
        Preset.ERRORS_ONLY: MappingProxyType(
            {Opt.ERRORS: True, Opt.MODULES: True, Opt.CHILDREN: True}
        ),
        Preset.MINIMAL: MappingProxyType(
            {Opt.MODULES: True, Opt.ERRORS: True, Opt.WARNINGS: True, Opt.CHILDREN: True}
        ),
        Preset.NORMAL: MappingProxyType(dict(_NORMAL)),
        Preset.VERBOSE: MappingProxyType(
            {
                **{key: True for key in TOGGLE_KEYS},
                Opt.CHILDREN: True,
                Opt.SOURCE: False,
            }
        ),
    }
)


def preset_values(preset: Preset) -> dict[str, object]:
    """Return a fresh, mutable copy of the option values of ``preset``."""
    return dict(PRESETS[preset])
