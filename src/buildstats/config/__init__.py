# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for BuildStats reports.

Public surface:
    - `StatsOptions` / `MutableStatsOptions`: frozen options and their builder.
    - `Preset`: named presets usable as the base layer.
    - `Opt`: canonical option names.
    - `load_options_toml`: read options from a TOML file.
"""

from __future__ import annotations

from buildstats.config.io import load_options_toml
from buildstats.config.keys import Opt
from buildstats.config.options import MutableStatsOptions, StatsOptions
from buildstats.config.presets import Preset

__all__ = [
    "MutableStatsOptions",
    "Opt",
    "Preset",
    "StatsOptions",
    "load_options_toml",
]
