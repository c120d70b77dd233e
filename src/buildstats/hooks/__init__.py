# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/hooks/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hook registry, hook kinds and handler gates."""

from __future__ import annotations

from buildstats.hooks.gates import (
    ALWAYS,
    EnabledOption,
    Gate,
    NamedOption,
    Unconditional,
    gate_for,
)
from buildstats.hooks.kinds import HookKind
from buildstats.hooks.registry import HookRegistry, Registration, type_levels

__all__ = [
    "ALWAYS",
    "EnabledOption",
    "Gate",
    "HookKind",
    "HookRegistry",
    "NamedOption",
    "Registration",
    "Unconditional",
    "gate_for",
    "type_levels",
]
