# topmark:header:start
#
#   project      : BuildStats
#   file         : diagnostics.py
#   file_relpath : src/buildstats/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics support.

Configuration problems that the options layer recovers from (instead of
raising) are recorded as `Diagnostic` entries so embedders can surface them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """A recovered configuration problem.

    Attributes:
        key (str): Name of the offending option.
        message (str): What was wrong and how the value was degraded.
    """

    key: str
    message: str

    def __str__(self) -> str:
        return f"Invalid value for option '{self.key}': {self.message}"
