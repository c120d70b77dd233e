# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across BuildStats.

Included modules:

- ``diagnostics``
  The keyed `Diagnostic` record used to note
  configuration problems that were recovered from instead of raised.
"""

from __future__ import annotations
