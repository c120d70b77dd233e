# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/printing/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Printing stage: render a report tree as human-readable text."""

from __future__ import annotations

from buildstats.printing.context import PrintContext
from buildstats.printing.ordering import create_order
from buildstats.printing.printer import Element, PrintingPipeline
from buildstats.printing.sizes import format_size
from buildstats.printing.table import table

__all__ = [
    "Element",
    "PrintContext",
    "PrintingPipeline",
    "create_order",
    "format_size",
    "table",
]
