# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/extraction/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extraction stage: build a plain report tree from a build result."""

from __future__ import annotations

from buildstats.extraction.context import ExtractionContext
from buildstats.extraction.factory import ExtractionPipeline

__all__ = [
    "ExtractionContext",
    "ExtractionPipeline",
]
