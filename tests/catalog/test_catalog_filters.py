# topmark:header:start
#
#   project      : BuildStats
#   file         : test_catalog_filters.py
#   file_relpath : tests/catalog/test_catalog_filters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the gitignore-style exclusion filters."""

from __future__ import annotations

from buildstats.catalog.filters import compile_patterns, keep_asset, keep_module
from buildstats.extraction import ExtractionContext
from buildstats.session import InMemoryBuildResult, OutputArtifact, WorkUnit
from tests.conftest import make_options, parametrize

_CTX = ExtractionContext.for_result(InMemoryBuildResult(), "session.assets")


@parametrize(
    "patterns, name, kept",
    [
        (["*.map"], "main.js.map", False),
        (["*.map"], "main.js", True),
        (["static/"], "static/logo.png", False),
        (["*.png", "!logo.png"], "logo.png", True),
        (["*.png", "!logo.png"], "icon.png", False),
        ([], "main.js", True),
    ],
)
def test_keep_asset(patterns: list[str], name: str, kept: bool) -> None:
    """Asset names are matched with gitignore semantics, negations included."""
    options = make_options(exclude_assets=patterns)
    assert keep_asset(OutputArtifact(name, 1), _CTX, options) is kept


@parametrize(
    "patterns, kept",
    [
        (["node_modules/"], False),
        (["**/lodash/**"], False),
        (["src/"], True),
        (["node_modules/lodash/index.js"], False),
    ],
)
def test_keep_module(patterns: list[str], kept: bool) -> None:
    """Work units match on their relative name or their identifier."""
    unit = WorkUnit("/app/node_modules/lodash/index.js", "./node_modules/lodash/index.js")
    assert keep_module(unit, _CTX, make_options(exclude_modules=patterns)) is kept


def test_compiled_patterns_are_cached() -> None:
    """Identical pattern tuples share one compiled pattern set."""
    assert compile_patterns(("*.map",)) is compile_patterns(("*.map",))
