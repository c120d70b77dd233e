# topmark:header:start
#
#   project      : BuildStats
#   file         : test_printing_pipeline.py
#   file_relpath : tests/printing/test_printing_pipeline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the printing pipeline with hand-built registries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from buildstats.errors import HandlerError
from buildstats.hooks import HookKind, HookRegistry, NamedOption
from buildstats.printing import Element, PrintingPipeline
from buildstats.printing.printer import default_print_elements, default_print_items
from tests.conftest import make_options, mark_pipeline

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildstats.printing import PrintContext


def _text(value: Any, *_: Any) -> str:
    return str(value)


@mark_pipeline
def test_scalars_without_handlers_print_nothing() -> None:
    """A scalar with no print handler renders as None."""
    assert PrintingPipeline(HookRegistry()).print("session", 42) is None


@mark_pipeline
def test_print_handler_wins_over_structure() -> None:
    """A print handler short-circuits the array and mapping defaults."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "session", lambda *_: "custom")

    assert PrintingPipeline(registry).print("session", {"a": 1}) == "custom"


@mark_pipeline
def test_mapping_defaults_join_fields_with_spaces() -> None:
    """Fields print at ``<path>.<field>``; None fields are dropped."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "session.hash", lambda v, *_: f"Hash: {v}")
    registry.register(HookKind.PRINT, "session.time", lambda v, *_: f"Time: {v}ms")

    printed = PrintingPipeline(registry).print(
        "session", {"hash": "abc", "unknown": 1, "time": 12}
    )
    assert printed == "Hash: abc Time: 12ms"


@mark_pipeline
def test_empty_mapping_prints_nothing() -> None:
    """Nothing printable yields None instead of an empty string."""
    assert PrintingPipeline(HookRegistry()).print("session", {}) is None
    assert PrintingPipeline(HookRegistry()).print("session", {"x": 1}) is None


@mark_pipeline
def test_sort_elements_controls_field_order() -> None:
    """The waterfall result decides the printing order."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "a", _text)
    registry.register(HookKind.PRINT, "b", _text)
    registry.register(
        HookKind.SORT_ELEMENTS, "session", lambda elements, *_: sorted(elements, reverse=True)
    )

    assert PrintingPipeline(registry).print("session", {"a": "1", "b": "2"}) == "2 1"


@mark_pipeline
def test_print_elements_receives_element_pairs() -> None:
    """A printElements handler sees every field with its printed content."""
    registry = HookRegistry()
    seen: list[Element] = []
    registry.register(HookKind.PRINT, "session.a", _text)

    def join(elements: Sequence[Element], ctx: PrintContext) -> str:
        seen.extend(elements)
        assert ctx.type == "session"
        return "|".join(e.element for e in elements)

    registry.register(HookKind.PRINT_ELEMENTS, "session", join)

    assert PrintingPipeline(registry).print("session", {"a": 1, "b": 2}) == "a|b"
    assert seen == [Element("a", "1"), Element("b", None)]


@mark_pipeline
def test_arrays_use_item_names_and_default_newline_join() -> None:
    """Items print at ``<path>[].<name>`` and join with newlines."""
    registry = HookRegistry()
    registry.register(HookKind.GET_ITEM_NAME, "session.errors[]", lambda *_: "error")
    registry.register(HookKind.PRINT, "error", lambda v, *_: f"ERROR in {v}")

    printed = PrintingPipeline(registry).print("session.errors", ["a", "b"])
    assert printed == "ERROR in a\nERROR in b"


@mark_pipeline
def test_arrays_without_item_names_print_at_the_bare_item_path() -> None:
    """Without a getItemName handler the item path ends in ``[]``."""
    registry = HookRegistry()
    paths: list[str] = []

    def record(value: Any, ctx: PrintContext, *_: Any) -> str:
        paths.append(ctx.type)
        return str(value)

    registry.register(HookKind.PRINT, "session.files[]", record)

    assert PrintingPipeline(registry).print("session.files", ["x"]) == "x"
    assert paths == ["session.files[]"]


@mark_pipeline
def test_print_items_handler_and_empty_arrays() -> None:
    """printItems joins non-empty items; an empty array prints nothing."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "session.chunks[]", _text)
    registry.register(
        HookKind.PRINT_ITEMS, "session.chunks", lambda items, *_: ", ".join(items) or None
    )
    pipeline = PrintingPipeline(registry)

    assert pipeline.print("session.chunks", [1, 2]) == "1, 2"
    assert pipeline.print("session.chunks", []) is None


@mark_pipeline
def test_item_nodes_are_visible_to_nested_printers() -> None:
    """Nested printers can read the enclosing item through the context."""
    registry = HookRegistry()
    registry.register(HookKind.GET_ITEM_NAME, "session.assets[]", lambda *_: "asset")
    registry.register(
        HookKind.PRINT,
        "asset.name",
        lambda v, ctx, *_: f"{v}!" if ctx.node("asset").get("big") else v,
    )
    printed = PrintingPipeline(registry).print(
        "session.assets", [{"name": "a.js", "big": True}, {"name": "b.js"}]
    )
    assert printed == "a.js!\nb.js"


@mark_pipeline
def test_gated_print_handlers_follow_options() -> None:
    """Print handlers are gated like extract handlers."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "session.hash", _text, gate=NamedOption("hash"))

    assert PrintingPipeline(registry).print("session", {"hash": "h"}) is None
    gated = PrintingPipeline(registry, make_options(hash=True))
    assert gated.print("session", {"hash": "h"}) == "h"


@mark_pipeline
def test_printer_failure_raises_handler_error() -> None:
    """A failing print handler aborts the render."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "session.hash", lambda *_: 1 / 0)

    with pytest.raises(HandlerError) as excinfo:
        PrintingPipeline(registry).print("session", {"hash": "h", "other": "x"})
    assert excinfo.value.type_path == "session.hash"
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_default_joiners() -> None:
    """Defaults skip empty entries and flatten rows."""
    assert default_print_items(["a", None, "", ["b", "", "c"]]) == "a\nb c"
    assert default_print_items([None]) is None
    assert default_print_elements([Element("a", "x"), Element("b", None)]) == "x"
    assert default_print_elements([]) is None
