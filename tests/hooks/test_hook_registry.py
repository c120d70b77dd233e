# topmark:header:start
#
#   project      : BuildStats
#   file         : test_hook_registry.py
#   file_relpath : tests/hooks/test_hook_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the path-keyed hook registry: level matching, dispatch styles and freezing."""

from __future__ import annotations

from typing import Any

import pytest

from buildstats.errors import HandlerError, RegistryFrozenError
from buildstats.hooks import HookKind, HookRegistry, NamedOption, type_levels
from tests.conftest import parametrize


@parametrize(
    "type_path, expected",
    [
        ("session", ("session",)),
        ("session.assets", ("session.assets", "assets")),
        (
            "session.assets[].asset",
            ("session.assets[].asset", "assets[].asset", "asset"),
        ),
        (
            "session.modules[].module.reasons[].moduleReason",
            (
                "session.modules[].module.reasons[].moduleReason",
                "modules[].module.reasons[].moduleReason",
                "module.reasons[].moduleReason",
                "reasons[].moduleReason",
                "moduleReason",
            ),
        ),
    ],
)
def test_type_levels_most_specific_first(type_path: str, expected: tuple[str, ...]) -> None:
    """Every dotted suffix is a level, the full path first."""
    assert type_levels(type_path) == expected


def test_handlers_visit_specific_levels_before_generic_ones() -> None:
    """A handler for the full path runs before one registered for a suffix."""
    registry = HookRegistry()
    calls: list[str] = []
    registry.register(HookKind.EXTRACT, "asset", lambda *_: calls.append("asset"))
    registry.register(HookKind.EXTRACT, "session.assets[].asset", lambda *_: calls.append("full"))
    registry.register(HookKind.EXTRACT, "assets[].asset", lambda *_: calls.append("middle"))

    registry.call_all(HookKind.EXTRACT, "session.assets[].asset")

    assert calls == ["full", "middle", "asset"]


def test_handlers_keep_arrival_order_within_a_level() -> None:
    """Two handlers on the same path run in registration order."""
    registry = HookRegistry()
    calls: list[int] = []
    registry.register(HookKind.EXTRACT, "asset", lambda *_: calls.append(1))
    registry.register(HookKind.EXTRACT, "asset", lambda *_: calls.append(2))

    registry.call_all(HookKind.EXTRACT, "asset")

    assert calls == [1, 2]


def test_unrelated_paths_do_not_match() -> None:
    """A suffix that is not a whole dotted component never matches."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "name", lambda *_: "hit")

    assert registry.call_first(HookKind.PRINT, "asset.filename") is None
    assert registry.call_first(HookKind.PRINT, "asset.name") == "hit"


def test_missing_registration_is_a_no_op() -> None:
    """Dispatching a path nobody registered for has no effect."""
    registry = HookRegistry()

    registry.call_all(HookKind.EXTRACT, "session")
    assert registry.call_first(HookKind.PRINT, "session") is None
    assert registry.call_waterfall(HookKind.SORT_ELEMENTS, "session", ["a"]) == ["a"]
    assert list(registry.call_each(HookKind.FILTER, "session.assets")) == []
    assert not registry.has_handlers(HookKind.PRINT, "session")


def test_call_first_skips_none_results() -> None:
    """The first non-None result wins and later handlers are not called."""
    registry = HookRegistry()
    calls: list[str] = []

    def abstain(*_: Any) -> None:
        calls.append("abstain")

    def answer(*_: Any) -> str:
        calls.append("answer")
        return "first"

    def never(*_: Any) -> str:
        calls.append("never")
        return "second"

    registry.register(HookKind.PRINT, "asset.name", abstain)
    registry.register(HookKind.PRINT, "asset.name", answer)
    registry.register(HookKind.PRINT, "name", never)

    assert registry.call_first(HookKind.PRINT, "asset.name") == "first"
    assert calls == ["abstain", "answer"]


def test_call_first_returns_falsy_non_none_results() -> None:
    """An empty string is an answer, not an abstention."""
    registry = HookRegistry()
    registry.register(HookKind.PRINT, "asset.name", lambda *_: "")
    registry.register(HookKind.PRINT, "name", lambda *_: "fallback")

    assert registry.call_first(HookKind.PRINT, "asset.name") == ""


def test_call_waterfall_threads_value() -> None:
    """Each handler receives the previous value; None keeps it unchanged."""
    registry = HookRegistry()
    registry.register(HookKind.SORT_ELEMENTS, "asset", lambda value, *_: [*value, "b"])
    registry.register(HookKind.SORT_ELEMENTS, "asset", lambda *_: None)
    registry.register(HookKind.SORT_ELEMENTS, "asset", lambda value, *_: [*value, "c"])

    assert registry.call_waterfall(HookKind.SORT_ELEMENTS, "asset", ["a"]) == ["a", "b", "c"]


def test_call_each_is_lazy() -> None:
    """Handlers after the point where iteration stops are never called."""
    registry = HookRegistry()
    calls: list[str] = []

    def reject(*_: Any) -> bool:
        calls.append("reject")
        return False

    def later(*_: Any) -> bool:
        calls.append("later")
        return True

    registry.register(HookKind.FILTER, "session.assets", reject)
    registry.register(HookKind.FILTER, "session.assets", later)

    verdicts = registry.call_each(HookKind.FILTER, "session.assets", object())
    assert next(verdicts) is False
    assert calls == ["reject"]


def test_gates_close_handlers_without_options() -> None:
    """Named gates need a truthy option; unconditional handlers always run."""
    registry = HookRegistry()
    calls: list[str] = []
    registry.register(HookKind.EXTRACT, "asset", lambda *_: calls.append("always"))
    registry.register(
        HookKind.EXTRACT,
        "asset",
        lambda *_: calls.append("gated"),
        gate=NamedOption("performance"),
    )

    registry.call_all(HookKind.EXTRACT, "asset")
    registry.call_all(HookKind.EXTRACT, "asset", options={"performance": False})
    assert calls == ["always", "always"]

    registry.call_all(HookKind.EXTRACT, "asset", options={"performance": True})
    assert calls == ["always", "always", "always", "gated"]


def test_arguments_are_forwarded() -> None:
    """Positional arguments reach the handler unchanged."""
    registry = HookRegistry()
    seen: list[tuple[Any, ...]] = []
    registry.register(HookKind.EXTRACT, "asset", lambda *args: seen.append(args))

    registry.call_all(HookKind.EXTRACT, "asset", 1, "two", None)

    assert seen == [(1, "two", None)]


def test_frozen_registry_rejects_registration() -> None:
    """Registering after `freeze` raises and leaves the registry unchanged."""
    registry = HookRegistry(name="frozen")
    registry.register(HookKind.PRINT, "asset.name", lambda *_: "x")
    assert registry.freeze() is registry
    assert registry.frozen

    with pytest.raises(RegistryFrozenError, match="frozen"):
        registry.register(HookKind.PRINT, "asset.size", lambda *_: "y")
    assert len(registry) == 1


def test_handler_failure_is_wrapped_with_dispatch_context() -> None:
    """A raising handler surfaces as `HandlerError` naming the kind and the path."""
    registry = HookRegistry()

    def broken(*_: Any) -> None:
        raise KeyError("size")

    registry.register(HookKind.EXTRACT, "asset", broken)

    with pytest.raises(HandlerError) as excinfo:
        registry.call_all(HookKind.EXTRACT, "session.assets[].asset")

    err: HandlerError = excinfo.value
    assert err.kind is HookKind.EXTRACT
    assert err.type_path == "session.assets[].asset"
    assert isinstance(err.__cause__, KeyError)
    assert "extract handler for 'session.assets[].asset' failed" in str(err)


def test_nested_handler_error_is_not_wrapped_twice() -> None:
    """A `HandlerError` raised by a nested dispatch keeps its original context."""
    registry = HookRegistry()

    def inner(*_: Any) -> None:
        raise ValueError("boom")

    def outer(*_: Any) -> None:
        registry.call_all(HookKind.EXTRACT, "asset")

    registry.register(HookKind.EXTRACT, "asset", inner)
    registry.register(HookKind.EXTRACT, "session", outer)

    with pytest.raises(HandlerError) as excinfo:
        registry.call_all(HookKind.EXTRACT, "session")
    assert excinfo.value.type_path == "asset"


def test_registration_records_plugin_and_gate() -> None:
    """`register` returns the stored registration."""
    registry = HookRegistry()
    reg = registry.register(
        HookKind.EXTRACT, "asset", print, gate=NamedOption("performance"), plugin="demo"
    )

    assert reg.plugin == "demo"
    assert reg.gate == NamedOption("performance")
    assert list(registry.handlers(HookKind.EXTRACT, "asset", {"performance": 1})) == [reg]
    assert "1 handlers, open" in repr(registry)
