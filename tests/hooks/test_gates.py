# topmark:header:start
#
#   project      : BuildStats
#   file         : test_gates.py
#   file_relpath : tests/hooks/test_gates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for handler gates."""

from __future__ import annotations

from buildstats.hooks import ALWAYS, EnabledOption, NamedOption, Unconditional, gate_for
from tests.conftest import make_options, parametrize


def test_unconditional_is_always_open() -> None:
    """The unconditional gate ignores the options entirely."""
    assert ALWAYS.is_open(None)
    assert ALWAYS.is_open({})
    assert str(ALWAYS) == "_"


@parametrize(
    "options, expected",
    [
        (None, False),
        ({}, False),
        ({"assets": False}, False),
        ({"assets": 0}, False),
        ({"assets": True}, True),
        ({"assets": ["x"]}, True),
    ],
)
def test_named_option_follows_truthiness(options: dict[str, object] | None, expected: bool) -> None:
    """A named gate is open iff the option is present and truthy."""
    assert NamedOption("assets").is_open(options) is expected


def test_named_option_reads_frozen_options() -> None:
    """Frozen options behave like a plain mapping for gates."""
    assert NamedOption("chunks").is_open(make_options(chunks=True))
    assert not NamedOption("chunks").is_open(make_options(assets=True))


@parametrize("key", [None, "_"])
def test_gate_for_unconditional_keys(key: str | None) -> None:
    """``None`` and ``"_"`` map to the unconditional gate."""
    assert isinstance(gate_for(key), Unconditional)


def test_gate_for_named_key() -> None:
    """Any other key becomes a named gate."""
    assert gate_for("reasons") == NamedOption("reasons")
    assert str(gate_for("reasons")) == "reasons"


@parametrize(
    "options, expected",
    [
        (None, False),
        ({}, False),
        ({"children": None}, False),
        ({"children": False}, False),
        ({"children": True}, True),
        ({"children": ()}, True),
        ({"children": {}}, True),
    ],
)
def test_enabled_option_accepts_empty_nested_settings(
    options: dict[str, object] | None, expected: bool
) -> None:
    """Only a missing, None or False value closes an enabled-option gate."""
    assert EnabledOption("children").is_open(options) is expected


def test_enabled_option_reads_frozen_empty_children() -> None:
    """Frozen empty nested options are falsy mappings but keep the gate open."""
    assert EnabledOption("children").is_open(make_options(children={}))
    assert EnabledOption("children").is_open(make_options(children=[]))
    assert not NamedOption("children").is_open(make_options(children={}))
    assert str(EnabledOption("children")) == "children?"
