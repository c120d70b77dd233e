# topmark:header:start
#
#   project      : BuildStats
#   file         : test_print_context.py
#   file_relpath : tests/printing/test_print_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the print context: colorizers, formatters and scope derivation."""

from __future__ import annotations

import click

from buildstats.printing import PrintContext
from buildstats.printing.context import COLOR_RESET
from tests.conftest import make_options


def test_colors_off_by_default() -> None:
    """Without options every colorizer is the identity."""
    ctx = PrintContext.create()
    assert ctx.bold("x") == "x"
    assert ctx.yellow("x") == "x"
    assert ctx.format_chunk_id(3) == "{3}"


def test_colors_on_use_click_styles() -> None:
    """``colors = true`` styles text; the visible text is unchanged."""
    ctx = PrintContext.create(make_options(colors=True))
    styled = ctx.red("ERROR")
    assert styled != "ERROR"
    assert click.unstyle(styled) == "ERROR"


def test_color_overrides_wrap_with_reset() -> None:
    """An escape override replaces one color; others keep their default style."""
    ctx = PrintContext.create(make_options(colors={"yellow": "\x1b[93m"}))
    assert ctx.yellow("big") == f"\x1b[93mbig{COLOR_RESET}"
    assert click.unstyle(ctx.green("ok")) == "ok"
    assert ctx.green("ok") != "ok"


def test_formatters() -> None:
    """Ids, flags and sizes have fixed shapes."""
    ctx = PrintContext.create()
    assert ctx.format_module_id(7) == "[7]"
    assert ctx.format_flag("emitted") == "[emitted]"
    assert ctx.format_size(1536) == "1.5 KiB"


def test_custom_size_formatter() -> None:
    """A caller-provided size formatter replaces the default."""
    ctx = PrintContext.create(size_formatter=lambda size: f"{size}B")
    assert ctx.format_size(10) == "10B"


def test_scope_derivation_does_not_leak() -> None:
    """Derived contexts bind new nodes without changing their parent."""
    root = PrintContext.create(type_path="session")
    asset_ctx = root.for_item("session.assets[].asset", "asset", {"name": "a.js"})
    kind_ctx = asset_ctx.with_kind("Entrypoint")

    assert root.node("asset") == {}
    assert asset_ctx.node("asset") == {"name": "a.js"}
    assert asset_ctx.type == "session.assets[].asset"
    assert kind_ctx.kind == "Entrypoint"
    assert asset_ctx.kind is None
    assert root.at("session") is root
    assert root.at("session.hash").type == "session.hash"
