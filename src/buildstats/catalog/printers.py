# topmark:header:start
#
#   project      : BuildStats
#   file         : printers.py
#   file_relpath : src/buildstats/catalog/printers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default print handlers: field printers, preferred orders and joiners.

The text layout:
    - The session prints one block per line in a fixed order (hash, version,
      timings, asset table, entry points, chunks, modules, problems, children).
    - Assets render as a table (``Asset Size Chunks <emitted> <big> Chunk Names``).
    - Entry points and named groups render one line each
      (``Entrypoint main = main.js``).
    - Modules render one line each; a module whose id equals its name shows the
      id only. Reasons, bailouts and nested modules follow on indented lines.
    - Child sessions render indented under ``Child <name>:``.
"""

from __future__ import annotations

import textwrap
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final

from buildstats.catalog.extractors import constant_item_name
from buildstats.config.logging import get_logger
from buildstats.extraction.factory import is_array
from buildstats.hooks.kinds import HookKind
from buildstats.printing.ordering import create_order
from buildstats.printing.table import table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildstats.config.logging import BuildStatsLogger
    from buildstats.hooks.registry import HookRegistry
    from buildstats.printing.context import PrintContext
    from buildstats.printing.printer import Element, Printed, PrintingPipeline

logger: BuildStatsLogger = get_logger(__name__)

PLUGIN_NAME: Final[str] = "printers"

# Indentation of lines nested under a module, chunk or child session.
BLOCK_INDENT: Final[str] = "    "

Printer = Callable[..., Any]


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _text(content: Printed) -> str:
    if isinstance(content, list):
        return " ".join(cell for cell in content if cell)
    return content or ""


# ------------------ session ------------------


def _session_hash(value: Any, ctx: PrintContext, printer: PrintingPipeline) -> str | None:  # noqa: ARG001
    if ctx.type != "session.hash" or value is None:
        return None
    return f"Hash: {ctx.bold(value)}"


def _session_version(value: Any, ctx: PrintContext, printer: PrintingPipeline) -> str | None:  # noqa: ARG001
    if ctx.type != "session.version" or value is None:
        return None
    return f"Version: {ctx.bold(value)}"


def _session_time(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return f"Time: {ctx.bold(value)}ms" if value is not None else None


def _session_built_at(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    built_at: datetime = datetime.fromtimestamp(value / 1000)
    return f"Built at: {built_at:%Y-%m-%d} {ctx.bold(f'{built_at:%H:%M:%S}')}"


def _session_public_path(value: Any, ctx: PrintContext, *_: Any) -> str:
    return f"PublicPath: {ctx.bold(value or '(none)')}"


def _chunk_groups_of_kind(kind: str) -> Printer:
    def print_chunk_groups(
        value: Any, ctx: PrintContext, printer: PrintingPipeline
    ) -> Printed:
        if not isinstance(value, Mapping):
            return None
        return printer.print(ctx.type, list(value.values()), ctx.with_kind(kind))

    return print_chunk_groups


def _hidden(noun: str) -> Printer:
    def print_hidden(value: Any, *_: Any) -> str | None:
        return f"+ {_plural(value, noun)}" if isinstance(value, int) and value > 0 else None

    return print_hidden


def _session_error(value: Any, ctx: PrintContext, *_: Any) -> str:
    return f"{ctx.red('ERROR in')} {value}"


def _session_warning(value: Any, ctx: PrintContext, *_: Any) -> str:
    return f"{ctx.yellow('WARNING in')} {value}"


def _session_additional_pass(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.yellow("Build needs an additional pass.") if value else None


def _session_children(value: Any, ctx: PrintContext, printer: PrintingPipeline) -> str | None:
    if not is_array(value):
        return None
    blocks: list[str] = []
    for child, rendered in zip(value, printer.print_each(ctx.type, value, ctx)):
        name = child.get("name") if isinstance(child, Mapping) else None
        header: str = f"Child {ctx.bold(name)}:" if name else "Child"
        body: str = _text(rendered)
        blocks.append(f"{header}\n{textwrap.indent(body, BLOCK_INDENT)}" if body else header)
    return "\n".join(blocks) if blocks else None


# ------------------ asset ------------------


def _asset_color(ctx: PrintContext) -> Callable[[str], str]:
    return ctx.yellow if ctx.node("asset").get("isOverSizeLimit") else ctx.green


def _asset_name(value: Any, ctx: PrintContext, *_: Any) -> str:
    return _asset_color(ctx)(value)


def _asset_size(value: Any, ctx: PrintContext, *_: Any) -> str:
    return _asset_color(ctx)(ctx.format_size(value))


def _asset_emitted(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.green(ctx.format_flag("emitted")) if value else None


def _over_size_limit(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.yellow(ctx.format_flag("big")) if value else None


def _chunk_id(value: Any, ctx: PrintContext, *_: Any) -> str:
    return ctx.format_chunk_id(value)


def _identity(value: Any, *_: Any) -> str | None:
    return str(value) if value is not None and value != "" else None


# ------------------ module ------------------


def _module_id(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.format_module_id(value) if value is not None else None


def _module_sizes(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    if not isinstance(value, Mapping) or not value:
        return None
    if len(value) == 1:
        return ctx.format_size(next(iter(value.values())))
    return " ".join(f"{ctx.format_size(size)} ({key})" for key, size in value.items())


def _module_depth(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.format_flag(f"depth {value}") if value is not None else None


def _flag_when(flag: str, color: str, *, expected: bool = True) -> Printer:
    def print_flag(value: Any, ctx: PrintContext, *_: Any) -> str | None:
        if bool(value) is not expected:
            return None
        colorize: Callable[[str], str] = getattr(ctx, color)
        return colorize(ctx.format_flag(flag))

    return print_flag


def _count_flag(noun: str, color: str) -> Printer:
    def print_count(value: Any, ctx: PrintContext, *_: Any) -> str | None:
        if not value:
            return None
        count: int = len(value) if isinstance(value, (list, tuple)) else int(value)
        colorize: Callable[[str], str] = getattr(ctx, color)
        return colorize(ctx.format_flag(_plural(count, noun)))

    return print_count


def _module_provided_exports(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    if not isinstance(value, list):
        return None
    if not value:
        return ctx.cyan(ctx.format_flag("no exports"))
    return ctx.cyan(ctx.format_flag(f"exports {', '.join(value)}"))


def _module_used_exports(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    if value is True:
        return None
    if value is None:
        return ctx.cyan(ctx.format_flag("used exports unknown"))
    if value is False:
        return ctx.cyan(ctx.format_flag("module unused"))
    if not isinstance(value, list):
        return None
    if not value:
        return ctx.cyan(ctx.format_flag("no exports used"))
    provided = ctx.node("module").get("providedExports")
    if isinstance(provided, list) and len(provided) == len(value):
        return ctx.cyan(ctx.format_flag("all exports used"))
    return ctx.cyan(ctx.format_flag(f"only some exports used: {', '.join(value)}"))


def _yellow(value: Any, ctx: PrintContext, *_: Any) -> str:
    return ctx.yellow(value)


def _green(value: Any, ctx: PrintContext, *_: Any) -> str:
    return ctx.green(value)


def _cyan_when(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.cyan(value) if value else None


def _magenta_when(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.magenta(value) if value else None


# ------------------ chunkGroup / chunk ------------------


def _chunk_group_kind(value: Any, ctx: PrintContext, *_: Any) -> str | None:  # noqa: ARG001
    return ctx.kind


def _chunk_group_name(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    return ctx.bold(value) if value else None


def _separator(*_: Any) -> str:
    return "="


def _chunk_group_child_assets(value: Any, ctx: PrintContext, *_: Any) -> str | None:
    if not isinstance(value, Mapping):
        return None
    parts: list[str] = [
        f"({key}: {' '.join(ctx.green(f) for f in files)})" for key, files in value.items() if files
    ]
    return " ".join(parts) if parts else None


def _chunk_id_line(value: Any, ctx: PrintContext, *_: Any) -> str:
    return f"chunk {ctx.format_chunk_id(value)}"


def _chunk_names(value: Any, *_: Any) -> str | None:
    if not isinstance(value, list) or not value:
        return None
    return f"({', '.join(value)})"


def _chunk_size(value: Any, ctx: PrintContext, *_: Any) -> str:
    return ctx.format_size(value)


SIMPLE_PRINTERS: Final[Mapping[str, Printer]] = MappingProxyType(
    {
        "session.hash": _session_hash,
        "session.version": _session_version,
        "session.time": _session_time,
        "session.builtAt": _session_built_at,
        "session.publicPath": _session_public_path,
        "session.entrypoints": _chunk_groups_of_kind("Entrypoint"),
        "session.namedChunkGroups": _chunk_groups_of_kind("Chunk Group"),
        "session.filteredAssets": _hidden("hidden asset"),
        "filteredModules": _hidden("hidden module"),
        "filteredRootModules": _hidden("hidden root module"),
        "chunk.nonRootModules": _hidden("non-root module"),
        "session.errors[]": _session_error,
        "session.warnings[]": _session_warning,
        "session.needAdditionalPass": _session_additional_pass,
        "session.children": _session_children,
        "asset.name": _asset_name,
        "asset.size": _asset_size,
        "asset.emitted": _asset_emitted,
        "asset.isOverSizeLimit": _over_size_limit,
        "assetChunk": _chunk_id,
        "assetChunkName": _identity,
        "module.id": _module_id,
        "module.name": _identity,
        "module.identifier": _identity,
        "module.sizes": _module_sizes,
        "module.chunks[]": _chunk_id,
        "module.depth": _module_depth,
        "module.cacheable": _flag_when("not cacheable", "red", expected=False),
        "module.orphan": _flag_when("orphan", "yellow"),
        "module.runtime": _flag_when("runtime", "yellow"),
        "module.optional": _flag_when("optional", "yellow"),
        "module.built": _flag_when("built", "green"),
        "module.assets": _count_flag("asset", "magenta"),
        "module.failed": _flag_when("failed", "red"),
        "module.warnings": _count_flag("warning", "yellow"),
        "module.errors": _count_flag("error", "red"),
        "module.providedExports": _module_provided_exports,
        "module.usedExports": _module_used_exports,
        "module.optimizationBailout[]": _yellow,
        "moduleReason.type": _identity,
        "moduleReason.userRequest": _cyan_when,
        "moduleReason.moduleId": _module_id,
        "moduleReason.module": _magenta_when,
        "moduleReason.loc": _identity,
        "moduleReason.explanation": _cyan_when,
        "chunkGroup.kind!": _chunk_group_kind,
        "chunkGroup.name": _chunk_group_name,
        "chunkGroup.isOverSizeLimit": _over_size_limit,
        "chunkGroup.separator!": _separator,
        "chunkGroup.assets[]": _green,
        "chunkGroup.childAssets": _chunk_group_child_assets,
        "chunk.id": _chunk_id_line,
        "chunk.files[]": _green,
        "chunk.names": _chunk_names,
        "chunk.size": _chunk_size,
        "chunk.entry": _flag_when("entry", "yellow"),
        "chunk.initial": _flag_when("initial", "yellow"),
        "chunk.rendered": _flag_when("rendered", "green"),
    }
)

PRINT_ITEM_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "asset.chunks[]": "assetChunk",
        "asset.chunkNames[]": "assetChunkName",
    }
)

PREFERRED_ORDERS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "session": (
            "hash",
            "version",
            "time",
            "builtAt",
            "publicPath",
            "assets",
            "filteredAssets",
            "entrypoints",
            "namedChunkGroups",
            "chunks",
            "modules",
            "filteredModules",
            "warnings",
            "errors",
            "children",
            "needAdditionalPass",
        ),
        "asset": ("name", "size", "chunks", "emitted", "isOverSizeLimit", "chunkNames"),
        "chunkGroup": (
            "kind!",
            "name",
            "isOverSizeLimit",
            "separator!",
            "assets",
            "childAssets",
        ),
        "chunk": (
            "id",
            "files",
            "names",
            "size",
            "entry",
            "initial",
            "rendered",
            "hash",
            "modules",
            "filteredModules",
            "rootModules",
            "filteredRootModules",
            "nonRootModules",
        ),
        "module": (
            "id",
            "name",
            "identifier",
            "sizes",
            "chunks",
            "depth",
            "cacheable",
            "orphan",
            "runtime",
            "optional",
            "built",
            "assets",
            "failed",
            "warnings",
            "errors",
            "providedExports",
            "usedExports",
            "optimizationBailout",
            "reasons",
            "modules",
            "filteredModules",
        ),
        "moduleReason": ("type", "userRequest", "moduleId", "module", "loc", "explanation"),
    }
)


def preferred_order(preferred: Sequence[str]) -> Callable[..., list[str]]:
    """Return a sortElements handler applying `create_order` with ``preferred``."""

    def sort_elements(elements: Sequence[str], ctx: PrintContext) -> list[str]:  # noqa: ARG001
        return create_order(elements, preferred)

    return sort_elements


# ------------------ joiners ------------------


def _join_with(separator: str) -> Callable[..., str]:
    def join_items(items: Sequence[Printed], ctx: PrintContext) -> str:  # noqa: ARG001
        return separator.join(_text(item) for item in items)

    return join_items


def print_asset_table(items: Sequence[Printed], ctx: PrintContext) -> str | None:
    """Render asset rows as a table headed by bold column titles."""
    if not items:
        return None
    header: list[str] = [
        ctx.bold(title) if title else title
        for title in ("Asset", "Size", "Chunks", "", "", "Chunk Names")
    ]
    rows: list[list[str]] = [header]
    rows.extend(item if isinstance(item, list) else [_text(item)] for item in items)
    return table(rows, "rrrlll")


ASSET_ROW: Final[tuple[str, ...]] = (
    "name",
    "size",
    "chunks",
    "emitted",
    "isOverSizeLimit",
    "chunkNames",
)


def asset_row(elements: Sequence[Element], ctx: PrintContext) -> list[str]:  # noqa: ARG001
    """Return the table row of one asset."""
    contents: dict[str, str] = {e.element: _text(e.content) for e in elements}
    return [contents.get(column, "") for column in ASSET_ROW]


def _layout(line: Sequence[str], blocks: Sequence[str]) -> str | None:
    head: str = " ".join(part for part in line if part)
    tail: list[str] = [textwrap.indent(block, BLOCK_INDENT) for block in blocks if block]
    lines: list[str] = [head, *tail] if head else tail
    return "\n".join(lines) if lines else None


CHUNK_BLOCKS: Final[frozenset[str]] = frozenset(
    {"modules", "filteredModules", "rootModules", "filteredRootModules", "nonRootModules"}
)
MODULE_BLOCKS: Final[frozenset[str]] = frozenset(
    {"optimizationBailout", "reasons", "modules", "filteredModules"}
)


def join_chunk(elements: Sequence[Element], ctx: PrintContext) -> str | None:  # noqa: ARG001
    """Join a chunk on one line, followed by its modules on indented lines."""
    line: list[str] = [_text(e.content) for e in elements if e.element not in CHUNK_BLOCKS]
    blocks: list[str] = [_text(e.content) for e in elements if e.element in CHUNK_BLOCKS]
    return _layout(line, blocks)


def join_module(elements: Sequence[Element], ctx: PrintContext) -> str | None:
    """Join a module on one line, showing at most one of id, name and identifier.

    Once the id has been shown and equals the name, or a name has been shown,
    later name-like fields are dropped. Reasons, bailouts and nested modules
    follow on indented lines.
    """
    module: Mapping[str, Any] = ctx.node("module")
    has_name: bool = False
    line: list[str] = []
    blocks: list[str] = []
    for item in elements:
        if item.element == "id":
            if module.get("id") == module.get("name"):
                has_name = True
        elif item.element in ("name", "identifier"):
            if has_name:
                continue
            if item.content:
                has_name = True
        if item.element in MODULE_BLOCKS:
            blocks.append(_text(item.content))
        else:
            line.append(_text(item.content))
    return _layout(line, blocks)


def join_lines(elements: Sequence[Element], ctx: PrintContext) -> str | None:  # noqa: ARG001
    """Join non-empty elements on separate lines."""
    lines: list[str] = [_text(e.content) for e in elements if e.content]
    return "\n".join(lines) if lines else None


def join_one_line(elements: Sequence[Element], ctx: PrintContext) -> str | None:  # noqa: ARG001
    """Join non-empty elements with spaces."""
    parts: list[str] = [_text(e.content) for e in elements if e.content]
    return " ".join(parts) if parts else None


ITEMS_JOINERS: Final[Mapping[str, Callable[..., Any]]] = MappingProxyType(
    {
        "session.assets": print_asset_table,
        "session.errors": _join_with("\n\n"),
        "session.warnings": _join_with("\n\n"),
        "asset.chunks": _join_with(", "),
        "asset.chunkNames": _join_with(", "),
        "module.chunks": _join_with(" "),
        "chunkGroup.assets": _join_with(" "),
        "chunk.files": _join_with(" "),
    }
)

ELEMENT_JOINERS: Final[Mapping[str, Callable[..., Any]]] = MappingProxyType(
    {
        "session": join_lines,
        "session.assets[].asset": asset_row,
        "chunkGroup": join_one_line,
        "chunk": join_chunk,
        "module": join_module,
    }
)


def register_printers(registry: HookRegistry) -> None:
    """Register the default print, sortElements, printItems and printElements handlers."""
    for type_path, printer in SIMPLE_PRINTERS.items():
        registry.register(HookKind.PRINT, type_path, printer, plugin=PLUGIN_NAME)
    for type_path, item_name in PRINT_ITEM_NAMES.items():
        registry.register(
            HookKind.GET_ITEM_NAME, type_path, constant_item_name(item_name), plugin=PLUGIN_NAME
        )
    for type_path, preferred in PREFERRED_ORDERS.items():
        registry.register(
            HookKind.SORT_ELEMENTS, type_path, preferred_order(preferred), plugin=PLUGIN_NAME
        )
    for type_path, joiner in ITEMS_JOINERS.items():
        registry.register(HookKind.PRINT_ITEMS, type_path, joiner, plugin=PLUGIN_NAME)
    for type_path, joiner in ELEMENT_JOINERS.items():
        registry.register(HookKind.PRINT_ELEMENTS, type_path, joiner, plugin=PLUGIN_NAME)
