# topmark:header:start
#
#   project      : BuildStats
#   file         : printer.py
#   file_relpath : src/buildstats/printing/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render a report tree as text by dispatching print handlers per type path.

`PrintingPipeline.print` resolves a node in this order:

1. A ``print`` handler for the path: the first non-``None`` result wins.
2. Arrays: every item is printed at its item path (``<path>[].<name>``) and
   the ``printItems`` hook joins the results. The default joins non-empty
   items with newlines.
3. Mappings: the keys are reordered by the ``sortElements`` hook, every
   field is printed at ``<path>.<field>`` and the ``printElements`` hook
   joins the resulting `Element` pairs. The default joins non-empty contents
   with spaces. A ``printElements`` handler may return a row (``list[str]``)
   for an enclosing table.
4. Scalars without a print handler render as ``None``.

``None`` at any level drops that subtree from its parent's output without
affecting siblings.

Handlers are called as:
    - print: ``handler(value, ctx, printer) -> str | None``
    - sortElements: ``handler(elements, ctx) -> list[str] | None``
    - printItems: ``handler(items, ctx) -> str | None``
    - printElements: ``handler(elements, ctx) -> str | list[str] | None``
    - getItemName: ``handler(item, ctx) -> str | None``
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from buildstats.config.logging import get_logger
from buildstats.config.options import StatsOptions
from buildstats.constants import ARRAY_ITEM_SUFFIX
from buildstats.extraction.factory import is_array
from buildstats.hooks.kinds import HookKind
from buildstats.printing.context import PrintContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildstats.config.logging import BuildStatsLogger
    from buildstats.hooks.registry import HookRegistry

logger: BuildStatsLogger = get_logger(__name__)

# A printed node: text, a table row, or nothing.
Printed = Union[str, "list[str]", None]


@dataclass(frozen=True)
class Element:
    """One printed field of a mapping node.

    Attributes:
        element (str): Field name (or pseudo-element such as ``"separator!"``).
        content (str | list[str] | None): Printed field, or None when suppressed.
    """

    element: str
    content: Printed


def _as_text(content: Printed) -> str:
    if isinstance(content, list):
        return " ".join(cell for cell in content if cell)
    return content or ""


def default_print_items(items: Sequence[Printed]) -> str | None:
    """Join rendered items with newlines; None when nothing remains."""
    lines: list[str] = [_as_text(item) for item in items if item]
    return "\n".join(lines) if lines else None


def default_print_elements(elements: Sequence[Element]) -> str | None:
    """Join non-empty element contents with spaces; None when nothing remains."""
    parts: list[str] = [_as_text(e.content) for e in elements if e.content]
    return " ".join(parts) if parts else None


class PrintingPipeline:
    """Text renderer bound to a registry and one options set.

    Args:
        registry (HookRegistry): Registry holding the print-side handlers.
        options (StatsOptions | None): Options consulted by gates and for colors.
    """

    def __init__(self, registry: HookRegistry, options: StatsOptions | None = None) -> None:
        self._registry = registry
        self._options = options if options is not None else StatsOptions()

    def __repr__(self) -> str:
        return f"PrintingPipeline({self._registry!r}, {self._options!r})"

    @property
    def registry(self) -> HookRegistry:
        """Return the registry this pipeline dispatches through."""
        return self._registry

    @property
    def options(self) -> StatsOptions:
        """Return the options of this pipeline."""
        return self._options

    def create_context(self, type_path: str) -> PrintContext:
        """Return a fresh print context for a top-level call at ``type_path``."""
        return PrintContext.create(self._options, type_path=type_path)

    def print(self, type_path: str, node: Any, ctx: PrintContext | None = None) -> Printed:
        """Render ``node`` at ``type_path``.

        Args:
            type_path (str): Type path of the node (``session``, ``session.assets``).
            node (Any): Report node.
            ctx (PrintContext | None): Context of the caller. ``None`` starts a
                top-level call with a new context.

        Returns:
            str | list[str] | None: Rendered text, a table row, or None.
        """
        ctx = self.create_context(type_path) if ctx is None else ctx.at(type_path)
        logger.trace("print '%s'", type_path)

        printed: Printed = self._registry.call_first(
            HookKind.PRINT, type_path, node, ctx, self, options=self._options
        )
        if printed is not None:
            return printed
        if is_array(node):
            return self._print_array(type_path, node, ctx)
        if isinstance(node, Mapping):
            return self._print_mapping(type_path, node, ctx)
        return None

    def print_each(
        self,
        type_path: str,
        items: Sequence[Any],
        ctx: PrintContext,
    ) -> list[Printed]:
        """Render every item of an array at its item path, without joining.

        Returns:
            list[str | list[str] | None]: One entry per item, in order.
        """
        array_ctx: PrintContext = ctx.at(type_path)
        element_path: str = f"{type_path}{ARRAY_ITEM_SUFFIX}"
        rendered: list[Printed] = []
        for item in items:
            name: str | None = self._registry.call_first(
                HookKind.GET_ITEM_NAME, element_path, item, array_ctx, options=self._options
            )
            item_path: str = f"{element_path}.{name}" if name else element_path
            rendered.append(self.print(item_path, item, array_ctx.for_item(item_path, name, item)))
        return rendered

    # --- internals ---

    def _print_array(self, type_path: str, items: Sequence[Any], ctx: PrintContext) -> Printed:
        rendered: list[Printed] = [item for item in self.print_each(type_path, items, ctx) if item]
        joined: Printed = self._registry.call_first(
            HookKind.PRINT_ITEMS, type_path, rendered, ctx, options=self._options
        )
        if joined is not None:
            return joined
        return default_print_items(rendered)

    def _print_mapping(self, type_path: str, node: Mapping[str, Any], ctx: PrintContext) -> Printed:
        order: list[str] = self._registry.call_waterfall(
            HookKind.SORT_ELEMENTS, type_path, list(node), ctx, options=self._options
        )
        elements: list[Element] = [
            Element(element, self.print(f"{type_path}.{element}", node.get(element), ctx))
            for element in order
        ]
        joined: Printed = self._registry.call_first(
            HookKind.PRINT_ELEMENTS, type_path, elements, ctx, options=self._options
        )
        if joined is not None:
            return joined
        return default_print_elements(elements)
