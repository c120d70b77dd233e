# topmark:header:start
#
#   project      : BuildStats
#   file         : factory.py
#   file_relpath : src/buildstats/extraction/factory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build a report tree by dispatching extract handlers per type path.

`ExtractionPipeline.create` has two behaviors depending on the data it is given:

Arrays (``list`` / ``tuple``):
    1. Filter handlers registered for the array path may drop items (a handler
       returning ``False`` drops the item).
    2. Each remaining item gets an item name from the ``getItemName`` hook
       registered for ``<path>[]``. Its type path becomes ``<path>[].<name>``
       (``<path>[]`` when no name is bound).
    3. The ``getItemFactory`` hook may hand the item to another pipeline (for
       example a child report with its own options); otherwise this pipeline
       builds it.
    4. A ``merge`` handler registered for the array path may collapse the list
       into a mapping. The filtered count is computed before merging.

Anything else:
    A fresh ``dict`` is passed to every open extract handler for the path.
    Handlers write fields into it and may call `create` again for nested
    arrays at ``<path>.<field>``.

Extract handlers are called as
``handler(obj, data, ctx, options, factory) -> None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from buildstats.config.logging import get_logger
from buildstats.config.options import StatsOptions
from buildstats.constants import ARRAY_ITEM_SUFFIX
from buildstats.hooks.kinds import HookKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildstats.config.logging import BuildStatsLogger
    from buildstats.extraction.context import ExtractionContext
    from buildstats.hooks.registry import HookRegistry

logger: BuildStatsLogger = get_logger(__name__)


def is_array(data: Any) -> bool:
    """Return True if ``data`` is handled as an array by the pipelines."""
    return isinstance(data, (list, tuple))


class ExtractionPipeline:
    """Report tree builder bound to a registry and one options set.

    Args:
        registry (HookRegistry): Registry holding the extract-side handlers.
        options (StatsOptions | None): Options gating the handlers. Defaults to
            empty options, which leaves only unconditional handlers open.
    """

    def __init__(self, registry: HookRegistry, options: StatsOptions | None = None) -> None:
        self._registry = registry
        self._options = options if options is not None else StatsOptions()

    def __repr__(self) -> str:
        return f"ExtractionPipeline({self._registry!r}, {self._options!r})"

    @property
    def registry(self) -> HookRegistry:
        """Return the registry this pipeline dispatches through."""
        return self._registry

    @property
    def options(self) -> StatsOptions:
        """Return the options gating this pipeline."""
        return self._options

    def child(self, options: StatsOptions) -> ExtractionPipeline:
        """Return a pipeline sharing this registry but gated by ``options``."""
        return ExtractionPipeline(self._registry, options)

    # --- public entry points ---

    def create(self, type_path: str, data: Any, ctx: ExtractionContext) -> Any:
        """Build the report node for ``data`` at ``type_path``.

        Args:
            type_path (str): Type path of the node (``session``, ``session.assets``).
            data (Any): Source data; lists and tuples are handled as arrays.
            ctx (ExtractionContext): Context of the caller; rebound to ``type_path``.

        Returns:
            Any: A ``dict`` for objects; a ``list`` (or a merged mapping) for arrays.
        """
        if is_array(data):
            node, _ = self._create_array(type_path, data, ctx)
            return node
        return self._create_object(type_path, data, ctx)

    def create_counted(
        self,
        type_path: str,
        items: Sequence[Any],
        ctx: ExtractionContext,
    ) -> tuple[Any, int]:
        """Build an array node and return it with the number of filtered items.

        The count (requested minus produced) is taken before any merge handler
        runs, since merging loses the item count.

        Returns:
            tuple[Any, int]: The node and the number of items dropped by filters.
        """
        return self._create_array(type_path, items, ctx)

    # --- internals ---

    def _create_object(self, type_path: str, data: Any, ctx: ExtractionContext) -> dict[str, Any]:
        obj: dict[str, Any] = {}
        logger.trace("extract '%s'", type_path)
        self._registry.call_all(
            HookKind.EXTRACT,
            type_path,
            obj,
            data,
            ctx.at(type_path),
            self._options,
            self,
            options=self._options,
        )
        return obj

    def _create_array(
        self,
        type_path: str,
        items: Sequence[Any],
        ctx: ExtractionContext,
    ) -> tuple[Any, int]:
        array_ctx: ExtractionContext = ctx.at(type_path)
        kept: list[Any] = [item for item in items if self._keep(type_path, item, array_ctx)]

        element_path: str = f"{type_path}{ARRAY_ITEM_SUFFIX}"
        nodes: list[Any] = []
        for index, item in enumerate(kept):
            name: str | None = self._registry.call_first(
                HookKind.GET_ITEM_NAME,
                element_path,
                item,
                array_ctx,
                options=self._options,
            )
            item_path: str = f"{element_path}.{name}" if name else element_path
            item_ctx: ExtractionContext = array_ctx.for_item(item_path, index, name, item)
            factory: ExtractionPipeline = (
                self._registry.call_first(
                    HookKind.GET_ITEM_FACTORY,
                    item_path,
                    item,
                    item_ctx,
                    self._options,
                    self,
                    options=self._options,
                )
                or self
            )
            nodes.append(factory.create(item_path, item, item_ctx))

        filtered: int = len(items) - len(nodes)
        if filtered:
            logger.debug("'%s': %d of %d items filtered", type_path, filtered, len(items))

        merged: Any | None = self._registry.call_first(
            HookKind.MERGE,
            type_path,
            nodes,
            array_ctx,
            options=self._options,
        )
        return (nodes if merged is None else merged), filtered

    def _keep(self, type_path: str, item: Any, ctx: ExtractionContext) -> bool:
        return all(
            verdict is not False
            for verdict in self._registry.call_each(
                HookKind.FILTER,
                type_path,
                item,
                ctx,
                self._options,
                options=self._options,
            )
        )
