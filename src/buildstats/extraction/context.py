# topmark:header:start
#
#   project      : BuildStats
#   file         : context.py
#   file_relpath : src/buildstats/extraction/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-node context handed to extract handlers.

`ExtractionContext` is frozen: descending into a field or an array element
derives a new context with `dataclasses.replace`, so a handler can never
change what its siblings see.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from buildstats.constants import ROOT_TYPE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from buildstats.session.protocols import BuildResult


@dataclass(frozen=True)
class ExtractionContext:
    """Scope of one extraction step.

    Attributes:
        result (BuildResult): Build session whose data is being extracted.
        start_time (int): Build start of ``result``, in ms.
        end_time (int): Build end of ``result``, in ms.
        type (str): Type path of the node being built.
        index (int | None): Position of the current element in its array, if any.
        parents (Mapping[str, Any]): Data of the enclosing elements, by item name.
    """

    result: BuildResult
    start_time: int
    end_time: int
    type: str = ROOT_TYPE
    index: int | None = None
    parents: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def for_result(cls, result: BuildResult, type_path: str = ROOT_TYPE) -> ExtractionContext:
        """Return the root context for ``result``."""
        return cls(
            result=result,
            start_time=result.start_time,
            end_time=result.end_time,
            type=type_path,
        )

    def at(self, type_path: str) -> ExtractionContext:
        """Return a context for ``type_path`` in the same scope."""
        if type_path == self.type:
            return self
        return replace(self, type=type_path)

    def for_item(
        self,
        type_path: str,
        index: int,
        name: str | None,
        data: Any,
    ) -> ExtractionContext:
        """Return the context of one array element.

        Args:
            type_path: Type path of the element (``session.assets[].asset``).
            index: Position of the element in its array.
            name: Item name bound to the element, if any.
            data: The element itself; recorded under ``name``.
        """
        parents = self.parents
        if name is not None:
            parents = MappingProxyType({**self.parents, name: data})
        return replace(self, type=type_path, index=index, parents=parents)

    def with_result(self, result: BuildResult) -> ExtractionContext:
        """Return a context scoped to another (child) build session."""
        if result is self.result:
            return self
        return replace(
            self,
            result=result,
            start_time=result.start_time,
            end_time=result.end_time,
        )
