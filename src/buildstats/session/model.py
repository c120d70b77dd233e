# topmark:header:start
#
#   project      : BuildStats
#   file         : model.py
#   file_relpath : src/buildstats/session/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plain data types handed to the extractors by a build result.

These types describe *what* the build produced; relations between them
(which work units live in which bundle group, who imported whom, graph depth)
are answered by the data-access interface
[`BuildResult`][buildstats.session.protocols.BuildResult].

Entities compare by identity (``eq=False``) so a build result can key its
graph lookups on them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

ItemId = Union[int, str]


def id_sort_key(value: ItemId | None) -> tuple[int, Any]:
    """Sort key for mixed ids: numbers first (numerically), then strings, then ``None``."""
    if value is None:
        return (2, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


@dataclass(eq=False)
class OutputArtifact:
    """One emitted file.

    Attributes:
        name (str): Output file name relative to the output path.
        size (int): Size in bytes.
    """

    name: str
    size: int


@dataclass(eq=False)
class BundleGroup:
    """A set of work units emitted together as one or more output files.

    Attributes:
        id (ItemId | None): Bundle group id.
        names (tuple[str, ...]): Names of the group (empty for anonymous groups).
        files (tuple[str, ...]): Output files produced for the group.
        hash (str | None): Content hash.
        rendered (bool): Whether the group was rendered in this build.
        initial (bool): Whether the group is loaded initially.
        entry (bool): Whether the group carries the runtime.
    """

    id: ItemId | None
    names: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    hash: str | None = None
    rendered: bool = True
    initial: bool = True
    entry: bool = False

    @property
    def name(self) -> str | None:
        """Return the primary name, or None for anonymous groups."""
        return self.names[0] if self.names else None


@dataclass(eq=False)
class DeploymentGroup:
    """An ordered set of bundle groups delivered together (e.g. an entry point).

    Attributes:
        name (str): Group name.
        chunks (tuple[BundleGroup, ...]): Bundle groups, in load order.
        children (dict[str, tuple[DeploymentGroup, ...]]): Child groups by order key
            (``"preload"``, ``"prefetch"``).
    """

    name: str
    chunks: tuple[BundleGroup, ...] = ()
    children: dict[str, tuple[DeploymentGroup, ...]] = field(default_factory=dict)

    @property
    def files(self) -> list[str]:
        """Return the output files of all bundle groups, in order."""
        return [f for chunk in self.chunks for f in chunk.files]


@dataclass(eq=False)
class WorkUnit:
    """One source-level unit transformed by the build.

    Attributes:
        identifier (str): Unique, absolute identifier.
        name (str): Short human-readable name.
        sizes (dict[str, int]): Size in bytes per source type (``"javascript"``, ``"css"``).
        type (str): Unit type; ``"runtime"`` marks runtime code.
        cacheable (bool): Whether the build result can be cached.
        optional (bool): Whether every reference to the unit is optional.
        provided_exports (tuple[str, ...] | None): Exported symbols; None when unknown.
        assets (tuple[str, ...]): Extra files the unit emitted.
        errors (tuple[str, ...]): Error messages raised while building the unit.
        warnings (tuple[str, ...]): Warning messages raised while building the unit.
        modules (tuple[WorkUnit, ...] | None): Nested units (for concatenated units).
        source (str | None): Original source text.
    """

    identifier: str
    name: str
    sizes: dict[str, int] = field(default_factory=dict)
    type: str = "javascript/auto"
    cacheable: bool = True
    optional: bool = False
    provided_exports: tuple[str, ...] | None = None
    assets: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    modules: tuple[WorkUnit, ...] | None = None
    source: str | None = None

    @property
    def size(self) -> int:
        """Return the total size over all source types."""
        return sum(self.sizes.values())


@dataclass(eq=False)
class Reference:
    """An incoming reference to a work unit.

    Attributes:
        origin (WorkUnit | None): Referencing unit; None for entry references.
        type (str): Reference type (``"harmony import"``, ``"entry"``).
        user_request (str): Request string as written in the source.
        loc (str): Source location of the reference.
        explanation (str | None): Optional free-form explanation.
    """

    origin: WorkUnit | None
    type: str
    user_request: str = ""
    loc: str = ""
    explanation: str | None = None
