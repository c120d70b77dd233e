# topmark:header:start
#
#   project      : BuildStats
#   file         : memory.py
#   file_relpath : src/buildstats/session/memory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory build result.

Plain-data implementation of the
[`BuildResult`][buildstats.session.protocols.BuildResult] protocol.

`InMemoryBuildResult` stores precomputed facts and answers graph queries by
lookup. Build tools that already hold their graphs in Python objects can fill
one in; tests use it to describe small builds.

Example:
    ```python
    result = InMemoryBuildResult(hash="4f2a", start_time=0, end_time=120)
    main = result.add_bundle_group(BundleGroup(id=0, names=("main",), files=("main.js",)))
    result.add_asset(OutputArtifact("main.js", 120), emitted=True)
    index = result.add_work_unit(
        WorkUnit("/src/index.js", "./src/index.js", sizes={"javascript": 120}),
        unit_id=0,
        groups=[main],
    )
    result.add_entrypoint(DeploymentGroup("main", chunks=(main,)))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from buildstats.session.model import id_sort_key

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from buildstats.session.model import (
        BundleGroup,
        DeploymentGroup,
        ItemId,
        OutputArtifact,
        Reference,
        WorkUnit,
    )


def _sorted(items: Iterable[Any], key: Callable[[Any], Any] | None) -> list[Any]:
    return sorted(items, key=key) if key is not None else list(items)


@dataclass(eq=False)
class InMemoryBuildResult:
    """Build result backed by plain dictionaries.

    Attributes:
        hash (str | None): Content hash of the build.
        version (str | None): Version of the build tool.
        name (str | None): Session name (labels child sessions).
        start_time (int): Build start in ms.
        end_time (int): Build end in ms.
        public_path (str | None): Public URL prefix.
        output_path (str | None): Output directory.
        needs_additional_pass (bool): Whether another pass was requested.
    """

    hash: str | None = None
    version: str | None = None
    name: str | None = None
    start_time: int = 0
    end_time: int = 0
    public_path: str | None = None
    output_path: str | None = None
    needs_additional_pass: bool = False

    _assets: list[OutputArtifact] = field(default_factory=list, repr=False)
    _emitted: set[str] = field(default_factory=set, repr=False)
    _over_limit: set[str] = field(default_factory=set, repr=False)
    _groups: list[BundleGroup] = field(default_factory=list, repr=False)
    _units: list[WorkUnit] = field(default_factory=list, repr=False)
    _unit_ids: dict[WorkUnit, ItemId] = field(default_factory=dict, repr=False)
    _issuers: dict[WorkUnit, WorkUnit] = field(default_factory=dict, repr=False)
    _incoming: dict[WorkUnit, list[Reference]] = field(default_factory=dict, repr=False)
    _depths: dict[WorkUnit, int] = field(default_factory=dict, repr=False)
    _pre_order: dict[WorkUnit, int] = field(default_factory=dict, repr=False)
    _post_order: dict[WorkUnit, int] = field(default_factory=dict, repr=False)
    _group_units: dict[BundleGroup, list[WorkUnit]] = field(default_factory=dict, repr=False)
    _group_roots: dict[BundleGroup, list[WorkUnit]] = field(default_factory=dict, repr=False)
    _built: set[WorkUnit] = field(default_factory=set, repr=False)
    _used_exports: dict[WorkUnit, bool | tuple[str, ...] | None] = field(
        default_factory=dict, repr=False
    )
    _bailouts: dict[WorkUnit, list[str]] = field(default_factory=dict, repr=False)
    _entrypoints: dict[str, DeploymentGroup] = field(default_factory=dict, repr=False)
    _named_groups: dict[str, DeploymentGroup] = field(default_factory=dict, repr=False)
    _children: list[InMemoryBuildResult] = field(default_factory=list, repr=False)
    _errors: list[str] = field(default_factory=list, repr=False)
    _warnings: list[str] = field(default_factory=list, repr=False)

    # --- population ---

    def add_asset(
        self,
        asset: OutputArtifact,
        *,
        emitted: bool = False,
        over_size_limit: bool = False,
    ) -> OutputArtifact:
        """Record an output file."""
        self._assets.append(asset)
        if emitted:
            self._emitted.add(asset.name)
        if over_size_limit:
            self._over_limit.add(asset.name)
        return asset

    def add_bundle_group(self, group: BundleGroup) -> BundleGroup:
        """Record a bundle group."""
        self._groups.append(group)
        self._group_units.setdefault(group, [])
        return group

    def add_work_unit(
        self,
        unit: WorkUnit,
        *,
        unit_id: ItemId | None = None,
        groups: Sequence[BundleGroup] = (),
        root_in: Sequence[BundleGroup] = (),
        issuer: WorkUnit | None = None,
        depth: int | None = None,
        pre_order_index: int | None = None,
        post_order_index: int | None = None,
        built: bool = True,
        used_exports: bool | Sequence[str] | None = None,
        optimization_bailout: Sequence[str] = (),
    ) -> WorkUnit:
        """Record a work unit and its graph facts.

        Args:
            unit: The unit.
            unit_id: Id assigned to the unit.
            groups: Bundle groups containing the unit.
            root_in: Subset of ``groups`` where the unit is a root.
            issuer: Unit that first requested this one.
            depth: Distance from an entry point.
            pre_order_index: Pre-order traversal index.
            post_order_index: Post-order traversal index.
            built: Whether the unit was built in this build.
            used_exports: Used exports (names, True/False, or None when unknown).
            optimization_bailout: Reasons optimizations were skipped.

        Returns:
            The recorded unit.
        """
        self._units.append(unit)
        if unit_id is not None:
            self._unit_ids[unit] = unit_id
        for group in groups:
            self._group_units.setdefault(group, []).append(unit)
        for group in root_in:
            self._group_roots.setdefault(group, []).append(unit)
        if issuer is not None:
            self._issuers[unit] = issuer
        if depth is not None:
            self._depths[unit] = depth
        if pre_order_index is not None:
            self._pre_order[unit] = pre_order_index
        if post_order_index is not None:
            self._post_order[unit] = post_order_index
        if built:
            self._built.add(unit)
        if used_exports is not None:
            self._used_exports[unit] = (
                used_exports if isinstance(used_exports, bool) else tuple(used_exports)
            )
        if optimization_bailout:
            self._bailouts[unit] = list(optimization_bailout)
        return unit

    def add_reference(self, target: WorkUnit, reference: Reference) -> Reference:
        """Record an incoming reference to ``target``."""
        self._incoming.setdefault(target, []).append(reference)
        return reference

    def add_entrypoint(self, group: DeploymentGroup) -> DeploymentGroup:
        """Record an entry point; entry points are also named groups."""
        self._entrypoints[group.name] = group
        self._named_groups[group.name] = group
        return group

    def add_named_group(self, group: DeploymentGroup) -> DeploymentGroup:
        """Record a named deployment group that is not an entry point."""
        self._named_groups[group.name] = group
        return group

    def add_child(self, child: InMemoryBuildResult) -> InMemoryBuildResult:
        """Record a nested child session."""
        self._children.append(child)
        return child

    def add_error(self, message: str) -> None:
        """Record a session-level error."""
        self._errors.append(message)

    def add_warning(self, message: str) -> None:
        """Record a session-level warning."""
        self._warnings.append(message)

    # --- BuildResult protocol ---

    def errors(self) -> Sequence[str]:
        return tuple(self._errors)

    def warnings(self) -> Sequence[str]:
        return tuple(self._warnings)

    def children(self) -> Sequence[InMemoryBuildResult]:
        return tuple(self._children)

    def assets(self, key: Callable[[OutputArtifact], Any] | None = None) -> list[OutputArtifact]:
        return _sorted(self._assets, key)

    def bundle_groups(self, key: Callable[[BundleGroup], Any] | None = None) -> list[BundleGroup]:
        return _sorted(self._groups, key)

    def work_units(self, key: Callable[[WorkUnit], Any] | None = None) -> list[WorkUnit]:
        return _sorted(self._units, key)

    def entrypoints(self) -> Mapping[str, DeploymentGroup]:
        return dict(self._entrypoints)

    def named_groups(self) -> Mapping[str, DeploymentGroup]:
        return dict(self._named_groups)

    def is_emitted(self, asset: OutputArtifact) -> bool:
        return asset.name in self._emitted

    def is_over_size_limit(self, asset: OutputArtifact) -> bool:
        return asset.name in self._over_limit

    def is_built(self, unit: WorkUnit) -> bool:
        return unit in self._built

    def used_exports(self, unit: WorkUnit) -> bool | Sequence[str] | None:
        return self._used_exports.get(unit)

    def optimization_bailout(self, unit: WorkUnit) -> Sequence[str]:
        return tuple(self._bailouts.get(unit, ()))

    def unit_id(self, unit: WorkUnit) -> ItemId | None:
        return self._unit_ids.get(unit)

    def issuer(self, unit: WorkUnit) -> WorkUnit | None:
        return self._issuers.get(unit)

    def incoming(self, unit: WorkUnit) -> Sequence[Reference]:
        return tuple(self._incoming.get(unit, ()))

    def depth(self, unit: WorkUnit) -> int | None:
        return self._depths.get(unit)

    def pre_order_index(self, unit: WorkUnit) -> int | None:
        return self._pre_order.get(unit)

    def post_order_index(self, unit: WorkUnit) -> int | None:
        return self._post_order.get(unit)

    def groups_of_unit(self, unit: WorkUnit) -> Sequence[BundleGroup]:
        groups = [g for g, units in self._group_units.items() if unit in units]
        return sorted(groups, key=lambda g: id_sort_key(g.id))

    def units_of_group(self, group: BundleGroup) -> Sequence[WorkUnit]:
        return tuple(self._group_units.get(group, ()))

    def root_units_of_group(self, group: BundleGroup) -> Sequence[WorkUnit]:
        return tuple(self._group_roots.get(group, ()))

    def child_groups(self, group: DeploymentGroup) -> Mapping[str, Sequence[DeploymentGroup]]:
        return dict(group.children)
