# topmark:header:start
#
#   project      : BuildStats
#   file         : protocols.py
#   file_relpath : src/buildstats/session/protocols.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only data-access interface consumed by the extractors.

A build tool exposes its result through this protocol; the extraction
pipeline never computes graphs itself. All methods are pure reads: calling
them twice with the same arguments returns the same answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from buildstats.session.model import (
        BundleGroup,
        DeploymentGroup,
        ItemId,
        OutputArtifact,
        Reference,
        WorkUnit,
    )


class BuildResult(Protocol):
    """One build session and the graphs derived from it."""

    # --- session facts ---

    @property
    def hash(self) -> str | None:
        """Content hash of the whole build."""
        ...

    @property
    def version(self) -> str | None:
        """Version of the build tool that produced the result."""
        ...

    @property
    def name(self) -> str | None:
        """Session name (used to label child sessions)."""
        ...

    @property
    def start_time(self) -> int:
        """Build start, in milliseconds since the epoch."""
        ...

    @property
    def end_time(self) -> int:
        """Build end, in milliseconds since the epoch."""
        ...

    @property
    def public_path(self) -> str | None:
        """Public URL prefix of the output files."""
        ...

    @property
    def output_path(self) -> str | None:
        """Output directory."""
        ...

    @property
    def needs_additional_pass(self) -> bool:
        """Whether the build asked for another pass."""
        ...

    def errors(self) -> Sequence[str]:
        """Return session-level error messages."""
        ...

    def warnings(self) -> Sequence[str]:
        """Return session-level warning messages."""
        ...

    def children(self) -> Sequence[BuildResult]:
        """Return nested child sessions."""
        ...

    # --- iteration ---

    def assets(
        self, key: Callable[[OutputArtifact], Any] | None = None
    ) -> Sequence[OutputArtifact]:
        """Return all output files, optionally sorted by ``key``."""
        ...

    def bundle_groups(
        self, key: Callable[[BundleGroup], Any] | None = None
    ) -> Sequence[BundleGroup]:
        """Return all bundle groups, optionally sorted by ``key``."""
        ...

    def work_units(self, key: Callable[[WorkUnit], Any] | None = None) -> Sequence[WorkUnit]:
        """Return all work units, optionally sorted by ``key``."""
        ...

    def entrypoints(self) -> Mapping[str, DeploymentGroup]:
        """Return the entry-point deployment groups by name."""
        ...

    def named_groups(self) -> Mapping[str, DeploymentGroup]:
        """Return every named deployment group by name."""
        ...

    # --- derived facts ---

    def is_emitted(self, asset: OutputArtifact) -> bool:
        """Return True if ``asset`` was written in this build."""
        ...

    def is_over_size_limit(self, asset: OutputArtifact) -> bool:
        """Return True if ``asset`` exceeds the configured size budget."""
        ...

    def is_built(self, unit: WorkUnit) -> bool:
        """Return True if ``unit`` was (re)built in this build."""
        ...

    def used_exports(self, unit: WorkUnit) -> bool | Sequence[str] | None:
        """Return the used exports: a name list, True/False for all/none, None if unknown."""
        ...

    def optimization_bailout(self, unit: WorkUnit) -> Sequence[str]:
        """Return the reasons optimizations were skipped for ``unit``."""
        ...

    # --- graph queries ---

    def unit_id(self, unit: WorkUnit) -> ItemId | None:
        """Return the id assigned to ``unit``."""
        ...

    def issuer(self, unit: WorkUnit) -> WorkUnit | None:
        """Return the unit that first requested ``unit``."""
        ...

    def incoming(self, unit: WorkUnit) -> Sequence[Reference]:
        """Return the references pointing at ``unit``."""
        ...

    def depth(self, unit: WorkUnit) -> int | None:
        """Return the shortest distance from an entry point."""
        ...

    def pre_order_index(self, unit: WorkUnit) -> int | None:
        """Return the pre-order traversal index."""
        ...

    def post_order_index(self, unit: WorkUnit) -> int | None:
        """Return the post-order traversal index."""
        ...

    def groups_of_unit(self, unit: WorkUnit) -> Sequence[BundleGroup]:
        """Return the bundle groups containing ``unit``, ordered by id."""
        ...

    def units_of_group(self, group: BundleGroup) -> Sequence[WorkUnit]:
        """Return the work units contained in ``group``."""
        ...

    def root_units_of_group(self, group: BundleGroup) -> Sequence[WorkUnit]:
        """Return the units of ``group`` not referenced from inside the group."""
        ...

    def child_groups(self, group: DeploymentGroup) -> Mapping[str, Sequence[DeploymentGroup]]:
        """Return the child deployment groups of ``group`` by order key."""
        ...
