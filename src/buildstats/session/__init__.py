# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/session/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data-access layer between a build tool and the report pipelines.

- `BuildResult`: the read-only protocol the extractors consume.
- `model`: plain entity types (assets, bundle groups, work units, ...).
- `InMemoryBuildResult`: a plain-data implementation of the protocol.
"""

from __future__ import annotations

from buildstats.session.memory import InMemoryBuildResult
from buildstats.session.model import (
    BundleGroup,
    DeploymentGroup,
    ItemId,
    OutputArtifact,
    Reference,
    WorkUnit,
    id_sort_key,
)
from buildstats.session.protocols import BuildResult

__all__ = [
    "BuildResult",
    "BundleGroup",
    "DeploymentGroup",
    "InMemoryBuildResult",
    "ItemId",
    "OutputArtifact",
    "Reference",
    "WorkUnit",
    "id_sort_key",
]
