# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/catalog/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default field catalog and the process-wide registry.

`register_default_catalog` writes the built-in extractors, filters and
printers into a registry. `default_registry` builds a registry once per
process: built-ins first, then plugins discovered through the
``buildstats.plugins`` entry point group, then freezes it.

A plugin entry point resolves to a callable taking the registry:

```toml
[project.entry-points."buildstats.plugins"]
my_fields = "my_package.stats:register"
```

Notes:
    * Built-in registrations come first, so plugin handlers registered for
      the same path run after them (extract) or only when the built-ins
      return ``None`` (print, getItemName, ...).
    * A plugin that fails to load or to register is logged and skipped.
"""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any, Final

from buildstats.catalog.extractors import register_extractors
from buildstats.catalog.filters import register_filters
from buildstats.catalog.printers import register_printers
from buildstats.config.logging import get_logger
from buildstats.hooks.registry import HookRegistry

if TYPE_CHECKING:
    from buildstats.config.logging import BuildStatsLogger

logger: BuildStatsLogger = get_logger(__name__)

ENTRYPOINT_GROUP: Final[str] = "buildstats.plugins"


def register_default_catalog(registry: HookRegistry) -> HookRegistry:
    """Register the built-in handlers into ``registry`` and return it."""
    register_extractors(registry)
    register_filters(registry)
    register_printers(registry)
    logger.debug("Default catalog registered into '%s' (%d handlers)", registry.name, len(registry))
    return registry


def register_entry_point_plugins(registry: HookRegistry) -> int:
    """Let every ``buildstats.plugins`` entry point register into ``registry``.

    Returns:
        int: Number of plugins applied.
    """
    try:
        eps = entry_points()
    except Exception:
        logger.exception("Failed to read entry points")
        return 0

    candidates: EntryPoints = eps.select(group=ENTRYPOINT_GROUP)
    applied: int = 0
    for ep in candidates:
        try:
            register: Any = ep.load()
        except Exception:
            logger.exception("Failed loading stats plugin from entry point %s", ep.name)
            continue
        if not callable(register):
            logger.warning("Entry point %s is not callable: %r", ep.name, register)
            continue
        try:
            register(registry)
        except Exception:
            logger.exception("Stats plugin %s failed to register", ep.name)
            continue
        applied += 1
        logger.debug("Applied stats plugin '%s'", ep.name)
    return applied


@lru_cache(maxsize=1)
def default_registry() -> HookRegistry:
    """Return the process-wide, frozen registry (built on first use)."""
    registry = HookRegistry(name="default")
    register_default_catalog(registry)
    register_entry_point_plugins(registry)
    return registry.freeze()


__all__ = [
    "ENTRYPOINT_GROUP",
    "default_registry",
    "register_default_catalog",
    "register_entry_point_plugins",
]
