# topmark:header:start
#
#   project      : BuildStats
#   file         : api.py
#   file_relpath : src/buildstats/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public BuildStats API (stable surface).

`Stats` wraps one build result and produces either the plain report tree
(`Stats.to_dict`) or its text rendering (`Stats.to_string`).

Options contract
----------------
Every entry point accepts the options in any of these shapes and freezes them
into an immutable [`StatsOptions`][buildstats.config.options.StatsOptions]
before running:

- ``None``: the ``normal`` preset;
- a preset name (``"minimal"``, ``"verbose"``, ...);
- a plain mapping mirroring the ``[stats]`` TOML table;
- a [`MutableStatsOptions`][buildstats.config.options.MutableStatsOptions] builder;
- a frozen `StatsOptions`.

```python
from buildstats.api import Stats

stats = Stats(build_result)
tree = stats.to_dict({"preset": "normal", "chunks": True})
print(stats.to_string("minimal"))
```

Notes:
    * The report tree is built fresh on every call; nothing is cached between
      calls because the build result may have changed.
    * A failing handler raises [`HandlerError`][buildstats.errors.HandlerError];
      no partial report is returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Union

from buildstats.catalog import default_registry
from buildstats.config.logging import get_logger
from buildstats.config.options import MutableStatsOptions, StatsOptions
from buildstats.config.presets import Preset
from buildstats.constants import BUILDSTATS_VERSION, ROOT_TYPE
from buildstats.extraction.context import ExtractionContext
from buildstats.extraction.factory import ExtractionPipeline
from buildstats.printing.printer import PrintingPipeline

if TYPE_CHECKING:
    from buildstats.config.logging import BuildStatsLogger
    from buildstats.hooks.registry import HookRegistry
    from buildstats.session.protocols import BuildResult

logger: BuildStatsLogger = get_logger(__name__)

OptionsLike = Union[StatsOptions, MutableStatsOptions, Mapping[str, Any], str, Preset, None]


def resolve_options(options: OptionsLike = None) -> StatsOptions:
    """Freeze any accepted options shape into `StatsOptions`.

    Raises:
        TypeError: If ``options`` has none of the accepted shapes.
    """
    if options is None:
        return MutableStatsOptions.from_preset(Preset.NORMAL).freeze()
    if isinstance(options, StatsOptions):
        return options
    if isinstance(options, MutableStatsOptions):
        return options.freeze()
    if isinstance(options, (str, Preset)):
        return MutableStatsOptions.from_preset(options).freeze()
    if isinstance(options, Mapping):
        return MutableStatsOptions.from_mapping(options).freeze()
    raise TypeError(f"Unsupported options type: {type(options).__name__}")


class Stats:
    """Report facade for one build result.

    Args:
        result (BuildResult): Build session to report on.
        registry (HookRegistry | None): Registry to dispatch through; defaults to
            the process-wide [`default_registry`][buildstats.catalog.default_registry].
    """

    def __init__(self, result: BuildResult, *, registry: HookRegistry | None = None) -> None:
        self._result = result
        self._registry = registry

    @property
    def result(self) -> BuildResult:
        """Return the wrapped build result."""
        return self._result

    @property
    def registry(self) -> HookRegistry:
        """Return the registry used for extraction and printing."""
        if self._registry is None:
            self._registry = default_registry()
        return self._registry

    def has_errors(self) -> bool:
        """Return True if the session reported errors."""
        return bool(self._result.errors())

    def has_warnings(self) -> bool:
        """Return True if the session reported warnings."""
        return bool(self._result.warnings())

    def to_dict(self, options: OptionsLike = None) -> dict[str, Any]:
        """Build the plain report tree.

        Args:
            options (OptionsLike): Report options (see the module docstring).

        Returns:
            dict[str, Any]: Nested dicts, lists and scalars.
        """
        resolved: StatsOptions = resolve_options(options)
        return self._extract(resolved)

    def to_string(self, options: OptionsLike = None) -> str:
        """Build the report tree and render it as text.

        Args:
            options (OptionsLike): Report options (see the module docstring).

        Returns:
            str: The rendered report; empty when nothing is printable.
        """
        resolved: StatsOptions = resolve_options(options)
        tree: dict[str, Any] = self._extract(resolved)
        printed = PrintingPipeline(self.registry, resolved).print(ROOT_TYPE, tree)
        if isinstance(printed, list):
            return " ".join(cell for cell in printed if cell)
        return printed or ""

    def _extract(self, options: StatsOptions) -> dict[str, Any]:
        pipeline = ExtractionPipeline(self.registry, options)
        ctx = ExtractionContext.for_result(self._result)
        logger.debug("Building report for session %r", self._result.name or ROOT_TYPE)
        return pipeline.create(ROOT_TYPE, self._result, ctx)


def version() -> str:
    """Return the installed BuildStats version."""
    return BUILDSTATS_VERSION


__all__ = [
    "OptionsLike",
    "Stats",
    "resolve_options",
    "version",
]
