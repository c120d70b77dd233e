# topmark:header:start
#
#   project      : BuildStats
#   file         : options.py
#   file_relpath : src/buildstats/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Report options model.

This module defines:
    - `StatsOptions`: an immutable, read-only mapping used by the pipelines for
      one report request.
    - `MutableStatsOptions`: a mutable builder used while layering a preset,
      TOML values and explicit overrides; it can be frozen into `StatsOptions`
      and thawed back for edits.

Shapes:
    Most keys are plain toggles (booleans or small enums); extractors gated on
    an option run iff the value is truthy. Three keys carry structure and are
    normalized on `freeze`:

    - ``children``: ``bool`` | nested options (applied to every child report) |
      sequence of nested options (applied positionally).
    - ``colors``: ``bool`` | mapping of color name to an escape sequence override.
    - ``exclude_assets`` / ``exclude_modules``: one pattern or a sequence of
      gitignore-style patterns.

Degradation:
    An unexpected shape is a configuration problem, not a fatal error. Unless
    `MutableStatsOptions.freeze` is called with ``strict=True``, the value
    degrades (``children`` becomes ``True``, ``colors`` becomes ``True``,
    patterns become empty), a warning is logged, and a
    [`Diagnostic`][buildstats.core.diagnostics.Diagnostic] is recorded on the
    frozen options.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from buildstats.config.keys import PATTERN_KEYS, Opt
from buildstats.config.logging import get_logger
from buildstats.config.presets import Preset, preset_values
from buildstats.core.diagnostics import Diagnostic
from buildstats.errors import ConfigurationError

if TYPE_CHECKING:
    from buildstats.config.logging import BuildStatsLogger

logger: BuildStatsLogger = get_logger(__name__)

ChildrenSetting = Union[bool, "StatsOptions", "tuple[StatsOptions, ...]"]
ColorSetting = Union[bool, Mapping[str, str]]


# ------------------ Immutable runtime options ------------------


@dataclass(frozen=True, eq=False)
class StatsOptions(Mapping[str, Any]):
    """Immutable options for one report request.

    `StatsOptions` is a read-only `Mapping`, so extractor gates and handlers can
    treat it like the plain mapping the options came from. Structured keys are
    already normalized (see the module docstring).

    Attributes:
        values (Mapping[str, Any]): Normalized option values (read-only proxy).
        diagnostics (tuple[Diagnostic, ...]): Problems recovered from while freezing.
    """

    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    diagnostics: tuple[Diagnostic, ...] = ()

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"StatsOptions({dict(self.values)!r})"

    def is_enabled(self, key: str) -> bool:
        """Return True if option ``key`` is present and truthy."""
        return bool(self.values.get(key))

    @property
    def children(self) -> ChildrenSetting:
        """Return the normalized ``children`` setting (``False`` when unset)."""
        return self.values.get(Opt.CHILDREN, False)

    @property
    def colors(self) -> ColorSetting:
        """Return the normalized ``colors`` setting (``False`` when unset)."""
        return self.values.get(Opt.COLORS, False)

    @property
    def exclude_assets(self) -> tuple[str, ...]:
        """Return the asset exclusion patterns."""
        return self.values.get(Opt.EXCLUDE_ASSETS, ())

    @property
    def exclude_modules(self) -> tuple[str, ...]:
        """Return the module exclusion patterns."""
        return self.values.get(Opt.EXCLUDE_MODULES, ())

    def thaw(self) -> MutableStatsOptions:
        """Return a mutable builder seeded with these options."""
        values: dict[str, Any] = dict(self.values)
        children = values.get(Opt.CHILDREN)
        if isinstance(children, StatsOptions):
            values[Opt.CHILDREN] = children.thaw()
        elif isinstance(children, tuple):
            values[Opt.CHILDREN] = [c.thaw() for c in children]
        if isinstance(values.get(Opt.COLORS), Mapping):
            values[Opt.COLORS] = dict(values[Opt.COLORS])
        for key in PATTERN_KEYS:
            if key in values:
                values[key] = list(values[key])
        return MutableStatsOptions(values=values, diagnostics=list(self.diagnostics))


# ------------------ Mutable options builder ------------------


@dataclass
class MutableStatsOptions:
    """Mutable builder for `StatsOptions`.

    Typical usage:
        ```python
        opts = MutableStatsOptions.from_preset("normal")
        opts.update({"chunks": True, "children": [{"assets": True}]})
        frozen = opts.freeze()
        ```

    Attributes:
        values (dict[str, Any]): Raw option values; structured keys may hold any shape
            until `freeze` normalizes them.
        diagnostics (list[Diagnostic]): Diagnostics collected while building.
    """

    values: dict[str, Any] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def from_preset(cls, preset: Preset | str) -> MutableStatsOptions:
        """Return a builder seeded with the values of a named preset.

        Args:
            preset (Preset | str): Preset or preset name (``"normal"``, ``"verbose"``, ...).

        Returns:
            MutableStatsOptions: A new builder. An unknown preset name yields an empty
            builder carrying a warning diagnostic.
        """
        builder = cls()
        builder.apply_preset(preset)
        return builder

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> MutableStatsOptions:
        """Return a builder from a plain mapping (API dict or TOML table).

        A ``preset`` key is applied first; all other keys are layered on top.
        """
        builder = cls()
        builder.update(mapping)
        return builder

    def apply_preset(self, preset: Preset | str) -> MutableStatsOptions:
        """Layer the values of ``preset`` below the values already set."""
        name: str = str(preset).strip().lower().replace("_", "-")
        try:
            resolved = preset if isinstance(preset, Preset) else Preset(name)
        except ValueError:
            self._warn(Opt.PRESET, f"unknown preset {preset!r}; ignored")
            return self
        base = preset_values(resolved)
        base.update(self.values)
        self.values = base
        return self

    def set(self, key: str, value: Any) -> MutableStatsOptions:
        """Set a single option value and return ``self`` for chaining."""
        if key == Opt.PRESET:
            return self.apply_preset(value)
        self.values[key] = value
        return self

    def update(self, mapping: Mapping[str, Any]) -> MutableStatsOptions:
        """Apply every key of ``mapping``; a ``preset`` key is applied first."""
        if isinstance(mapping, StatsOptions):
            mapping = mapping.thaw().values
        if Opt.PRESET in mapping:
            self.apply_preset(mapping[Opt.PRESET])
        for key, value in mapping.items():
            if key != Opt.PRESET:
                self.values[key] = value
        return self

    def merge_with(self, other: MutableStatsOptions) -> MutableStatsOptions:
        """Return a new builder with ``other``'s values layered over ours."""
        merged = MutableStatsOptions(values=dict(self.values), diagnostics=list(self.diagnostics))
        merged.values.update(other.values)
        merged.diagnostics.extend(other.diagnostics)
        return merged

    def freeze(self, *, strict: bool = False) -> StatsOptions:
        """Normalize structured keys and return an immutable `StatsOptions`.

        Args:
            strict (bool): Raise instead of degrading when a value has an unexpected shape.

        Returns:
            StatsOptions: The frozen options.

        Raises:
            ConfigurationError: If ``strict`` is True and a value has an unexpected shape.
        """
        values: dict[str, Any] = dict(self.values)
        if Opt.CHILDREN in values:
            values[Opt.CHILDREN] = self._normalize_children(values[Opt.CHILDREN], strict)
        if Opt.COLORS in values:
            values[Opt.COLORS] = self._normalize_colors(values[Opt.COLORS], strict)
        for key in PATTERN_KEYS:
            if key in values:
                values[key] = self._normalize_patterns(key, values[key], strict)
        return StatsOptions(
            values=MappingProxyType(values),
            diagnostics=tuple(self.diagnostics),
        )

    # --- normalization helpers ---

    def _normalize_children(self, value: Any, strict: bool) -> ChildrenSetting:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, StatsOptions):
            return value
        if isinstance(value, MutableStatsOptions):
            return value.freeze(strict=strict)
        if isinstance(value, Mapping):
            return MutableStatsOptions.from_mapping(value).freeze(strict=strict)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            per_child: list[StatsOptions] = []
            for index, item in enumerate(value):
                if isinstance(item, StatsOptions):
                    per_child.append(item)
                elif isinstance(item, MutableStatsOptions):
                    per_child.append(item.freeze(strict=strict))
                elif isinstance(item, Mapping):
                    per_child.append(MutableStatsOptions.from_mapping(item).freeze(strict=strict))
                else:
                    self._problem(
                        Opt.CHILDREN,
                        strict,
                        f"entry {index} is {type(item).__name__}, expected a mapping; "
                        "falling back to 'true'",
                    )
                    return True
            return tuple(per_child)
        self._problem(
            Opt.CHILDREN,
            strict,
            f"expected bool, mapping or sequence, got {type(value).__name__}; "
            "falling back to 'true'",
        )
        return True

    def _normalize_colors(self, value: Any, strict: bool) -> ColorSetting:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, Mapping):
            overrides: dict[str, str] = {}
            for name, seq in value.items():
                if isinstance(seq, str):
                    overrides[str(name)] = seq
                else:
                    self._problem(
                        Opt.COLORS,
                        strict,
                        f"override for {name!r} is {type(seq).__name__}, expected str; ignored",
                    )
            return MappingProxyType(overrides)
        self._problem(
            Opt.COLORS,
            strict,
            f"expected bool or mapping, got {type(value).__name__}; falling back to 'true'",
        )
        return True

    def _normalize_patterns(self, key: str, value: Any, strict: bool) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, Sequence) and all(isinstance(v, str) for v in value):
            return tuple(value)
        self._problem(key, strict, "expected a pattern or a list of patterns; ignored")
        return ()

    def _problem(self, key: str, strict: bool, message: str) -> None:
        if strict:
            raise ConfigurationError(key, message)
        self._warn(key, message)

    def _warn(self, key: str, message: str) -> None:
        diagnostic = Diagnostic(key=key, message=message)
        logger.warning("%s", diagnostic)
        self.diagnostics.append(diagnostic)
