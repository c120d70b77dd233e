# topmark:header:start
#
#   project      : BuildStats
#   file         : registry.py
#   file_relpath : src/buildstats/hooks/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path-keyed, ordered multi-handler registry shared by both pipelines.

Handlers are registered per ``(kind, type path)`` and kept in arrival order.
A dispatch for a type path consults every *dotted suffix* of that path, most
specific first: invoking ``session.assets[].asset`` runs handlers registered
for ``session.assets[].asset``, ``assets[].asset`` and ``asset``. This lets a
catalog address a concept (``asset``, ``module``) wherever it is nested while
still allowing a precise override for one position.

Dispatch styles:
    - `HookRegistry.call_all`: run every open handler (extract).
    - `HookRegistry.call_each`: yield each handler result lazily (filter).
    - `HookRegistry.call_first`: return the first non-``None`` result
      (chain of responsibility: getItemName, getItemFactory, merge, print,
      printItems, printElements).
    - `HookRegistry.call_waterfall`: thread a value through all handlers
      (sortElements); a handler returning ``None`` keeps the current value.

No registration for a path is never an error: the dispatch simply has no
effect. Registrations are written once at startup; `HookRegistry.freeze` turns
the registry read-only so request processing can share it without locking.

Typical usage:
    ```python
    registry = HookRegistry()
    registry.register(HookKind.EXTRACT, "asset", extract_asset)
    registry.register(HookKind.PRINT, "asset.name", print_asset_name)
    registry.freeze()
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from buildstats.config.logging import get_logger
from buildstats.errors import HandlerError, RegistryFrozenError
from buildstats.hooks.gates import ALWAYS, Gate

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from buildstats.config.logging import BuildStatsLogger
    from buildstats.hooks.kinds import HookKind

logger: BuildStatsLogger = get_logger(__name__)


@lru_cache(maxsize=1024)
def type_levels(type_path: str) -> tuple[str, ...]:
    """Return the dotted suffixes of ``type_path``, most specific first.

    Example:
        >>> type_levels("session.assets[].asset")
        ('session.assets[].asset', 'assets[].asset', 'asset')
    """
    parts: list[str] = type_path.split(".")
    return tuple(".".join(parts[i:]) for i in range(len(parts)))


@dataclass(frozen=True)
class Registration:
    """One registered handler.

    Attributes:
        kind (HookKind): Hook kind the handler is registered for.
        type_path (str): Type path (or path suffix) the handler is registered for.
        handler (Callable[..., Any]): The handler itself.
        gate (Gate): Decides whether the handler runs for a given options set.
        plugin (str): Name of the plugin that registered the handler (diagnostics only).
    """

    kind: HookKind
    type_path: str
    handler: Callable[..., Any]
    gate: Gate = ALWAYS
    plugin: str = ""


class HookRegistry:
    """Ordered registry of hook handlers keyed by ``(kind, type path)``.

    Args:
        name (str): Label used in log messages.
    """

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._hooks: dict[tuple[HookKind, str], list[Registration]] = {}
        self._frozen = False

    def __len__(self) -> int:
        return sum(len(regs) for regs in self._hooks.values())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"HookRegistry({self.name!r}, {len(self)} handlers, {state})"

    @property
    def frozen(self) -> bool:
        """Return True once `freeze` has been called."""
        return self._frozen

    # --- registration ---

    def register(
        self,
        kind: HookKind,
        type_path: str,
        handler: Callable[..., Any],
        *,
        gate: Gate = ALWAYS,
        plugin: str = "",
    ) -> Registration:
        """Append ``handler`` to the handlers of ``(kind, type_path)``.

        Args:
            kind (HookKind): Hook kind.
            type_path (str): Type path or path suffix (``"asset"``, ``"session.assets"``).
            handler (Callable[..., Any]): Handler to register.
            gate (Gate): Gate deciding when the handler runs. Defaults to unconditional.
            plugin (str): Name of the registering plugin, for diagnostics.

        Returns:
            Registration: The stored registration.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {kind.value} handler for '{type_path}': "
                f"registry '{self.name}' is frozen"
            )
        registration = Registration(
            kind=kind,
            type_path=type_path,
            handler=handler,
            gate=gate,
            plugin=plugin,
        )
        self._hooks.setdefault((kind, type_path), []).append(registration)
        logger.debug(
            "Registered %s handler for '%s' (gate: %s, plugin: %s)",
            kind.value,
            type_path,
            gate,
            plugin or "-",
        )
        return registration

    def freeze(self) -> HookRegistry:
        """Make the registry read-only and return it."""
        self._frozen = True
        logger.debug("Registry '%s' frozen with %d handlers", self.name, len(self))
        return self

    # --- lookup ---

    def handlers(
        self,
        kind: HookKind,
        type_path: str,
        options: Mapping[str, object] | None = None,
    ) -> Iterator[Registration]:
        """Iterate the open registrations matching ``type_path``.

        Levels are visited most specific first; within a level registrations
        keep their arrival order. A registration is open when its gate accepts
        ``options``.

        Args:
            kind (HookKind): Hook kind.
            type_path (str): Full type path being dispatched.
            options (Mapping[str, object] | None): Options consulted by named gates;
                ``None`` closes every named gate.

        Yields:
            Registration: Matching, open registrations.
        """
        for level in type_levels(type_path):
            for registration in self._hooks.get((kind, level), ()):
                if registration.gate.is_open(options):
                    yield registration

    def has_handlers(self, kind: HookKind, type_path: str) -> bool:
        """Return True if any registration (open or not) matches ``type_path``."""
        return any((kind, level) in self._hooks for level in type_levels(type_path))

    # --- dispatch ---

    def call_each(
        self,
        kind: HookKind,
        type_path: str,
        *args: Any,
        options: Mapping[str, object] | None = None,
    ) -> Iterator[Any]:
        """Lazily run the open handlers for ``type_path`` and yield each result.

        Consumers that stop iterating early skip the remaining handlers.
        """
        for registration in self.handlers(kind, type_path, options):
            yield _invoke(registration, type_path, args)

    def call_all(
        self,
        kind: HookKind,
        type_path: str,
        *args: Any,
        options: Mapping[str, object] | None = None,
    ) -> None:
        """Run every open handler for ``type_path`` with ``args``; results are ignored."""
        for registration in self.handlers(kind, type_path, options):
            _invoke(registration, type_path, args)

    def call_first(
        self,
        kind: HookKind,
        type_path: str,
        *args: Any,
        options: Mapping[str, object] | None = None,
    ) -> Any | None:
        """Return the first non-``None`` result of the open handlers, or ``None``."""
        for registration in self.handlers(kind, type_path, options):
            result = _invoke(registration, type_path, args)
            if result is not None:
                return result
        return None

    def call_waterfall(
        self,
        kind: HookKind,
        type_path: str,
        value: Any,
        *args: Any,
        options: Mapping[str, object] | None = None,
    ) -> Any:
        """Thread ``value`` through the open handlers and return the final value.

        Each handler receives the current value followed by ``args``; returning
        ``None`` keeps the current value.
        """
        for registration in self.handlers(kind, type_path, options):
            result = _invoke(registration, type_path, (value, *args))
            if result is not None:
                value = result
        return value


def _invoke(registration: Registration, type_path: str, args: tuple[Any, ...]) -> Any:
    """Call a handler, wrapping failures in `HandlerError` with the dispatch context."""
    logger.trace(
        "%s '%s' -> handler registered for '%s'",
        registration.kind.value,
        type_path,
        registration.type_path,
    )
    try:
        return registration.handler(*args)
    except HandlerError:
        raise
    except Exception as exc:
        raise HandlerError(registration.kind, type_path, exc) from exc
