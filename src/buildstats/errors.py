# topmark:header:start
#
#   project      : BuildStats
#   file         : errors.py
#   file_relpath : src/buildstats/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for BuildStats.

Usage:
    The pipelines raise `HandlerError` when a registered extractor or printer
    fails; the original exception is chained (``raise ... from exc``) so the
    traceback still points at the offending handler. Nothing inside the
    pipelines catches it: a failing handler aborts the whole request because
    consumers assume a complete report tree.

    `ConfigurationError` describes an options value with an unexpected shape.
    The options layer normally degrades instead of raising it (see
    [`MutableStatsOptions.freeze`][buildstats.config.options.MutableStatsOptions.freeze]);
    it is raised only on explicit request (``strict=True``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildstats.hooks.kinds import HookKind


class BuildStatsError(Exception):
    """Base class for all BuildStats errors."""


class HandlerError(BuildStatsError):
    """A registered hook handler raised while building or printing a report.

    Attributes:
        kind (HookKind): Hook kind being dispatched when the handler failed.
        type_path (str): Type path the handler was invoked for.
    """

    def __init__(self, kind: HookKind, type_path: str, cause: BaseException) -> None:
        self.kind = kind
        self.type_path = type_path
        super().__init__(
            f"{kind.value} handler for '{type_path}' failed: {type(cause).__name__}: {cause}"
        )


class ConfigurationError(BuildStatsError):
    """An options value has an unexpected shape."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Invalid value for option '{key}': {message}")


class RegistryFrozenError(BuildStatsError):
    """A handler was registered after the registry was frozen."""
