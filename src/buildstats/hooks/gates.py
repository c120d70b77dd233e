# topmark:header:start
#
#   project      : BuildStats
#   file         : gates.py
#   file_relpath : src/buildstats/hooks/gates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Gates deciding whether a registered handler runs for a given options set.

A gate is a tagged variant:

- `Unconditional`: the handler always runs, even with empty options.
- `NamedOption`: the handler runs iff the named option is truthy.
- `EnabledOption`: the handler runs unless the named option is absent or
  false; empty nested settings (`{}`, `[]`) still enable it.

Example:
    ```python
    registry.register(HookKind.EXTRACT, "asset", extract_name)  # ALWAYS
    registry.register(HookKind.EXTRACT, "asset", extract_limit, gate=NamedOption("performance"))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Union

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class Unconditional:
    """Gate that is always open."""

    def is_open(self, options: Mapping[str, object] | None) -> bool:  # noqa: ARG002
        """Return True."""
        return True

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class NamedOption:
    """Gate that is open iff ``options[name]`` is truthy.

    Attributes:
        name (str): Option name looked up in the options mapping.
    """

    name: str

    def is_open(self, options: Mapping[str, object] | None) -> bool:
        """Return True if the option is present and truthy."""
        if options is None:
            return False
        return bool(options.get(self.name))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class EnabledOption:
    """Gate that is open unless ``options[name]`` is missing, ``None`` or ``False``.

    Used for structured options whose empty value still means "on".

    Attributes:
        name (str): Option name looked up in the options mapping.
    """

    name: str

    def is_open(self, options: Mapping[str, object] | None) -> bool:
        """Return True if the option is set to anything but ``None`` or ``False``."""
        if options is None:
            return False
        value = options.get(self.name)
        return value is not None and value is not False

    def __str__(self) -> str:
        return f"{self.name}?"


Gate = Union[Unconditional, NamedOption, EnabledOption]

ALWAYS: Final[Unconditional] = Unconditional()


def gate_for(key: str | None) -> Gate:
    """Return the gate for an option key; ``None`` and ``"_"`` mean unconditional."""
    if key is None or key == "_":
        return ALWAYS
    return NamedOption(key)
