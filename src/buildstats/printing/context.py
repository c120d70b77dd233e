# topmark:header:start
#
#   project      : BuildStats
#   file         : context.py
#   file_relpath : src/buildstats/printing/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Print context: colorizers, formatters and the current scope.

A `PrintContext` is created once per top-level print call with
`PrintContext.create`. Descending into a field or an array element derives a
new context that rebinds the scope (type path, enclosing nodes, kind) and
shares the helper callables of its parent.

Colors:
    ``colors`` comes from the options. ``False`` makes every colorizer the
    identity. ``True`` styles text with `click.style`. A mapping of color name
    to escape sequence overrides individual colors; colors missing from the
    mapping keep their `click.style` default.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from functools import partial
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final

import click

from buildstats.config.keys import Opt
from buildstats.constants import ROOT_TYPE
from buildstats.printing.sizes import format_size as default_format_size

if TYPE_CHECKING:
    from buildstats.config.options import StatsOptions

Colorizer = Callable[[str], str]

# Resets foreground color and intensity after an escape override.
COLOR_RESET: Final[str] = "\x1b[39m\x1b[22m"

# click.style arguments of the default palette.
COLOR_STYLES: Final[Mapping[str, Mapping[str, Any]]] = MappingProxyType(
    {
        "bold": {"bold": True},
        "yellow": {"fg": "yellow", "bold": True},
        "red": {"fg": "red", "bold": True},
        "green": {"fg": "green", "bold": True},
        "cyan": {"fg": "cyan", "bold": True},
        "magenta": {"fg": "magenta", "bold": True},
    }
)


def _plain(text: object) -> str:
    return str(text)


def _styled(text: object, **style: Any) -> str:
    return click.style(str(text), **style)


def _escaped(text: object, start: str) -> str:
    return f"{start}{text}{COLOR_RESET}"


def make_colorizer(name: str, colors: object) -> Colorizer:
    """Return the colorizer for color ``name`` under a ``colors`` setting."""
    if not colors:
        return _plain
    if isinstance(colors, Mapping) and isinstance(colors.get(name), str):
        return partial(_escaped, start=colors[name])
    return partial(_styled, **COLOR_STYLES[name])


@dataclass(frozen=True)
class PrintContext:
    """Helpers and scope for one print call.

    Attributes:
        bold (Colorizer): Bold text.
        yellow (Colorizer): Warnings, oversized assets, chunk ids.
        red (Colorizer): Errors and failures.
        green (Colorizer): Emitted and built items.
        cyan (Colorizer): Export information and requests.
        magenta (Colorizer): Module assets and referencing modules.
        size_formatter (Callable[[object], str]): Renders byte sizes.
        type (str): Type path of the node being printed.
        kind (str | None): Discriminator for shapes printed in several roles
            (``"Entrypoint"``, ``"Chunk Group"``).
        nodes (Mapping[str, Any]): Enclosing report nodes, by item name.
    """

    bold: Colorizer = _plain
    yellow: Colorizer = _plain
    red: Colorizer = _plain
    green: Colorizer = _plain
    cyan: Colorizer = _plain
    magenta: Colorizer = _plain
    size_formatter: Callable[[object], str] = default_format_size
    type: str = ROOT_TYPE
    kind: str | None = None
    nodes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(
        cls,
        options: StatsOptions | None = None,
        *,
        size_formatter: Callable[[object], str] = default_format_size,
        type_path: str = ROOT_TYPE,
    ) -> PrintContext:
        """Build the helpers for one print call from ``options``.

        Args:
            options (StatsOptions | None): Options; only ``colors`` is consulted.
            size_formatter (Callable[[object], str]): Size renderer to use.
            type_path (str): Type path of the node about to be printed.

        Returns:
            PrintContext: A context at ``type_path``.
        """
        colors: object = options.get(Opt.COLORS, False) if options is not None else False
        palette: dict[str, Colorizer] = {
            name: make_colorizer(name, colors) for name in COLOR_STYLES
        }
        return cls(**palette, size_formatter=size_formatter, type=type_path)

    # --- formatters ---

    def format_size(self, size: object) -> str:
        """Render a byte size."""
        return self.size_formatter(size)

    def format_chunk_id(self, chunk_id: object) -> str:
        """Render a bundle group id as ``{id}``."""
        return f"{{{self.yellow(str(chunk_id))}}}"

    def format_module_id(self, module_id: object) -> str:
        """Render a work unit id as ``[id]``."""
        return f"[{module_id}]"

    def format_flag(self, flag: str) -> str:
        """Render a flag as ``[flag]``."""
        return f"[{flag}]"

    # --- scope ---

    def node(self, item_name: str) -> Mapping[str, Any]:
        """Return the enclosing node bound to ``item_name`` (empty if none)."""
        value = self.nodes.get(item_name)
        return value if isinstance(value, Mapping) else MappingProxyType({})

    def at(self, type_path: str) -> PrintContext:
        """Return a context for ``type_path`` in the same scope."""
        if type_path == self.type:
            return self
        return replace(self, type=type_path)

    def for_item(self, type_path: str, name: str | None, node: Any) -> PrintContext:
        """Return the context of one array element, binding it under ``name``."""
        nodes = self.nodes
        if name is not None:
            nodes = MappingProxyType({**self.nodes, name: node})
        return replace(self, type=type_path, nodes=nodes)

    def with_kind(self, kind: str) -> PrintContext:
        """Return a context carrying the ``kind`` discriminator."""
        return replace(self, kind=kind)
