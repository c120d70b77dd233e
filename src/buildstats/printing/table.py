# topmark:header:start
#
#   project      : BuildStats
#   file         : table.py
#   file_relpath : src/buildstats/printing/table.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render rows of cells as an aligned text table.

Column widths are measured on visible text: ANSI escape sequences added by
colorizers do not count.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

import click

from buildstats.constants import DEFAULT_TABLE_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Sequence

# Matches the SGR sequences produced by `click.style` and by escape overrides.
_ANSI_RE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


def visible_width(text: str) -> int:
    """Return the printed width of ``text`` (escape sequences excluded)."""
    return len(click.unstyle(_ANSI_RE.sub("", text)))


def table(
    rows: Sequence[Sequence[object]],
    alignments: str | Sequence[str],
    separator: str = DEFAULT_TABLE_SEPARATOR,
) -> str | None:
    """Return ``rows`` laid out as a table, or None when there are no rows.

    Args:
        rows (Sequence[Sequence[object]]): Rows of equal length; cells are converted with `str`.
        alignments (str | Sequence[str]): ``"l"`` or ``"r"`` per column (``"rrrlll"``).
            Missing entries default to left alignment.
        separator (str): Gap inserted after every column except the last.

    Returns:
        str | None: The table lines joined by newlines, or None for zero rows.

    Notes:
        - The last column gets no trailing padding (right-aligned cells are
          still padded on the left).
        - A column whose cells are all empty gets no separator, so optional
          columns collapse without shifting the header.

    Example:
        >>> print(table([["a", "bb"], ["ccc", "d"]], "lr"))
        a    bb
        ccc   d
    """
    if not rows:
        return None
    cells: list[list[str]] = [[str(cell) for cell in row] for row in rows]
    columns: int = max(len(row) for row in cells)
    widths: list[int] = [0] * columns
    for row in cells:
        for col, value in enumerate(row):
            widths[col] = max(widths[col], visible_width(value))

    lines: list[str] = []
    for row in cells:
        parts: list[str] = []
        for col in range(columns):
            value: str = row[col] if col < len(row) else ""
            align: str = alignments[col] if col < len(alignments) else "l"
            last: bool = col == columns - 1
            padding: str = " " * (widths[col] - visible_width(value))
            if align == "r":
                parts.append(padding + value)
            else:
                parts.append(value if last else value + padding)
            if not last and widths[col] != 0:
                parts.append(separator)
        lines.append("".join(parts))
    return "\n".join(lines)
