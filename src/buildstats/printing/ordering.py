# topmark:header:start
#
#   project      : BuildStats
#   file         : ordering.py
#   file_relpath : src/buildstats/printing/ordering.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stable field ordering for printed report nodes.

Curated fields come first in a reviewed order; fields the curated list does
not know about still appear, after them, in their original order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildstats.constants import PSEUDO_ELEMENT_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def is_pseudo_element(element: str) -> bool:
    """Return True for reserved pseudo-elements such as ``"kind!"``."""
    return element.endswith(PSEUDO_ELEMENT_SUFFIX)


def create_order(present: Sequence[str], preferred: Iterable[str]) -> list[str]:
    """Return ``present`` reordered according to ``preferred``.

    Preferred entries come first when present; pseudo-elements (names ending
    in ``"!"``) are always included. Remaining present fields follow in their
    original order. Neither input is modified.

    Example:
        >>> create_order(["b", "a", "z"], ["a", "b"])
        ['a', 'b', 'z']
        >>> create_order(["name"], ["kind!", "name"])
        ['kind!', 'name']
    """
    available: set[str] = set(present)
    used: set[str] = set()
    ordered: list[str] = []
    for element in preferred:
        if element in used:
            continue
        if is_pseudo_element(element) or element in available:
            ordered.append(element)
            used.add(element)
    ordered.extend(element for element in present if element not in used)
    return ordered
