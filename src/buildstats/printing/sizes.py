# topmark:header:start
#
#   project      : BuildStats
#   file         : sizes.py
#   file_relpath : src/buildstats/printing/sizes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable byte sizes."""

from __future__ import annotations

import math
from typing import Final

SIZE_UNITS: Final[tuple[str, ...]] = ("bytes", "KiB", "MiB", "GiB")


def format_size(size: object) -> str:
    """Return ``size`` in the largest binary unit, with 3 significant digits.

    Example:
        >>> format_size(120)
        '120 bytes'
        >>> format_size(1536)
        '1.5 KiB'
        >>> format_size(0)
        '0 bytes'
    """
    if isinstance(size, bool) or not isinstance(size, (int, float)) or not math.isfinite(size):
        return "unknown size"
    if size <= 0:
        return "0 bytes"
    index: int = min(max(0, int(math.log(size, 1024))), len(SIZE_UNITS) - 1)
    # log() may land just below an exact power of 1024
    if index + 1 < len(SIZE_UNITS) and size >= 1024 ** (index + 1):
        index += 1
    value: float = size / 1024**index
    return f"{float(f'{value:.3g}'):g} {SIZE_UNITS[index]}"
