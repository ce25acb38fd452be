"""CSS value parsing shared by the converter and the catalog mapper."""

from __future__ import annotations

import math
import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_int(value: Any) -> int | None:
    """Leading integer of a CSS-ish value ("8px" → 8); None if there is none."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None


def parse_hex_color(value: Any) -> tuple[int, int, int] | None:
    """"#3b82f6" / "#fff" → (r, g, b); None for anything else."""
    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
