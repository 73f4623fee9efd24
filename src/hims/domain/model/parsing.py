"""Lenient parsing of numeric fields coming off the wire."""

from __future__ import annotations

import math
from typing import Any


def parse_number(value: Any) -> float:
    """Return ``value`` as a number; missing, unparseable or non-finite values become 0."""
    if value is None or value == "" or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number
