from __future__ import annotations

import math
import re
from typing import Optional


# Leading decimal number, the way form inputs are read: "12.5", "-3", ".5", "1e3", "10 %"
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(text: object) -> Optional[float]:
    """
    Parse the leading decimal number of a user-entered amount.

    Returns None when nothing numeric can be read. Numbers are accepted as is,
    strings are stripped and read up to the first non-numeric character.
    """
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        value = float(text)
        return value if math.isfinite(value) else None
    if not isinstance(text, str):
        return None

    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None


def parse_amount_or_zero(text: object) -> float:
    value = parse_amount(text)
    return 0.0 if value is None else value
