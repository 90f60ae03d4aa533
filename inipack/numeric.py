"""
inipack Numeric - Lenient string to number conversion for config values.

Never raises on content: trailing junk is ignored and anything without a
leading digit run converts to zero.
"""

from __future__ import annotations

import re

_NUMBER = re.compile(r"(-?)([0-9]*)(?:\.([0-9]*))?")


def parse_int(text: str) -> int:
    """Parse an optional '-' and leading decimal digits. "42abc" -> 42, "" -> 0."""
    sign, digits, _ = _NUMBER.match(text).groups()
    if not digits:
        return 0
    value = int(digits)
    return -value if sign else value


def parse_float(text: str) -> float:
    """Like parse_int, plus an optional '.' fraction. "-3.5" -> -3.5."""
    sign, digits, fraction = _NUMBER.match(text).groups()
    if not digits and not fraction:
        return 0.0
    return float(f"{sign}{digits or '0'}.{fraction or '0'}")
