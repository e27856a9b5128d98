"""
Decimal number recognition shared by all extractors.
"""

from __future__ import annotations

import math
import re

# Plain decimal or scientific notation; no hex, no digit separators.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
SPECIAL_PATTERN = re.compile(r"[+-]?(?:NaN|Infinity)")


def is_number(text: str | None) -> bool:
    """Return True if the whole (stripped) text is a finite decimal number."""
    if text is None:
        return False
    return to_float(text) is not None


def to_float(text: str) -> float | None:
    """Parse the whole stripped text as a finite float, or return None."""
    candidate = text.strip()
    if not NUMBER_PATTERN.fullmatch(candidate):
        return None
    value = float(candidate)
    if not math.isfinite(value):
        return None
    return value


def parse_double(text: str | None) -> float | None:
    """Read a double from the first whitespace-delimited token of *text*.

    Trailing tokens are ignored, so ``"12.5 ms"`` reads as ``12.5`` while
    ``"ms 12.5"`` does not read at all. ``NaN``, ``Infinity`` and overflowing
    exponents are accepted and come back non-finite. Digit grouping such as
    ``"1,000"`` is not a number.
    """
    if text is None:
        return None
    tokens = text.split()
    if not tokens:
        return None
    token = tokens[0]
    if NUMBER_PATTERN.fullmatch(token) or SPECIAL_PATTERN.fullmatch(token):
        return float(token)
    return None


def parses_as_double(text: str | None) -> bool:
    return parse_double(text) is not None


def scan_double(text: str | None) -> float | None:
    """Like parse_double, but only finite values are returned."""
    number = parse_double(text)
    if number is None or not math.isfinite(number):
        return None
    return number


def format_double(value: float) -> str:
    """Render a float the way points store it (``27`` becomes ``"27.0"``)."""
    return repr(float(value))
