"""Utility constants and helpers for calduration.

Time unit constants represent lengths in seconds. Only the fixed units have
an exact length; MEAN_MONTH is the average Gregorian month and is used solely
to place the fractional remainder of a month.
"""

from decimal import Decimal

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MEAN_MONTH = 2629746


def parse_number(text: str) -> int | float:
    """Read a decimal magnitude, keeping integers as ``int``.

    Accepts ``.`` or ``,`` as the decimal separator.
    """
    if "." in text or "," in text:
        return float(text.replace(",", "."))
    return int(text)


def tidy_number(value: int | float) -> int | float:
    """Collapse integral floats (``2.0``) to ``int`` for display."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def is_fractional(value: int | float) -> bool:
    return value % 1 != 0


def plain_number(value: int | float) -> str:
    """Shortest exact positional text for ``value``, never in exponent form.

    ``1e6`` renders as ``1000000`` and ``1e-05`` as ``0.00001``, so the
    output stays inside the ISO 8601 duration grammar.
    """
    if isinstance(value, int):
        return str(value)
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
