"""Exception hierarchy for calduration.

All calduration-specific exceptions inherit from DurationError. They also
inherit the built-in exception that best describes the failure, so callers
catching ValueError or TypeError keep working.
"""


class DurationError(Exception):
    """Base exception for all calduration errors."""


class ISO8601ParsingError(DurationError, ValueError):
    """Text could not be read as an ISO 8601 duration.

    Raised for text that does not match the grammar, an empty duration
    (``P``), a dangling time marker (``P1DT``), or a fractional magnitude
    on any field other than the last nonzero one.

    Legacy interval text that matches none of the PostgreSQL styles ends up
    here too, so the message may quote text that was never meant to be
    ISO 8601.

    Attributes:
        text: The offending input, verbatim.
    """

    def __init__(self, text: str, reason: str | None = None):
        self.text: str = text
        message = f"Invalid ISO 8601 duration: {text}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class AnchorTypeError(DurationError, TypeError):
    """The anchor handed to a projection is not a date or datetime."""

    def __init__(self, anchor: object):
        self.anchor: object = anchor
        super().__init__(
            f"expected a time or date, got {anchor!r}\n"
            f"Hint: pass a datetime or date anchor:\n"
            f"  duration.since(datetime(2025, 1, 1, tzinfo=timezone.utc))\n"
            f"  duration.ago(date(2025, 1, 1))"
        )


class CalendarOverflowError(DurationError, OverflowError):
    """Projecting the parts would leave the representable date range.

    Python dates stop at years 1 and 9999, so an interval such as
    ``20000 years`` cannot be measured from any real anchor.

    Attributes:
        anchor: The instant that was being advanced
        totals: Per-unit totals that were applied
    """

    def __init__(self, anchor: object, totals: dict, reason: str):
        self.anchor: object = anchor
        self.totals: dict = totals
        described = ", ".join(f"{value} {unit.value}" for unit, value in totals.items())
        super().__init__(
            f"Cannot advance {anchor!r} by {described or 'nothing'}: {reason}\n"
            f"Hint: datetimes only cover years 1 through 9999"
        )


__all__ = [
    "DurationError",
    "ISO8601ParsingError",
    "AnchorTypeError",
    "CalendarOverflowError",
]
