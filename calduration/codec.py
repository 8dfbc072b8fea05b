"""Storage seam for interval columns.

A column type layer calls two functions: ``decode_from_storage`` when a
textual interval comes back from the database, and ``encode_for_storage``
when a value is about to be written. IntervalCodec bundles both with the
column's configuration (fractional-seconds precision and clock).
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any

from calduration.calendar import Clock, utc_now
from calduration.duration import Duration
from calduration.parser import parse

logger = logging.getLogger(__name__)

# PostgreSQL accepts interval(0) through interval(6)
MAX_PRECISION = 6


def validate_precision(precision: Any) -> None:
    """Raise ValueError unless precision is None or an int in [0, MAX_PRECISION]."""
    if precision is None:
        return
    if (
        not isinstance(precision, int)
        or isinstance(precision, bool)
        or not 0 <= precision <= MAX_PRECISION
    ):
        raise ValueError(
            f"Interval precision must be an integer in [0, {MAX_PRECISION}], "
            f"got {precision!r}.\n"
            f"Use None for full precision, or e.g. precision=3 for milliseconds"
        )


def decode_from_storage(value: Any, *, clock: Clock = utc_now) -> Duration | None:
    """Turn a stored interval into a Duration.

    Strings go through the parser dispatcher; None and Durations pass
    through untouched.

    Raises:
        ISO8601ParsingError: If the text matches no supported style
        CalendarOverflowError: If the calendar parts cannot be projected
            from the clock instant within years 1 through 9999
        TypeError: If value is of an unsupported type
    """
    if value is None or isinstance(value, Duration):
        return value
    if isinstance(value, str):
        return parse(value, clock=clock)
    raise TypeError(
        f"Cannot decode interval from {type(value).__name__!r}: {value!r}\n"
        f"Expected interval text such as '3 days 04:05:06' or 'P3DT4H5M6S'"
    )


def encode_for_storage(value: Any, precision: int | None = None) -> str | None:
    """Render a Duration or a number of seconds as ISO 8601 interval text.

    Numbers are treated as seconds (``36000`` becomes ``PT36000S``). Strings
    are passed through unchanged for the database to interpret, and None
    stays None.

    Raises:
        TypeError: If value is of an unsupported type
        ValueError: If precision is not None or an int in [0, 6]
    """
    validate_precision(precision)
    if value is None:
        return None
    if isinstance(value, str):
        logger.debug("passing interval text %r through unencoded", value)
        return value
    if isinstance(value, Real) and not isinstance(value, bool):
        value = Duration.zero() + value
    if isinstance(value, Duration):
        return value.iso8601(precision)
    raise TypeError(
        f"Cannot encode {type(value).__name__!r} as an interval: {value!r}\n"
        f"Expected a Duration, a number of seconds, a string, or None.\n"
        f"Example: encode_for_storage(days(3) + hours(4))"
    )


@dataclass(frozen=True, kw_only=True)
class IntervalCodec:
    """Per-column interval configuration.

    Attributes:
        precision: Fractional-seconds digits written for this column
            (0-6), or None for the shortest representation
        clock: Reference-instant source used when decoding calendar parts
    """

    precision: int | None = None
    clock: Clock = utc_now

    def __post_init__(self) -> None:
        validate_precision(self.precision)

    @property
    def sql_type(self) -> str:
        if self.precision is None:
            return "interval"
        return f"interval({self.precision})"

    def decode(self, value: Any) -> Duration | None:
        return decode_from_storage(value, clock=self.clock)

    def encode(self, value: Any) -> str | None:
        return encode_for_storage(value, self.precision)
