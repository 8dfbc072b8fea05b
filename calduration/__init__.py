from .calendar import Clock, advance, elapsed_span, utc_now
from .codec import IntervalCodec, decode_from_storage, encode_for_storage
from .duration import Duration, days, hours, minutes, months, seconds, weeks, years
from .errors import (
    AnchorTypeError,
    CalendarOverflowError,
    DurationError,
    ISO8601ParsingError,
)
from .iso8601 import format_iso8601
from .parser import parse, parse_iso8601
from .units import DurationPart, Unit
from .util import DAY, HOUR, MINUTE, SECOND, WEEK

__all__ = [
    "Duration",
    "DurationPart",
    "Unit",
    "Clock",
    "utc_now",
    "advance",
    "elapsed_span",
    "parse",
    "parse_iso8601",
    "format_iso8601",
    "decode_from_storage",
    "encode_for_storage",
    "IntervalCodec",
    "DurationError",
    "ISO8601ParsingError",
    "AnchorTypeError",
    "CalendarOverflowError",
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
