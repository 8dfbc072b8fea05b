"""The Duration value type.

A Duration pairs an elapsed-seconds scalar with the unit/magnitude parts it
was built from. The scalar is what the duration "weighs": equality,
ordering and numeric coercion all go through it. The parts remember how the
duration was expressed ("1 month", not "2629746 seconds") and drive
calendar projection and ISO 8601 output.

Because a month or a year has no fixed length, the scalar is fixed once at
construction by projecting the parts from a reference instant (normally
"now", supplied by an injectable clock). ``since``/``ago`` never reuse it:
they always reproject the parts from the anchor they are given.

Example:
    >>> from datetime import datetime, timezone
    >>> from calduration import days, hours
    >>> d = days(3) + hours(4)
    >>> d.iso8601()
    'P3DT4H'
    >>> d.since(datetime(2025, 1, 31, tzinfo=timezone.utc))
    datetime.datetime(2025, 2, 3, 4, 0, tzinfo=datetime.timezone.utc)
"""

from dataclasses import dataclass, field
from functools import total_ordering
from numbers import Real
from typing import Any

from calduration.calendar import Anchor, Clock, advance, elapsed_span, utc_now
from calduration.iso8601 import format_iso8601
from calduration.units import (
    DurationPart,
    Magnitude,
    PartsLike,
    Unit,
    normalize_parts,
    sum_by_unit,
)
from calduration.util import tidy_number


def _is_number(other: Any) -> bool:
    return isinstance(other, Real) and not isinstance(other, bool)


@total_ordering
@dataclass(frozen=True, eq=False)
class Duration:
    """Elapsed time expressed as calendar and fixed-length parts.

    Attributes:
        value: Elapsed seconds this duration stood for when it was built
        parts: Unit/magnitude pairs in insertion order; duplicate units are
            kept apart until serialization merges them
    """

    value: float
    parts: tuple[DurationPart, ...] = field(default=())

    def __init__(self, value: float, parts: PartsLike = ()):
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "parts", normalize_parts(parts))

    @classmethod
    def zero(cls) -> "Duration":
        return cls(0, ())

    @classmethod
    def from_seconds(cls, seconds: Magnitude) -> "Duration":
        return cls(seconds, ((Unit.SECONDS, seconds),))

    @classmethod
    def from_parts(cls, parts: PartsLike, *, clock: Clock = utc_now) -> "Duration":
        """Build a duration whose value is measured from ``clock()``."""
        normalized = normalize_parts(parts)
        return cls(elapsed_span(clock(), normalized), normalized)

    @classmethod
    def parse(cls, text: str, *, clock: Clock = utc_now) -> "Duration":
        """Parse strict ISO 8601 duration text (``P1Y2M3DT4H5M6S``).

        Raises:
            ISO8601ParsingError: If the text is not a valid ISO 8601 duration
        """
        from calduration.parser import parse_iso8601

        return parse_iso8601(text, clock=clock)

    def merged(self) -> dict[Unit, Magnitude]:
        """Magnitudes summed per unit, in canonical order."""
        return sum_by_unit(self.parts)

    # Arithmetic

    def __add__(self, other: Any) -> "Duration":
        if isinstance(other, Duration):
            return Duration(self.value + other.value, self.parts + other.parts)
        if _is_number(other):
            return Duration(
                self.value + other,
                self.parts + (DurationPart(Unit.SECONDS, other),),
            )
        return NotImplemented

    def __radd__(self, other: Any) -> "Duration":
        return self.__add__(other)

    def __sub__(self, other: Any) -> "Duration":
        if isinstance(other, Duration) or _is_number(other):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other: Any) -> "Duration":
        if _is_number(other):
            return -self + other
        return NotImplemented

    def __neg__(self) -> "Duration":
        return Duration(-self.value, tuple(-part for part in self.parts))

    def __pos__(self) -> "Duration":
        return Duration(self.value, self.parts)

    # Numeric coercion and comparison, all through the elapsed value

    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Duration):
            return self.value == other.value
        if _is_number(other):
            return self.value == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Duration):
            return self.value < other.value
        if _is_number(other):
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    # Projection

    def since(self, time: Anchor | None = None, *, clock: Clock = utc_now) -> Anchor:
        """Return the instant this duration lies after ``time`` (default: now).

        Raises:
            AnchorTypeError: If time is not a date or datetime
        """
        return advance(clock() if time is None else time, self.merged(), 1)

    from_now = since

    def ago(self, time: Anchor | None = None, *, clock: Clock = utc_now) -> Anchor:
        """Return the instant this duration lies before ``time`` (default: now).

        Raises:
            AnchorTypeError: If time is not a date or datetime
        """
        return advance(clock() if time is None else time, self.merged(), -1)

    until = ago

    # Rendering

    def iso8601(self, precision: int | None = None) -> str:
        return format_iso8601(self, precision)

    def __str__(self) -> str:
        """English list of the merged parts, e.g. ``1 year, 2 months, and 3 days``."""
        words = [
            str(DurationPart(unit, tidy_number(magnitude)))
            for unit, magnitude in self.merged().items()
        ]
        if not words:
            return "0 seconds"
        if len(words) == 1:
            return words[0]
        if len(words) == 2:
            return f"{words[0]} and {words[1]}"
        return ", ".join(words[:-1]) + f", and {words[-1]}"

    def __repr__(self) -> str:
        parts = ", ".join(f"{p.unit.value}={p.magnitude!r}" for p in self.parts)
        return f"Duration({self.value!r}, [{parts}])"


def years(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.YEARS: n}, clock=clock)


def months(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.MONTHS: n}, clock=clock)


def weeks(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.WEEKS: n}, clock=clock)


def days(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.DAYS: n}, clock=clock)


def hours(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.HOURS: n}, clock=clock)


def minutes(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.MINUTES: n}, clock=clock)


def seconds(n: int | float, *, clock: Clock = utc_now) -> Duration:
    return Duration.from_parts({Unit.SECONDS: n}, clock=clock)
