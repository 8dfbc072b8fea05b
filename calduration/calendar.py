"""Calendar projection of duration parts onto an anchor instant.

Calendar units (years, months, weeks, days) have no fixed length, so the
only way to turn a set of parts into seconds is to advance a concrete
instant and measure the difference. The heavy lifting is delegated to
python-dateutil's relativedelta, which applies year/month deltas first and
then weeks, days and time-of-day deltas as fixed offsets.

End-of-month policy (inherited from relativedelta): when the anchor's day
does not exist in the target month it is clamped to that month's last day,
so 2024-01-31 + 1 month is 2024-02-29. Year and month deltas are combined
before clamping.

Projection is bounded by the datetime range (years 1 through 9999). A result
outside it raises CalendarOverflowError rather than a bare ValueError.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timezone
from typing import Callable, TypeAlias

from dateutil.relativedelta import relativedelta

from calduration.errors import AnchorTypeError, CalendarOverflowError
from calduration.units import DurationPart, Magnitude, Unit, sum_by_unit
from calduration.util import MEAN_MONTH

Anchor: TypeAlias = date | datetime
Clock: TypeAlias = Callable[[], datetime]


def utc_now() -> datetime:
    """The production clock: current wall time in UTC."""
    return datetime.now(timezone.utc)


def coerce_anchor(anchor: object) -> Anchor:
    """Return ``anchor`` if it is date- or time-like, else raise AnchorTypeError."""
    if isinstance(anchor, (datetime, date)):
        return anchor
    raise AnchorTypeError(anchor)


def to_relativedelta(totals: Mapping[Unit, Magnitude], sign: int = 1) -> relativedelta:
    """Build one relativedelta step from per-unit totals.

    relativedelta refuses fractional years and months, so a fractional
    year is folded into months and whatever fraction of a month remains
    is applied as fixed seconds at the mean Gregorian month length.
    """
    total_months = (
        totals.get(Unit.YEARS, 0) * 12 + totals.get(Unit.MONTHS, 0)
    ) * sign
    whole_months = int(total_months)
    spill_seconds = (total_months - whole_months) * MEAN_MONTH

    return relativedelta(
        months=whole_months,
        weeks=totals.get(Unit.WEEKS, 0) * sign,
        days=totals.get(Unit.DAYS, 0) * sign,
        hours=totals.get(Unit.HOURS, 0) * sign,
        minutes=totals.get(Unit.MINUTES, 0) * sign,
        seconds=totals.get(Unit.SECONDS, 0) * sign + spill_seconds,
    )


def advance(
    anchor: Anchor,
    parts: Mapping[Unit, Magnitude] | Iterable[DurationPart],
    sign: int = 1,
) -> Anchor:
    """Move ``anchor`` by ``parts`` (times ``sign``) in a single calendar step.

    Args:
        anchor: A date or datetime. Dates stay dates unless a time-of-day
            delta is applied, in which case a datetime at midnight is used.
        parts: Per-unit totals, or raw parts which are summed by unit first
            so that repeated units combine into one step
        sign: +1 to move forward, -1 to move backward

    Raises:
        AnchorTypeError: If anchor is not a date or datetime
        CalendarOverflowError: If the result falls outside years 1-9999
    """
    anchor = coerce_anchor(anchor)
    totals = parts if isinstance(parts, Mapping) else sum_by_unit(parts)
    try:
        return anchor + to_relativedelta(totals, sign)
    except (ValueError, OverflowError) as exc:
        signed = {unit: value * sign for unit, value in totals.items()}
        raise CalendarOverflowError(anchor, signed, str(exc)) from exc


def elapsed_span(
    anchor: Anchor, parts: Mapping[Unit, Magnitude] | Iterable[DurationPart]
) -> float:
    """Signed seconds between ``anchor`` and ``anchor`` advanced by ``parts``."""
    anchor = coerce_anchor(anchor)
    if not isinstance(anchor, datetime):
        anchor = datetime.combine(anchor, time.min)
    return (advance(anchor, parts) - anchor).total_seconds()
