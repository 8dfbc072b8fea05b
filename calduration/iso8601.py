"""ISO 8601 duration reading and writing.

Reading is deliberately lenient about signs (``P-1Y-2M3DT-4H``) because
that is what PostgreSQL emits with ``IntervalStyle = iso_8601``, but strict
about structure:

    - ``P`` alone is rejected (no designators)
    - ``P1DT`` is rejected (``T`` with no time designator after it)
    - only the last nonzero field may be fractional

Writing normalizes a duration's parts into canonical text. If every nonzero
field is negative the sign is hoisted to the front (``-P1D``); otherwise each
designator keeps its own sign.
"""

from typing import TYPE_CHECKING

from calduration.errors import ISO8601ParsingError
from calduration.grammars import ISO8601Grammar
from calduration.units import FIXED_UNITS, Magnitude, Unit, sum_by_unit
from calduration.util import is_fractional, plain_number

if TYPE_CHECKING:
    from calduration.duration import Duration

_GRAMMAR = ISO8601Grammar()

_DESIGNATORS = {
    Unit.YEARS: "Y",
    Unit.MONTHS: "M",
    Unit.WEEKS: "W",
    Unit.DAYS: "D",
    Unit.HOURS: "H",
    Unit.MINUTES: "M",
    Unit.SECONDS: "S",
}


def read_iso8601(text: str) -> dict[Unit, Magnitude]:
    """Match and validate ISO 8601 duration text.

    Returns:
        Signed magnitudes of the present fields, in canonical order

    Raises:
        ISO8601ParsingError: If the text is not a well-formed duration
    """
    found = _GRAMMAR.match(text)
    if found is None:
        raise ISO8601ParsingError(text)

    fields = found.fields
    time_is_empty = found.has_time_marker and not any(
        unit in fields for unit in FIXED_UNITS
    )
    if not fields or time_is_empty:
        raise ISO8601ParsingError(text, "empty duration or empty time part")

    nonzero = [unit for unit, value in fields.items() if value != 0]
    fractional = [unit for unit in nonzero if is_fractional(fields[unit])]
    if fractional and fractional != nonzero[-1:]:
        raise ISO8601ParsingError(text, "only last part can be fractional")

    return fields


def _format_seconds(value: Magnitude, precision: int | None) -> str:
    if precision is not None:
        return f"{value:.{precision}f}"
    return plain_number(value)


def format_iso8601(duration: "Duration", precision: int | None = None) -> str:
    """Render ``duration`` as canonical ISO 8601 text.

    Args:
        duration: Duration to render; only its parts are consulted
        precision: Fixed number of decimals for seconds. When None, seconds
            use the shortest exact positional form (``6``, ``6.5``,
            ``0.00001``).

    Example:
        >>> format_iso8601(Duration(0, {"days": 3, "hours": 4}))
        'P3DT4H'
        >>> format_iso8601(Duration(0, {"seconds": 6.234567}), precision=3)
        'PT6.235S'
    """
    totals = sum_by_unit(duration.parts)

    sign = ""
    nonzero = [value for value in totals.values() if value != 0]
    if nonzero and all(value < 0 for value in nonzero):
        sign = "-"
        totals = {unit: -value for unit, value in totals.items()}

    date_text = ""
    time_text = ""
    for unit, designator in _DESIGNATORS.items():
        value = totals.get(unit, 0)
        if value == 0:
            continue
        if unit is Unit.SECONDS:
            time_text += _format_seconds(value, precision) + designator
        elif unit.is_calendar:
            date_text += plain_number(value) + designator
        else:
            time_text += plain_number(value) + designator

    output = "P" + date_text
    if time_text:
        output += "T" + time_text
    return sign + output
