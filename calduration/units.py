from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

Magnitude: TypeAlias = int | float


class Unit(str, Enum):
    """Duration units, declared in canonical order.

    Projection and ISO 8601 serialization both walk units in this order.
    """

    YEARS = "years"
    MONTHS = "months"
    WEEKS = "weeks"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"

    @property
    def singular(self) -> str:
        return self.value[:-1]

    @property
    def is_calendar(self) -> bool:
        """True for units whose real-world length depends on the calendar."""
        return self in CALENDAR_UNITS


CALENDAR_UNITS = (Unit.YEARS, Unit.MONTHS, Unit.WEEKS, Unit.DAYS)
FIXED_UNITS = (Unit.HOURS, Unit.MINUTES, Unit.SECONDS)


@dataclass(frozen=True)
class DurationPart:
    """One unit/magnitude pair of a duration.

    Attributes:
        unit: Which unit the magnitude counts
        magnitude: Signed count; may be fractional for seconds, or for the
            last field of an ISO 8601 duration
    """

    unit: Unit
    magnitude: Magnitude

    def __post_init__(self) -> None:
        if not isinstance(self.unit, Unit):
            object.__setattr__(self, "unit", Unit(self.unit))

    def __neg__(self) -> "DurationPart":
        return DurationPart(self.unit, -self.magnitude)

    def __str__(self) -> str:
        label = self.unit.singular if self.magnitude == 1 else self.unit.value
        return f"{self.magnitude} {label}"


PartsLike: TypeAlias = (
    "Mapping[Unit | str, Magnitude] | Iterable[DurationPart | tuple[Unit | str, Magnitude]]"
)


def normalize_parts(parts: PartsLike) -> tuple[DurationPart, ...]:
    """Coerce a mapping or iterable of pairs into a tuple of parts.

    Order is preserved and duplicate units are kept as separate parts.
    """
    items = parts.items() if isinstance(parts, Mapping) else parts
    normalized: list[DurationPart] = []
    for item in items:
        if isinstance(item, DurationPart):
            normalized.append(item)
        else:
            unit, magnitude = item
            normalized.append(DurationPart(Unit(unit), magnitude))
    return tuple(normalized)


def sum_by_unit(parts: Iterable[DurationPart]) -> dict[Unit, Magnitude]:
    """Total the magnitudes of each unit, keyed in canonical order.

    Units that never appear are left out; units whose parts cancel out
    are kept with a zero total.
    """
    totals: dict[Unit, Magnitude] = {}
    for part in parts:
        totals[part.unit] = totals.get(part.unit, 0) + part.magnitude
    return {unit: totals[unit] for unit in Unit if unit in totals}
