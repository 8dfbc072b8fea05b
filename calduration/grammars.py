"""Structured matchers for the interval text grammars.

Three PostgreSQL ``IntervalStyle`` outputs plus ISO 8601:

    postgres            -1 year -2 mons +3 days -04:05:06
    postgres_verbose    @ 1 year 2 mons -3 days 4 hours 5 mins 6 secs ago
    sql_standard        -1-2 +3 -4:05:06
    iso_8601            P-1Y-2M3DT-4H-5M-6S

A matcher returns ``None`` when its pattern does not fit the text, and a
FieldMatch otherwise. Every field of the three legacy grammars is optional,
so a FieldMatch may carry no fields at all. Callers must treat that as a
successful (empty) match, not as a miss.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from re import Match

from typing_extensions import override

from calduration.units import Magnitude, Unit
from calduration.util import parse_number

_NATIVE_COMPACT = re.compile(
    r"""
    (?:(?P<years>[+-]?\d+)\syears?)?\s*
    (?:(?P<months>[+-]?\d+)\smons?)?\s*
    (?:(?P<days>[+-]?\d+)\sdays?)?\s*
    (?:
        (?P<timesign>[+-])?
        (?P<hours>\d+):(?P<minutes>\d+)(?::(?P<seconds>\d+(?:\.\d+)?))?
    )?
    """,
    re.VERBOSE | re.ASCII,
)

_VERBOSE = re.compile(
    r"""
    @\s
    (?:(?P<years>[+-]?\d+)\syears?)?\s*
    (?:(?P<months>[+-]?\d+)\smons?)?\s*
    (?:(?P<days>[+-]?\d+)\sdays?)?\s*
    (?:(?P<hours>[+-]?\d+)\shours?)?\s*
    (?:(?P<minutes>[+-]?\d+)\smins?)?\s*
    (?:(?P<seconds>[+-]?\d+(?:\.\d+)?)\ssecs?)?\s*
    (?P<ago>ago)?
    """,
    re.VERBOSE | re.ASCII,
)

_STANDARD = re.compile(
    r"""
    (?:
        (?P<yearmonthsign>[+-])?
        (?P<years>\d+)(?:-(?P<months>\d+))?
    )?\s*
    (?:
        (?P<days>[+-]?\d+)\s*
        (?P<timesign>[+-])?
        (?P<hours>\d+):(?P<minutes>\d+)(?::(?P<seconds>\d+(?:\.\d+)?))?
    )?
    """,
    re.VERBOSE | re.ASCII,
)

_NUMBER = r"[+-]?\d+(?:[.,]\d+)?"

_ISO8601 = re.compile(
    rf"""
    (?P<sign>[+-])?
    P(?:
        (?:
            (?:(?P<years>{_NUMBER})Y)?
            (?:(?P<months>{_NUMBER})M)?
            (?:(?P<days>{_NUMBER})D)?
            (?P<time>T
                (?:(?P<hours>{_NUMBER})H)?
                (?:(?P<minutes>{_NUMBER})M)?
                (?:(?P<seconds>{_NUMBER})S)?
            )?
        )
        |
        (?:(?P<weeks>{_NUMBER})W)
    )
    """,
    re.VERBOSE | re.ASCII,
)


def _sign(symbol: str | None) -> int:
    return -1 if symbol == "-" else 1


@dataclass(frozen=True)
class FieldMatch:
    """Result of a successful structural match.

    Attributes:
        grammar: Name of the grammar that matched
        fields: Present fields, already signed, in canonical unit order
        has_time_marker: ISO 8601 only; True when a ``T`` was present
    """

    grammar: str
    fields: dict[Unit, Magnitude] = field(default_factory=dict)
    has_time_marker: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.fields


class Grammar(ABC):
    """A single interval grammar, anchored at both ends of the text."""

    name: str = "grammar"
    pattern: re.Pattern[str]

    def match(self, text: str) -> FieldMatch | None:
        found = self.pattern.fullmatch(text)
        if found is None:
            return None
        return FieldMatch(
            grammar=self.name,
            fields=self._fields(found),
            has_time_marker=self._has_time_marker(found),
        )

    @abstractmethod
    def _fields(self, found: Match[str]) -> dict[Unit, Magnitude]:
        """Turn regex groups into signed magnitudes, skipping absent groups."""
        pass

    def _has_time_marker(self, found: Match[str]) -> bool:
        return False

    @staticmethod
    def _collect(
        found: Match[str], signs: dict[Unit, int]
    ) -> dict[Unit, Magnitude]:
        fields: dict[Unit, Magnitude] = {}
        for unit in Unit:
            if unit not in signs:
                continue
            raw = found.group(unit.value)
            if raw is None:
                continue
            fields[unit] = signs[unit] * parse_number(raw)
        return fields


class NativeCompactGrammar(Grammar):
    """PostgreSQL's default output style: ``-1 year -2 mons +3 days -04:05:06``.

    Calendar fields carry their own sign; one leading sign covers the
    whole ``H:MM:SS`` group.
    """

    name = "postgres"
    pattern = _NATIVE_COMPACT

    @override
    def _fields(self, found: Match[str]) -> dict[Unit, Magnitude]:
        timesign = _sign(found.group("timesign"))
        return self._collect(
            found,
            {
                Unit.YEARS: 1,
                Unit.MONTHS: 1,
                Unit.DAYS: 1,
                Unit.HOURS: timesign,
                Unit.MINUTES: timesign,
                Unit.SECONDS: timesign,
            },
        )


class VerboseGrammar(Grammar):
    """``@ 1 year 2 mons -3 days 4 hours 5 mins 6 secs ago``.

    Every field carries its own sign and a trailing ``ago`` flips them all.
    """

    name = "postgres_verbose"
    pattern = _VERBOSE

    @override
    def _fields(self, found: Match[str]) -> dict[Unit, Magnitude]:
        sign = -1 if found.group("ago") else 1
        return self._collect(
            found,
            {
                Unit.YEARS: sign,
                Unit.MONTHS: sign,
                Unit.DAYS: sign,
                Unit.HOURS: sign,
                Unit.MINUTES: sign,
                Unit.SECONDS: sign,
            },
        )


class StandardGrammar(Grammar):
    """SQL standard style: ``-1-2 +3 -4:05:06``.

    The year-month group shares one sign, the day has its own, and the
    time group shares another.
    """

    name = "sql_standard"
    pattern = _STANDARD

    @override
    def _fields(self, found: Match[str]) -> dict[Unit, Magnitude]:
        ymsign = _sign(found.group("yearmonthsign"))
        timesign = _sign(found.group("timesign"))
        return self._collect(
            found,
            {
                Unit.YEARS: ymsign,
                Unit.MONTHS: ymsign,
                Unit.DAYS: 1,
                Unit.HOURS: timesign,
                Unit.MINUTES: timesign,
                Unit.SECONDS: timesign,
            },
        )


class ISO8601Grammar(Grammar):
    """``[+-]P[nY][nM][nD][T[nH][nM][nS]]`` or ``[+-]PnW``.

    The leading sign applies on top of each field's own sign. Magnitudes
    may be decimals with ``.`` or ``,``. This matcher only checks shape;
    see calduration.iso8601 for the semantic rejections.
    """

    name = "iso_8601"
    pattern = _ISO8601

    @override
    def _fields(self, found: Match[str]) -> dict[Unit, Magnitude]:
        sign = _sign(found.group("sign"))
        return self._collect(found, {unit: sign for unit in Unit})

    @override
    def _has_time_marker(self, found: Match[str]) -> bool:
        return found.group("time") is not None
