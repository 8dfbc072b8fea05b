"""Parser dispatcher: text in, Duration out.

Grammars are tried in a fixed priority order and the first one whose
pattern spans the whole text wins, even if it captured no fields. Empty and
whitespace-only text therefore parse as an empty duration under the
``postgres`` style instead of falling through to ISO 8601. Only when every
legacy style misses does the strict ISO 8601 reader run, and its error
message then quotes the original text.
"""

import logging

from calduration.calendar import Anchor, Clock, elapsed_span, utc_now
from calduration.duration import Duration
from calduration.grammars import (
    Grammar,
    NativeCompactGrammar,
    StandardGrammar,
    VerboseGrammar,
)
from calduration.iso8601 import read_iso8601
from calduration.units import Magnitude, Unit

logger = logging.getLogger(__name__)

# Priority order matters: postgres first (the server default). ISO 8601 is
# the final fallback and is handled separately because it validates strictly.
LEGACY_GRAMMARS: tuple[Grammar, ...] = (
    NativeCompactGrammar(),
    VerboseGrammar(),
    StandardGrammar(),
)


def build_duration(fields: dict[Unit, Magnitude], anchor: Anchor) -> Duration:
    """Materialize one part per present field and measure it from ``anchor``."""
    parts = [(unit, fields[unit]) for unit in Unit if unit in fields]
    return Duration(elapsed_span(anchor, fields), parts)


def parse_iso8601(text: str, *, clock: Clock = utc_now) -> Duration:
    """Parse ISO 8601 duration text only.

    Raises:
        ISO8601ParsingError: If the text is not a valid ISO 8601 duration
    """
    return build_duration(read_iso8601(text), clock())


def parse(text: str, *, clock: Clock = utc_now) -> Duration:
    """Parse interval text in any supported style.

    Args:
        text: postgres, postgres_verbose, sql_standard or ISO 8601 text
        clock: Source of the reference instant calendar parts are measured
            from; read once per call

    Raises:
        ISO8601ParsingError: If no legacy style matches and the text is not
            valid ISO 8601 either

    Example:
        >>> parse("-1 year -2 mons +3 days -04:05:06").iso8601()
        'P-1Y-2M3DT-4H-5M-6S'
    """
    for grammar in LEGACY_GRAMMARS:
        found = grammar.match(text)
        if found is None:
            continue
        if found.is_empty:
            logger.debug("%s style matched %r with no fields", found.grammar, text)
        else:
            logger.debug("%s style matched %r", found.grammar, text)
        return build_duration(found.fields, clock())

    logger.debug("no legacy style matched %r, trying ISO 8601", text)
    return parse_iso8601(text, clock=clock)
