"""Tests for the storage seam."""

from datetime import datetime, timezone

import pytest

from calduration import (
    DAY,
    CalendarOverflowError,
    Duration,
    DurationError,
    ISO8601ParsingError,
    IntervalCodec,
    days,
    decode_from_storage,
    encode_for_storage,
    hours,
    seconds,
)


def test_encode_empty_duration():
    """Test that a duration with no parts is written as a bare P."""
    assert encode_for_storage(Duration(0, [])) == "P"


def test_encode_duration_with_precision():
    """Test that precision rounds seconds and no precision keeps every digit."""
    assert encode_for_storage(seconds(6.234567), 3) == "PT6.235S"
    assert encode_for_storage(seconds(6.234567)) == "PT6.234567S"


def test_encode_number_as_seconds():
    """Test that bare numbers are written as a seconds-only duration."""
    assert encode_for_storage(36000) == "PT36000S"
    assert encode_for_storage(1.5) == "PT1.5S"
    assert encode_for_storage(-90) == "-PT90S"


def test_encode_large_and_small_numbers_stay_positional():
    """Test that seconds never come out in exponent notation."""
    assert encode_for_storage(1e6) == "PT1000000S"
    assert encode_for_storage(1234567) == "PT1234567S"
    assert encode_for_storage(123456.5) == "PT123456.5S"
    assert encode_for_storage(1e-05) == "PT0.00001S"


@pytest.mark.parametrize("value", [1e6, 1234567, 123456.5, 1e-05, 6.234567])
def test_bare_numbers_survive_storage(clock, value):
    """Test that encoding a number of seconds and decoding it keeps its value."""
    restored = decode_from_storage(encode_for_storage(value), clock=clock)
    assert restored.value == pytest.approx(value)


def test_encode_passes_strings_and_none_through():
    """Test that text and None are handed to the database untouched."""
    assert encode_for_storage("1 year 2 minutes") == "1 year 2 minutes"
    assert encode_for_storage(None) is None


@pytest.mark.parametrize("value", [True, object(), [1]])
def test_encode_rejects_unsupported_types(value):
    """Test that values that are not durations, numbers or text are refused."""
    with pytest.raises(TypeError):
        encode_for_storage(value)


@pytest.mark.parametrize("precision", [-1, 7, "3", 2.5, True])
def test_encode_rejects_bad_precision(precision):
    """Test that encode_for_storage validates precision like IntervalCodec."""
    with pytest.raises(ValueError, match="precision"):
        encode_for_storage(hours(1), precision)


def test_encode_rejects_bad_precision_before_passthrough():
    """Test that a bad precision is reported even for None and text values."""
    with pytest.raises(ValueError):
        encode_for_storage(None, -1)
    with pytest.raises(ValueError):
        encode_for_storage("1 hour", 9)


def test_decode_runs_dispatcher(clock):
    """Test that decoding text parses it against the given clock."""
    assert decode_from_storage("1 year 2 mons", clock=clock).iso8601() == "P1Y2M"
    assert decode_from_storage("1 mon", clock=clock).value == 31 * DAY


def test_decode_passes_none_and_durations_through():
    """Test that None and existing durations are returned as they are."""
    duration = hours(1)
    assert decode_from_storage(duration) is duration
    assert decode_from_storage(None) is None


def test_decode_rejects_non_text():
    """Test that decoding a bare number raises TypeError."""
    with pytest.raises(TypeError):
        decode_from_storage(3600)


def test_decode_raises_for_unparseable_text(clock):
    """Test that text no grammar accepts raises ISO8601ParsingError."""
    with pytest.raises(ISO8601ParsingError):
        decode_from_storage("soon", clock=clock)


def test_decode_out_of_range_interval_raises_overflow(clock):
    """Test that an interval too large to project raises CalendarOverflowError."""
    with pytest.raises(CalendarOverflowError, match="20000 years") as info:
        decode_from_storage("20000 years", clock=clock)
    assert isinstance(info.value, DurationError)
    assert isinstance(info.value, OverflowError)
    assert info.value.anchor == datetime(2025, 1, 15, 12, tzinfo=timezone.utc)


def test_round_trip_through_storage(clock):
    """Test that a mixed duration survives encode then decode unchanged."""
    duration = days(2, clock=clock) + hours(3) + seconds(4.5)
    restored = decode_from_storage(encode_for_storage(duration), clock=clock)
    assert restored == duration
    assert restored.iso8601() == "P2DT3H4.5S"


def test_codec_sql_type():
    """Test that the column type carries the precision when one is set."""
    assert IntervalCodec().sql_type == "interval"
    assert IntervalCodec(precision=3).sql_type == "interval(3)"
    assert IntervalCodec(precision=0).sql_type == "interval(0)"


@pytest.mark.parametrize("precision", [-1, 7, "3", 2.5, True])
def test_codec_rejects_bad_precision(precision):
    """Test that out-of-range or non-int precisions are refused."""
    with pytest.raises(ValueError):
        IntervalCodec(precision=precision)


def test_codec_is_keyword_only():
    """Test that codec options must be passed by keyword."""
    with pytest.raises(TypeError):
        IntervalCodec(3)


def test_codec_encode_uses_column_precision():
    """Test that encode applies the column's precision."""
    codec = IntervalCodec(precision=3)
    assert codec.encode(6.234567) == "PT6.235S"
    assert codec.encode(seconds(1) + hours(1)) == "PT1H1.000S"


def test_codec_decode_uses_column_clock(clock):
    """Test that decode projects calendar parts from the column's clock."""
    codec = IntervalCodec(clock=clock)
    assert codec.decode("@ 1 mon").value == 31 * DAY
    assert codec.decode(None) is None
