"""Tests for ISO-8601 formatting and parsing."""

import pytest
from dateutil.parser import isoparse

from utime import Cause, InvalidInput, Timestamp
from utime.iso8601 import format_date, format_datetime, parse_datetime
from utime.util import MILLISECOND


def _expect_malformed(text: str) -> None:
    with pytest.raises(InvalidInput) as info:
        Timestamp.from_iso8601_text(text)
    assert info.value.cause is Cause.MALFORMED_TEXT


def test_format_datetime():
    """Test datetime text output."""
    ts = Timestamp.from_civil(2150, 2, 2, 3, 1, 5, 30000)
    assert ts.to_iso8601_datetime_text() == "2150-02-02T03:01:05.030Z"
    assert Timestamp.zero().to_iso8601_datetime_text() == "1970-01-01T00:00:00.000Z"


def test_format_date():
    """Test date-only text output."""
    ts = Timestamp.from_civil(2150, 2, 2, 3, 1, 5, 30000)
    assert ts.to_iso8601_date_text() == "2150-02-02"
    assert format_date(ts.to_civil()) == "2150-02-02"


def test_format_truncates_to_milliseconds():
    """Test that sub-millisecond digits are dropped, never rounded up."""
    ts = Timestamp.from_civil(2024, 12, 31, 23, 59, 59, 999999)
    assert ts.to_iso8601_datetime_text() == "2024-12-31T23:59:59.999Z"

    ts = Timestamp.from_civil(2024, 1, 1, 0, 0, 0, 1999)
    assert format_datetime(ts.to_civil()) == "2024-01-01T00:00:00.001Z"


def test_format_matches_dateutil():
    """Test that formatted text parses to the same instant with dateutil."""
    for fields in (
        (1970, 1, 1, 0, 0, 0, 0),
        (2000, 2, 29, 12, 34, 56, 789000),
        (2100, 3, 1, 0, 0, 1, 1000),
        (9999, 12, 31, 23, 59, 59, 999000),
    ):
        ts = Timestamp.from_civil(*fields)
        assert isoparse(str(ts)) == ts.to_datetime()


def test_parse_datetime():
    """Test parsing into calendar fields."""
    fields = parse_datetime("2150-02-02T03:01:05.030Z")
    assert fields == (2150, 2, 2, 3, 1, 5, 30000)

    ts = Timestamp.from_iso8601_text("2150-02-02T03:01:05.030Z")
    assert ts == Timestamp.from_civil(2150, 2, 2, 3, 1, 5, 30000)


def test_parse_fraction_variants():
    """Test seconds with no fraction, short fractions and long fractions."""
    assert parse_datetime("2000-01-01T00:00:05Z").microsecond == 0
    assert parse_datetime("2000-01-01T00:00:05.5Z").microsecond == 500000
    assert parse_datetime("2000-01-01T00:00:05.000001Z").microsecond == 1
    assert parse_datetime("2000-01-01T00:00:05.1234567Z").microsecond == 123456
    assert parse_datetime("2000-01-01T00:00:05.9999999Z").microsecond == 999999


def test_parse_unpadded_fields():
    """Test that fields are not required to be zero padded."""
    ts = Timestamp.from_iso8601_text("2000-1-2T3:4:5.006Z")
    assert ts == Timestamp.from_civil(2000, 1, 2, 3, 4, 5, 6000)


def test_parse_bare_point_seconds():
    """Test seconds with nothing before or nothing after the decimal point."""
    fields = parse_datetime("2000-01-01T00:00:5.Z")
    assert (fields.second, fields.microsecond) == (5, 0)

    fields = parse_datetime("2000-01-01T00:00:.5Z")
    assert (fields.second, fields.microsecond) == (0, 500000)

    ts = Timestamp.from_iso8601_text("2000-01-01T00:00:5.Z")
    assert ts == Timestamp.from_civil(2000, 1, 1, 0, 0, 5)


def test_parse_leading_plus_signs():
    """Test that numbers may carry an explicit plus sign."""
    ts = Timestamp.from_iso8601_text("+2000-01-01T00:00:05.000Z")
    assert ts == Timestamp.from_civil(2000, 1, 1, 0, 0, 5)

    fields = parse_datetime("2000-+01-+02T+03:+04:+05.5Z")
    assert fields == (2000, 1, 2, 3, 4, 5, 500000)

    fields = parse_datetime("2000-01-01T00:00:+.25Z")
    assert (fields.second, fields.microsecond) == (0, 250000)


def test_parse_rejects_malformed_structure():
    """Test structural parse errors."""
    _expect_malformed("2000-01-01 00:00:00.000Z")
    _expect_malformed("2000-01-01")
    _expect_malformed("2000-01T00:00:00.000Z")
    _expect_malformed("2000-01-01-01T00:00:00.000Z")
    _expect_malformed("2000-01-01T00:00.000Z")
    _expect_malformed("2000-01-01T00:00:00:00.000Z")
    _expect_malformed("2000-01-01T00:00:00.000")
    _expect_malformed("2000-01-01T00:00:00.000+00:00")
    _expect_malformed("")


def test_parse_rejects_non_numeric_fields():
    """Test numeric parse errors."""
    _expect_malformed("year-01-01T00:00:00.000Z")
    _expect_malformed("2000-0x-01T00:00:00.000Z")
    _expect_malformed("2000-01-01T0a:00:00.000Z")
    _expect_malformed("2000-01-01T00:00:abZ")
    _expect_malformed("2000-01-01T00:00:Z")
    _expect_malformed("2000-01-01T00:00:.Z")
    _expect_malformed("2000-01-01T00:00:+Z")
    _expect_malformed("++2000-01-01T00:00:00.000Z")
    _expect_malformed("-2000-01-01T00:00:00.000Z")
    _expect_malformed("2000-01-01T 00:00:00.000Z")
    _expect_malformed("2000-01-01T00:00:1e1Z")


def test_parse_rejects_non_string():
    """Test that only str input is accepted."""
    with pytest.raises(TypeError, match="must be a str"):
        Timestamp.from_iso8601_text(b"2000-01-01T00:00:00.000Z")  # type: ignore[arg-type]


def test_parse_applies_encoder_validation():
    """Test that well-formed text with bad fields fails like from_civil."""
    with pytest.raises(InvalidInput) as info:
        Timestamp.from_iso8601_text("2023-02-29T00:00:00.000Z")
    assert info.value.cause is Cause.OUT_OF_RANGE
    assert info.value.field == "day"

    with pytest.raises(InvalidInput) as info:
        Timestamp.from_iso8601_text("1969-12-31T23:59:59.999Z")
    assert info.value.cause is Cause.PRE_EPOCH

    with pytest.raises(InvalidInput) as info:
        Timestamp.from_iso8601_text("2000-01-01T00:00:60.000Z")
    assert info.value.field == "second"


def test_text_round_trip_at_millisecond_precision():
    """Test that text round trips keep milliseconds and drop microseconds."""
    step = 7 * 86_400_000_000 + 3_723_456_789
    micros = 0
    for _ in range(2000):
        ts = Timestamp(micros)
        parsed = Timestamp.from_iso8601_text(ts.to_iso8601_datetime_text())
        assert parsed == Timestamp(micros - micros % MILLISECOND)

        whole_millis = Timestamp(micros - micros % MILLISECOND)
        assert (
            Timestamp.from_iso8601_text(whole_millis.to_iso8601_datetime_text())
            == whole_millis
        )
        micros += step
