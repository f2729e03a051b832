"""Tests for identifier and timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from tasklists.ids import ZERO_TIME, format_time, is_zero, new_id, parse_time


def test_new_id_is_hex():
    value = new_id()
    assert len(value) == 16
    int(value, 16)


def test_new_id_unique():
    assert len({new_id() for _ in range(200)}) == 200


def test_format_time_whole_seconds():
    assert format_time(datetime(2026, 2, 19, 12, 30, tzinfo=timezone.utc)) == "2026-02-19T12:30:00Z"


def test_format_time_trims_fraction():
    value = datetime(2026, 2, 19, 12, 30, 0, 250000, tzinfo=timezone.utc)
    assert format_time(value) == "2026-02-19T12:30:00.25Z"


def test_format_time_converts_to_utc():
    value = datetime(2026, 2, 19, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert format_time(value) == "2026-02-19T12:30:00Z"


def test_format_zero_time():
    assert format_time(ZERO_TIME) == "0001-01-01T00:00:00Z"


def test_parse_time_z():
    assert parse_time("2026-02-19T12:30:00Z") == datetime(2026, 2, 19, 12, 30, tzinfo=timezone.utc)


def test_parse_time_truncates_nanoseconds():
    value = parse_time("2026-02-19T12:30:00.123456789Z")
    assert value.microsecond == 123456


def test_parse_time_offset():
    value = parse_time("2026-02-19T14:30:00+02:00")
    assert value == datetime(2026, 2, 19, 12, 30, tzinfo=timezone.utc)
    assert value.tzinfo == timezone.utc


def test_parse_time_naive_is_utc():
    assert parse_time("2026-02-19T12:30:00") == datetime(2026, 2, 19, 12, 30, tzinfo=timezone.utc)


def test_parse_zero_time():
    assert parse_time("0001-01-01T00:00:00Z") == ZERO_TIME


def test_parse_time_offset_before_year_one_clamps():
    assert parse_time("0001-01-01T00:00:00+05:00") == ZERO_TIME
    assert is_zero(parse_time("0001-01-01T03:30:00.5+04:00"))


def test_parse_time_rejects_garbage():
    with pytest.raises(ValueError):
        parse_time("yesterday")


def test_format_parse_keeps_microseconds():
    value = datetime(2026, 2, 19, 12, 30, 5, 123456, tzinfo=timezone.utc)
    assert parse_time(format_time(value)) == value


def test_is_zero():
    assert is_zero(ZERO_TIME)
    assert is_zero(None)
    assert not is_zero(datetime(2026, 1, 1, tzinfo=timezone.utc))
