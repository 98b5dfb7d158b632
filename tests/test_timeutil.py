"""Tests for wire timestamp decoding"""

from datetime import datetime, timezone

import pytest

from dataflow_monitor.timeutil import Instant, from_cloud_time, to_cloud_time


def test_parse_rfc3339_seconds():
    assert from_cloud_time("1970-01-01T00:00:10Z") == Instant(10, 0)


def test_parse_rfc3339_fraction_digits():
    assert from_cloud_time("1970-01-01T00:00:00.5Z") == Instant(0, 500_000_000)
    assert from_cloud_time("1970-01-01T00:00:00.123456Z") == Instant(0, 123_456_000)
    assert from_cloud_time("1970-01-01T00:00:00.123456789Z") == Instant(0, 123_456_789)


def test_parse_seconds_nanos_pair():
    assert from_cloud_time({"seconds": "1425470400", "nanos": 7}) == Instant(1425470400, 7)
    assert from_cloud_time({"seconds": 5}) == Instant(5, 0)


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "not a time",
        "2015-03-04 12:00:00",
        "2015-03-04T12:00:00+01:00",
        "2015-02-30T12:00:00Z",
        "2015-03-04T25:00:00Z",
        "2015-03-04T12:00:00.1234567890Z",
        {"seconds": "abc"},
        {"seconds": 1, "nanos": 1_000_000_000},
        {},
        {"nanos": 5},
        {"seconds": "253402300800"},
        {"seconds": 10**15},
        {"seconds": -62135596801},
        12345,
        ["2015-03-04T12:00:00Z"],
    ],
)
def test_malformed_input_is_unknown(value):
    """Malformed timestamps decode to None instead of raising"""
    assert from_cloud_time(value) is None


def test_decoded_order_matches_wire_order():
    wire = [
        "2015-03-04T12:00:00.000000002Z",
        "2015-03-04T12:00:00Z",
        "2015-03-04T11:59:59.999999999Z",
        "2015-03-04T12:00:00.000000001Z",
    ]
    decoded = sorted(from_cloud_time(w) for w in wire)
    assert [to_cloud_time(i) for i in decoded] == [
        "2015-03-04T11:59:59.999999999Z",
        "2015-03-04T12:00:00Z",
        "2015-03-04T12:00:00.000000001Z",
        "2015-03-04T12:00:00.000000002Z",
    ]


def test_to_cloud_time_trims_fraction():
    assert to_cloud_time(Instant(0, 0)) == "1970-01-01T00:00:00Z"
    assert to_cloud_time(Instant(0, 120_000_000)) == "1970-01-01T00:00:00.120Z"
    assert to_cloud_time(Instant(0, 123_400)) == "1970-01-01T00:00:00.000123400Z"
    assert to_cloud_time(Instant(0, 5_000)) == "1970-01-01T00:00:00.000005Z"


def test_str_uses_millisecond_precision():
    instant = from_cloud_time("2015-03-04T12:34:56.789123Z")
    assert str(instant) == "2015-03-04T12:34:56.789Z"


def test_from_millis_and_datetime():
    assert Instant.from_millis(1500) == Instant(1, 500_000_000)
    assert Instant.from_millis(1500).millis == 1500

    aware = datetime(2015, 3, 4, 12, 0, 0, 250000, tzinfo=timezone.utc)
    instant = Instant.from_datetime(aware)
    assert instant == from_cloud_time("2015-03-04T12:00:00.25Z")
    assert instant.to_datetime() == aware
    assert Instant.from_datetime(aware.replace(tzinfo=None)) == instant


def test_nanos_out_of_range_rejected():
    with pytest.raises(ValueError):
        Instant(0, -1)


def test_pair_range_limits_are_renderable():
    """The first and last representable seconds decode and render"""
    earliest = from_cloud_time({"seconds": -62135596800})
    latest = from_cloud_time({"seconds": "253402300799", "nanos": 999_000_000})

    assert str(earliest) == "0001-01-01T00:00:00.000Z"
    assert str(latest) == "9999-12-31T23:59:59.999Z"
