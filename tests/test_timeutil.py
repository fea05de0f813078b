import calendar
import time

import pytest

from bitmeter.timeutil import (
    add_to_date,
    current_local_day,
    current_local_month,
    current_local_year,
    next_day,
    next_hour,
    next_local_day,
    next_local_month,
    next_local_year,
    next_min,
    next_month,
    next_year,
)


@pytest.fixture(autouse=True)
def utc_zone(monkeypatch):
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def make_ts(text):
    return int(time.mktime(time.strptime(text, "%Y-%m-%d %H:%M:%S")))


def make_ts_utc(text):
    return calendar.timegm(time.strptime(text, "%Y-%m-%d %H:%M:%S"))


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-01-01 00:00:00", "1970-05-26 10:01:00"),
        ("2009-01-01 00:00:00", "2009-01-01 00:00:00"),
        ("2009-01-01 00:00:00", "2009-03-24 19:12:01"),
        ("2009-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_current_local_year(expected, given):
    assert current_local_year(make_ts(given)) == make_ts(expected)


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-05-01 00:00:00", "1970-05-26 10:01:00"),
        ("2009-01-01 00:00:00", "2009-01-01 00:00:00"),
        ("2009-03-01 00:00:00", "2009-03-24 19:12:01"),
        ("2009-12-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_current_local_month(expected, given):
    assert current_local_month(make_ts(given)) == make_ts(expected)


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-05-26 00:00:00", "1970-05-26 10:01:00"),
        ("2009-01-01 00:00:00", "2009-01-01 00:00:00"),
        ("2009-03-24 00:00:00", "2009-03-24 19:12:01"),
        ("2009-12-31 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_current_local_day(expected, given):
    assert current_local_day(make_ts(given)) == make_ts(expected)


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1971-01-01 00:00:00", "1970-05-26 10:01:00"),
        ("2010-01-01 00:00:00", "2009-01-01 00:00:00"),
        ("2010-01-01 00:00:00", "2009-03-24 19:12:01"),
        ("2010-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_next_year(expected, given):
    assert next_year(make_ts_utc(given)) == make_ts_utc(expected)


def test_next_year_pinned_value():
    assert next_year(make_ts_utc("2009-06-15 08:00:00")) == 1262304000


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-06-01 00:00:00", "1970-05-26 10:01:00"),
        ("2009-02-01 00:00:00", "2009-01-01 00:00:00"),
        ("2009-04-01 00:00:00", "2009-03-24 19:12:01"),
        ("2010-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_next_month(expected, given):
    assert next_month(make_ts_utc(given)) == make_ts_utc(expected)


def test_next_month_pinned_value():
    assert next_month(make_ts_utc("2010-06-15 08:00:00")) == 1277942400


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-05-27 00:00:00", "1970-05-26 10:01:00"),
        ("2009-01-02 00:00:00", "2009-01-01 00:00:00"),
        ("2009-03-25 00:00:00", "2009-03-24 19:12:01"),
        ("2010-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_next_day(expected, given):
    assert next_day(make_ts_utc(given)) == make_ts_utc(expected)


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-05-26 11:00:00", "1970-05-26 10:01:00"),
        ("2009-01-01 01:00:00", "2009-01-01 00:00:00"),
        ("2009-03-24 20:00:00", "2009-03-24 19:12:01"),
        ("2010-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_next_hour(expected, given):
    assert next_hour(make_ts_utc(given)) == make_ts_utc(expected)


@pytest.mark.parametrize(
    "expected,given",
    [
        ("1970-05-26 10:02:00", "1970-05-26 10:01:00"),
        ("2009-01-01 00:01:00", "2009-01-01 00:00:00"),
        ("2009-03-24 19:13:00", "2009-03-24 19:12:01"),
        ("2010-01-01 00:00:00", "2009-12-31 23:59:59"),
    ],
)
def test_next_min(expected, given):
    assert next_min(make_ts_utc(given)) == make_ts_utc(expected)


def test_next_local_variants():
    ts = make_ts("2009-12-31 23:59:59")
    assert next_local_year(ts) == make_ts("2010-01-01 00:00:00")
    assert next_local_month(ts) == make_ts("2010-01-01 00:00:00")
    assert next_local_day(ts) == make_ts("2010-01-01 00:00:00")
    assert next_local_month(make_ts("2009-03-24 19:12:01")) == make_ts("2009-04-01 00:00:00")


@pytest.mark.parametrize(
    "unit,num,expected",
    [
        ("h", 1, "1970-05-26 11:01:00"),
        ("d", 2, "1970-05-28 10:01:00"),
        ("m", 3, "1970-08-26 10:01:00"),
        ("y", 4, "1974-05-26 10:01:00"),
    ],
)
def test_add_to_date(unit, num, expected):
    assert add_to_date(make_ts_utc("1970-05-26 10:01:00"), unit, num) == make_ts_utc(expected)


def test_add_to_date_month_overflow_rolls_forward():
    assert add_to_date(make_ts("1970-01-31 12:00:00"), "m", 1) == make_ts("1970-03-03 12:00:00")


def test_add_to_date_leap_day_plus_year():
    assert add_to_date(make_ts("2008-02-29 00:00:00"), "y", 1) == make_ts("2009-03-01 00:00:00")


def test_add_to_date_unknown_unit_keeps_value():
    ts = make_ts("2009-03-24 19:12:01")
    assert add_to_date(ts, "x", 5) == ts