"""Calendar arithmetic on Unix timestamps, in local time and in UTC."""

from __future__ import annotations

import calendar
import datetime
import time


def _local_ts(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))


def _shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _day_in_month(year: int, month: int, day: int) -> datetime.date:
    """Return the date ``day - 1`` days after the first of the month, letting days overflow."""
    return datetime.date(year, month, 1) + datetime.timedelta(days=day - 1)


def _c_remainder(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend."""
    rem = abs(value) % modulus
    return -rem if value < 0 else rem


def current_local_year(ts: int) -> int:
    """Start of the local year containing ``ts``."""
    t = time.localtime(ts)
    return _local_ts(t.tm_year, 1, 1)


def current_local_month(ts: int) -> int:
    """Start of the local month containing ``ts``."""
    t = time.localtime(ts)
    return _local_ts(t.tm_year, t.tm_mon, 1)


def current_local_day(ts: int) -> int:
    """Start of the local day containing ``ts``."""
    t = time.localtime(ts)
    return _local_ts(t.tm_year, t.tm_mon, t.tm_mday)


def next_year(ts: int) -> int:
    """Start of the UTC year after the one containing ``ts``."""
    t = time.gmtime(ts)
    return calendar.timegm((t.tm_year + 1, 1, 1, 0, 0, 0, 0, 0, 0))


def next_local_year(ts: int) -> int:
    """Start of the local year after the one containing ``ts``."""
    t = time.localtime(ts)
    return _local_ts(t.tm_year + 1, 1, 1)


def next_month(ts: int) -> int:
    """Start of the UTC month after the one containing ``ts``."""
    t = time.gmtime(ts)
    year, month = _shift_month(t.tm_year, t.tm_mon, 1)
    return calendar.timegm((year, month, 1, 0, 0, 0, 0, 0, 0))


def next_local_month(ts: int) -> int:
    """Start of the local month after the one containing ``ts``."""
    t = time.localtime(ts)
    year, month = _shift_month(t.tm_year, t.tm_mon, 1)
    return _local_ts(year, month, 1)


def next_day(ts: int) -> int:
    """Start of the UTC day after the one containing ``ts``."""
    t = time.gmtime(ts)
    day = datetime.date(t.tm_year, t.tm_mon, t.tm_mday) + datetime.timedelta(days=1)
    return calendar.timegm((day.year, day.month, day.day, 0, 0, 0, 0, 0, 0))


def next_local_day(ts: int) -> int:
    """Start of the local day after the one containing ``ts``."""
    t = time.localtime(ts)
    day = datetime.date(t.tm_year, t.tm_mon, t.tm_mday) + datetime.timedelta(days=1)
    return _local_ts(day.year, day.month, day.day)


def next_hour(ts: int) -> int:
    """Start of the hour after the one containing ``ts``."""
    return ts + 3600 - _c_remainder(ts, 3600)


def next_min(ts: int) -> int:
    """Start of the minute after the one containing ``ts``."""
    return ts + 60 - _c_remainder(ts, 60)


def add_to_date(ts: int, unit: str, num: int) -> int:
    """Add ``num`` hours ('h'), days ('d'), months ('m') or years ('y') to ``ts``.

    Days, months and years are added in local time; a day of the month that
    overflows the target month rolls into the following month. Any other unit
    leaves the timestamp unchanged.
    """
    if unit == "h":
        return ts + 3600 * num

    t = time.localtime(ts)
    if unit == "d":
        day = datetime.date(t.tm_year, t.tm_mon, t.tm_mday) + datetime.timedelta(days=num)
    elif unit == "m":
        year, month = _shift_month(t.tm_year, t.tm_mon, num)
        day = _day_in_month(year, month, t.tm_mday)
    elif unit == "y":
        day = _day_in_month(t.tm_year + num, t.tm_mon, t.tm_mday)
    else:
        return ts
    return _local_ts(day.year, day.month, day.day, t.tm_hour, t.tm_min, t.tm_sec)