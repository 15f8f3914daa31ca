# planet_ephem/timeutil.py
from __future__ import annotations

import datetime as _dt
from typing import Optional

from planet_ephem.ephemeris import as_number

JD_J2000 = 2451545.0
JD_UNIX_EPOCH = 2440587.5
# 1970 Jan 1 0h is 10957.5 days before J2000
UNIX_EPOCH_DAY = JD_UNIX_EPOCH - JD_J2000


def jd_from_day(day: float) -> float:
    return day + JD_J2000


def day_from_jd(jd: float) -> float:
    return jd - JD_J2000


def day_from_unix(t: float) -> float:
    return t / 86400.0 + UNIX_EPOCH_DAY


def unix_from_day(day: float) -> float:
    return (day - UNIX_EPOCH_DAY) * 86400.0


def day_from_datetime(dt: _dt.datetime) -> float:
    """Days past J2000 for a datetime; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)
    return day_from_unix(dt.timestamp())


def datetime_from_day(day: float) -> _dt.datetime:
    return _dt.datetime.fromtimestamp(unix_from_day(day), tz=_dt.timezone.utc)


def utc_from_day(day: float) -> Optional[str]:
    """UTC calendar string, or None outside the years datetime can hold."""
    try:
        return datetime_from_day(day).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return None


def parse_day(text: str) -> Optional[float]:
    """ISO date/time ("2020-10-13", "2020-10-13T12:00") or a bare J2000 day number."""
    s = str(text).strip()
    try:
        return day_from_datetime(_dt.datetime.fromisoformat(s))
    except ValueError:
        pass
    if s.count("-") > 1:
        # looks like a date, not a negative number
        return None
    return as_number(s) if s else None
