"""Time conversions: instants, Unix seconds, Julian Dates, and calendar fields.

Calendar decomposition in UTC goes through rms-julian; Julian Dates here are
plain ``unix / 86400 + 2440587.5`` values with no leap-second handling, which
is the time scale the lunar formulas were fitted on.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Union

import julian

from lunar_ephemeris.config import validate_seed_calendar
from lunar_ephemeris.constants import J2000_UNIX_DAY, SECONDS_PER_DAY, UNIX_EPOCH_JD

logger = logging.getLogger(__name__)

Instant = Union[datetime, int, float]

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def unix_seconds(instant: Instant) -> float:
    """Convert an instant to seconds since the Unix epoch.

    Parameters:
        instant: Aware datetime (converted through its UTC offset), naive
            datetime (read as process-local wall-clock time, as
            ``datetime.timestamp`` does), or Unix seconds as int/float.

    Returns:
        Unix time in seconds.

    Raises:
        TypeError: If instant is not a datetime or a real number.
    """
    if isinstance(instant, datetime):
        return instant.timestamp()
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise TypeError(
            f'instant must be a datetime or Unix seconds, got {type(instant).__name__}'
        )
    return float(instant)


def julian_date(unix_time: float) -> float:
    """Convert Unix seconds to Julian Date."""
    return unix_time / SECONDS_PER_DAY + UNIX_EPOCH_JD


def unix_from_julian(jd: float) -> float:
    """Convert Julian Date to Unix seconds (inverse of julian_date)."""
    return (jd - UNIX_EPOCH_JD) * SECONDS_PER_DAY


def datetime_from_unix(unix_time: float, tz: tzinfo = timezone.utc) -> datetime:
    """Convert Unix seconds to an aware datetime in tz.

    Uses epoch + timedelta so pre-1970 and far-future values work on every
    platform.
    """
    return (_UNIX_EPOCH + timedelta(seconds=unix_time)).astimezone(tz)


def ymd_from_unix(unix_time: float) -> tuple[int, int, int]:
    """Return the UTC (year, month, day) of a Unix time via rms-julian.

    The proleptic Gregorian calendar is used throughout, like a platform
    date object.
    """
    day = math.floor(unix_time / SECONDS_PER_DAY) - J2000_UNIX_DAY
    y, m, d = julian.ymd_from_day(day, proleptic=True)
    return (int(y), int(m), int(d))


def seed_year_month(unix_time: float, seed_calendar: str) -> tuple[int, int]:
    """Return the calendar (year, month) of unix_time, month 1-based.

    Parameters:
        unix_time: Unix seconds.
        seed_calendar: 'utc' for UTC calendar fields, 'local' for the
            process-local calendar.

    Returns:
        (year, month).

    Raises:
        ValueError: If seed_calendar is unknown.
    """
    validate_seed_calendar(seed_calendar)
    if seed_calendar == 'utc':
        year, month, _ = ymd_from_unix(unix_time)
    else:
        local = datetime.fromtimestamp(unix_time)
        year, month = local.year, local.month
    logger.debug('Seed calendar %s: %d-%02d', seed_calendar, year, month)
    return (year, month)
