# apps/sessionapp/utils/date_utils.py
from datetime import datetime, timedelta

import pytz


def local_day_bounds(now, timezone_name):
    """
    Get the UTC bounds of the local calendar day containing ``now``.

    Args:
        now: Timezone-aware instant
        timezone_name: IANA timezone of the user

    Returns:
        Tuple of (start, end) UTC datetimes, end exclusive
    """
    tz = pytz.timezone(timezone_name)
    today = now.astimezone(tz).date()
    start = tz.localize(datetime.combine(today, datetime.min.time()))
    end = tz.localize(datetime.combine(today + timedelta(days=1), datetime.min.time()))
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


def local_week_bounds(now, timezone_name):
    """
    Get the UTC bounds of the local week (Sunday to Saturday) containing ``now``.

    Args:
        now: Timezone-aware instant
        timezone_name: IANA timezone of the user

    Returns:
        Tuple of (start, end) UTC datetimes, end exclusive
    """
    tz = pytz.timezone(timezone_name)
    today = now.astimezone(tz).date()
    # date.weekday(): Monday = 0 ... Sunday = 6
    days_since_sunday = (today.weekday() + 1) % 7
    first = today - timedelta(days=days_since_sunday)
    start = tz.localize(datetime.combine(first, datetime.min.time()))
    end = tz.localize(datetime.combine(first + timedelta(days=7), datetime.min.time()))
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


def local_date(moment, timezone_name):
    """Calendar date of an instant in the user's timezone"""
    return moment.astimezone(pytz.timezone(timezone_name)).date()
