"""
Clock and calendar helpers.

Shifts clock times by minutes, composes dates with explicit clock times and
looks up UTC offsets for IANA timezones.
"""

import logging
from datetime import date, datetime, time, timedelta

import pytz

logger = logging.getLogger(__name__)


def parse_time(time_str: str) -> time:
    """Parse "HH:MM" string to time object."""
    parts = time_str.split(":")
    return time(int(parts[0]), int(parts[1]))


def time_to_minutes(t: time) -> int:
    """Convert time to minutes since midnight."""
    return t.hour * 60 + t.minute


def format_time(t: time) -> str:
    """Format time as "HH:MM" (24-hour format for data fields)."""
    return f"{t.hour:02d}:{t.minute:02d}"


def shift_minutes(dt: datetime, minutes: int) -> datetime:
    """
    Shift a datetime by a signed number of minutes.

    Args:
        dt: Starting datetime
        minutes: Minutes to shift (positive = later, negative = earlier)

    Returns:
        Shifted datetime, or dt unchanged if the result is not representable
    """
    try:
        return dt + timedelta(minutes=minutes)
    except OverflowError:
        logger.debug("Cannot shift %s by %d minutes, keeping original", dt, minutes)
        return dt


def at_time(day: date, hour: int, minute: int) -> datetime:
    """
    Compose a calendar date with an explicit clock time.

    Invalid components fall back to midnight of the given day.
    """
    try:
        return datetime.combine(day, time(hour, minute))
    except ValueError:
        logger.debug("Invalid clock time %s:%s for %s, using midnight", hour, minute, day)
        return datetime.combine(day, time.min)


def on_date(day: date, clock: time) -> datetime:
    """Place a time-of-day on a calendar date."""
    return at_time(day, clock.hour, clock.minute)


def add_days(day: date, days: int) -> date:
    """Add calendar days, keeping the input date if the result is out of range."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        logger.debug("Cannot move %s by %d days, keeping original", day, days)
        return day


def get_utc_offset_seconds(tz_name: str, instant_utc: datetime) -> int:
    """
    Get the UTC offset of a timezone at a given instant.

    Args:
        tz_name: IANA timezone name (e.g., "Europe/London")
        instant_utc: Aware or naive UTC datetime

    Returns:
        Offset in seconds (e.g., 3600 for BST)

    Raises:
        pytz.UnknownTimeZoneError: If tz_name is not a known timezone
    """
    tz = pytz.timezone(tz_name)
    if instant_utc.tzinfo is None:
        instant_utc = pytz.UTC.localize(instant_utc)
    local = instant_utc.astimezone(tz)
    return int(local.utcoffset().total_seconds())


def calculate_timezone_offset_hours(
    departure_tz: str, arrival_tz: str, departure_local: datetime
) -> int:
    """
    Calculate the signed whole-hour timezone change of a flight.

    Both offsets are taken at the departure instant so a DST switch during the
    flight does not change the result. Half-hour zones truncate toward zero.

    Args:
        departure_tz: IANA timezone of the departure city
        arrival_tz: IANA timezone of the arrival city
        departure_local: Naive departure datetime in departure_tz

    Returns:
        Hours (positive = eastward, negative = westward), 0 for unknown zones
    """
    try:
        origin = pytz.timezone(departure_tz)
        departure_utc = origin.localize(departure_local.replace(tzinfo=None)).astimezone(pytz.UTC)
        dep_offset = get_utc_offset_seconds(departure_tz, departure_utc)
        arr_offset = get_utc_offset_seconds(arrival_tz, departure_utc)
    except pytz.UnknownTimeZoneError as e:
        logger.warning("Unknown timezone %s, treating flight as same-timezone", e)
        return 0
    except OverflowError:
        logger.debug(
            "Cannot resolve offset for %s at %s, treating flight as same-timezone",
            departure_tz,
            departure_local,
        )
        return 0

    return int((arr_offset - dep_offset) / 3600)


def get_current_date_in_tz(tz_name: str) -> date:
    """
    Get today's date in the specified timezone.

    Falls back to UTC for unknown timezones.
    """
    now_utc = datetime.now(pytz.UTC)
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %s, using UTC for today's date", tz_name)
        return now_utc.date()
    return now_utc.astimezone(tz).date()
