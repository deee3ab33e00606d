# File: utils/dt_utils.py
"""Date and time utilities for KidsGoals.

Pure Python date/time functions. Nothing here reads the wall clock except
dt_now_utc(); engines never call it and always receive `now` from the caller.

Functions:
    - set_default_timezone / get_default_timezone: Zone used for naive inputs
    - dt_now_utc: Current UTC datetime (manager layer only)
    - as_utc: Normalize a datetime to UTC
    - dt_parse: Normalize str/date/datetime input to an aware datetime
    - dt_to_utc: Parse and convert to UTC
    - dt_to_iso: Serialize an aware datetime for storage
    - dt_add_interval: Add calendar-aware intervals (days, weeks, months, ...)
    - dt_format_duration: Format timedelta to a compact string
    - dt_time_until: Time remaining between `now` and a target
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

TIME_UNIT_MINUTES = "minutes"
TIME_UNIT_HOURS = "hours"
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo | str) -> None:
    """Set the zone used to interpret naive datetimes.

    Args:
        tz: ZoneInfo object or IANA zone name (e.g. "Europe/Berlin")
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = ZoneInfo(tz) if isinstance(tz, str) else tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


def is_valid_timezone(name: str) -> bool:
    """Return True if `name` is a known IANA time zone."""
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion / Parsing
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in DEFAULT_TIME_ZONE.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def dt_parse(dt_input: str | date | datetime | None) -> datetime | None:
    """Normalize various datetime input formats to an aware datetime.

    Accepts ISO-8601 strings (date or datetime), date objects and datetime
    objects. Naive results are localized to DEFAULT_TIME_ZONE.

    Returns:
        Timezone-aware datetime, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2025-04-15")
        datetime.datetime(2025, 4, 15, 0, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))
    """
    if not dt_input:
        return None

    result: datetime | None = None

    if isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())
    elif isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input)
        except ValueError:
            _LOGGER.debug("dt_parse: unparseable datetime string %r", dt_input)
            return None
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=DEFAULT_TIME_ZONE)
    return result


def dt_to_utc(dt_input: str | date | datetime | None) -> datetime | None:
    """Parse a datetime input, apply timezone if naive, and convert to UTC.

    Example:
        "2025-04-07T14:30:00+02:00" → datetime(2025, 4, 7, 12, 30, tzinfo=UTC)
    """
    parsed = dt_parse(dt_input)
    if parsed is None:
        return None
    return parsed.astimezone(UTC)


def dt_to_iso(dt_obj: datetime | None) -> str | None:
    """Serialize a datetime as a UTC ISO-8601 string (None passes through)."""
    if dt_obj is None:
        return None
    return as_utc(dt_obj).isoformat()


# ==============================================================================
# Interval Arithmetic
# ==============================================================================


def dt_add_interval(
    base_dt: datetime,
    interval_unit: str,
    delta: int,
) -> datetime | None:
    """Add a time interval to a datetime.

    Months and years use calendar arithmetic (Jan 31 + 1 month → Feb 28/29).

    Args:
        base_dt: Base datetime (naive values are localized first)
        interval_unit: One of the TIME_UNIT_* constants
        delta: Number of units to add (may be negative)

    Returns:
        New datetime, or None for an unknown unit or an out-of-range result.
    """
    if base_dt.tzinfo is None:
        base_dt = base_dt.replace(tzinfo=DEFAULT_TIME_ZONE)

    try:
        if interval_unit == TIME_UNIT_MINUTES:
            return base_dt + timedelta(minutes=delta)
        if interval_unit == TIME_UNIT_HOURS:
            return base_dt + timedelta(hours=delta)
        if interval_unit == TIME_UNIT_DAYS:
            return base_dt + timedelta(days=delta)
        if interval_unit == TIME_UNIT_WEEKS:
            return base_dt + timedelta(weeks=delta)
        if interval_unit == TIME_UNIT_MONTHS:
            return base_dt + relativedelta(months=delta)
        if interval_unit == TIME_UNIT_YEARS:
            return base_dt + relativedelta(years=delta)
    except (ValueError, OverflowError) as exc:
        _LOGGER.error("Error adding interval: %s", exc)
        return None

    _LOGGER.warning("Unknown interval_unit: %s", interval_unit)
    return None


# ==============================================================================
# Durations
# ==============================================================================


def dt_format_duration(td: timedelta | None) -> str:
    """Format a timedelta into a compact human-readable duration string.

    Shows at most the two most significant units.

    Examples:
        dt_format_duration(timedelta(days=1, hours=6)) → "1d 6h"
        dt_format_duration(timedelta(days=2, hours=3, minutes=5)) → "2d 3h"
        dt_format_duration(timedelta(minutes=30)) → "30m"
        dt_format_duration(None) → "0"
    """
    if td is None or td <= timedelta():
        return "0"

    total_seconds = int(td.total_seconds())
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60

    parts: list[str] = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    return " ".join(parts[:2]) if parts else "0"


def dt_time_until(target_dt: datetime | None, now: datetime) -> timedelta | None:
    """Return the time remaining from `now` until `target_dt`.

    Returns:
        None when there is no target, timedelta(0) once the target has passed,
        otherwise the positive remaining duration.
    """
    if target_dt is None:
        return None
    remaining = as_utc(target_dt) - as_utc(now)
    return remaining if remaining > timedelta() else timedelta()
