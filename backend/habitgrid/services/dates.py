"""
Calendar-day helpers.

Tasks are bucketed by calendar day in local time. Timezone-aware
timestamps are converted to the configured zone before the day is taken;
naive timestamps and plain dates keep their own day.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

DAY_FORMAT = "%Y-%m-%d"


def _zone(tz: str | ZoneInfo | None) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz or "UTC")


def to_day(value: date | datetime, tz: str | ZoneInfo | None = None) -> date:
    """Calendar day of a date or timestamp."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(_zone(tz))
        return value.date()
    return value


def day_key(value: date | datetime, tz: str | ZoneInfo | None = None) -> str:
    """`yyyy-MM-dd` bucket key of a date or timestamp."""
    return to_day(value, tz).strftime(DAY_FORMAT)


def parse_day(text: str, tz: str | ZoneInfo | None = None) -> date:
    """
    Parse `YYYY-MM-DD` or an ISO 8601 timestamp into a calendar day.

    Raises:
        ValueError: If the text is empty or not an ISO date/timestamp.
    """
    if text is None or not text.strip():
        raise ValueError("date is required")
    text = text.strip()

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    # Browsers send `...Z`; older interpreters only understand `+00:00`
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_day(datetime.fromisoformat(text), tz)
    except ValueError:
        raise ValueError(f"invalid date: {text!r}") from None
