import logging
from datetime import date, datetime, time, timedelta
from typing import Tuple

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"]

TODAY_LABEL = "今天"


def compose_timestamp(day: date, at: time) -> datetime:
    """Combine the calendar day of ``day`` with the hour and minute of ``at``.

    Seconds and microseconds are truncated. If ``at`` cannot be applied the
    day itself is returned at midnight.
    """
    if isinstance(day, datetime):
        fallback = day
        day = day.date()
    else:
        fallback = datetime.combine(day, time.min)
    try:
        return datetime(day.year, day.month, day.day, at.hour, at.minute)
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Could not compose timestamp from {day!r} and {at!r}: {e}")
        return fallback


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Local midnight of ``day`` and of the following day."""
    if isinstance(day, datetime):
        day = day.date()
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def notification_identifier(name: str, timestamp: datetime) -> str:
    return f"med-{name}-{int(timestamp.timestamp())}"


def reminder_body(name: str, amount: str) -> str:
    return f"该服用 {name} 了，剂量：{amount}"


def day_header(day: date, today: date) -> Tuple[str, str]:
    """Title and subtitle shown above a day's dose list."""
    if isinstance(day, datetime):
        day = day.date()
    title = TODAY_LABEL if day == today else WEEKDAY_NAMES[day.weekday()]
    return title, day.strftime("%Y-%m-%d")
