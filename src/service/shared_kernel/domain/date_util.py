"""
Date helpers shared by the lots and the managers.

All times are naive local datetimes. Dates picked in a modal are parsed to
midnight of that day.
"""

from datetime import datetime, timedelta
from typing import Optional


DATE_FORMAT = '%Y-%m-%d'
RESERVED_TIME_FORMAT = '%a %H:%M'
DAY = timedelta(hours=24)


def today_date(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def equal_date(date1: datetime, date2: datetime) -> bool:
    return date1.date() == date2.date()


def parse_date(value: str) -> datetime:
    """Parse a `YYYY-MM-DD` picker value; raises ValueError on bad input"""
    return datetime.strptime(value, DATE_FORMAT)


def format_date(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value else 'nil'


def check_date_range(start: datetime, end: datetime, now: Optional[datetime] = None) -> str:
    """Empty string when the range is acceptable, otherwise a user facing message"""
    if start < today_date(now):
        return f'Start date is in the past: {format_date(start)}'

    if end < start:
        return (
            f'End date is before start date: Start({format_date(start)}) - End({format_date(end)})'
        )

    return ''


def is_before_cutoff(now: datetime, hour: int, minute: int) -> bool:
    return (now.hour, now.minute) < (hour, minute)
