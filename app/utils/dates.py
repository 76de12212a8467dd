"""날짜 유틸리티 — UTC 자정 기준 달력 날짜 계산.

Date utilities — calendar-day arithmetic on UTC midnight.
Work order days are calendar dates, never elapsed-time divisions, so DST
shifts in the faena's local timezone never change the day count.
"""

from collections.abc import Iterator
from datetime import date, datetime, timedelta, timezone


def to_utc_date(value: date | datetime) -> date:
    """datetime을 UTC 기준 날짜로 정규화합니다 (Normalize to the UTC calendar date)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(timezone.utc).date()
    return value


def days_between(start: date, end: date) -> int:
    """양 끝을 포함한 일수 (Inclusive number of calendar days)."""
    return (end - start).days + 1


def iter_calendar_days(start: date, end: date) -> Iterator[tuple[int, date]]:
    """(day_number, date) 쌍을 1부터 순서대로 생성합니다.

    Yield ``(day_number, day_date)`` for every calendar day in the inclusive
    range, numbering from 1.
    """
    current: date = start
    day_number: int = 1
    while current <= end:
        yield day_number, current
        current += timedelta(days=1)
        day_number += 1
