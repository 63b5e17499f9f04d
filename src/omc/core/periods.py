from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class RelativePeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


# Dashboard links a relative period to the granularity of its detail chart.
PERIOD_GRANULARITY = {
    RelativePeriod.DAY: Granularity.DAILY,
    RelativePeriod.WEEK: Granularity.WEEKLY,
    RelativePeriod.MONTH: Granularity.MONTHLY,
    RelativePeriod.QUARTER: Granularity.QUARTERLY,
    RelativePeriod.YEAR: Granularity.YEARLY,
}


def week_start(day: date) -> date:
    """Sunday that opens the week containing `day`."""
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def quarter_of(day: date) -> int:
    return (day.month - 1) // 3 + 1


def bucket_start(ts: datetime | date, granularity: Granularity | str) -> date:
    """
    Phase A: True start date of the bucket containing `ts`
    - This is what the series is sorted by; the key string is display only.
    """
    g = Granularity(granularity)
    day = ts.date() if isinstance(ts, datetime) else ts

    if g is Granularity.DAILY:
        return day
    if g is Granularity.WEEKLY:
        return week_start(day)
    if g is Granularity.MONTHLY:
        return date(day.year, day.month, 1)
    if g is Granularity.QUARTERLY:
        return date(day.year, 3 * (quarter_of(day) - 1) + 1, 1)
    return date(day.year, 1, 1)


def bucket_key(ts: datetime | date, granularity: Granularity | str) -> str:
    """
    Phase B: Display key for the bucket containing `ts`
    - daily / weekly: ISO date (weekly uses the Sunday that opens the week)
    - monthly: "2024-9" (1-based month, no padding)
    - quarterly: "Q3-2024"
    - yearly: "2024"
    """
    g = Granularity(granularity)
    start = bucket_start(ts, g)

    if g in (Granularity.DAILY, Granularity.WEEKLY):
        return start.isoformat()
    if g is Granularity.MONTHLY:
        return f"{start.year}-{start.month}"
    if g is Granularity.QUARTERLY:
        return f"Q{quarter_of(start)}-{start.year}"
    return f"{start.year:04d}"


def _align(timestamp: datetime, reference: datetime) -> datetime:
    # Aware pairs compare in the reference's zone; otherwise wall clock.
    if timestamp.tzinfo is not None and reference.tzinfo is not None:
        return timestamp.astimezone(reference.tzinfo)
    return timestamp


def in_period(
    timestamp: datetime, reference: datetime, period: RelativePeriod | str
) -> bool:
    """
    Is `timestamp` inside the current `period` as seen from `reference`?
    Quarters are calendar quarters and never match across years.
    """
    p = RelativePeriod(period)
    ts = _align(timestamp, reference).date()
    ref = reference.date()

    if p is RelativePeriod.DAY:
        return ts == ref
    if p is RelativePeriod.WEEK:
        start = week_start(ref)
        return start <= ts < start + timedelta(days=7)
    if p is RelativePeriod.MONTH:
        return (ts.year, ts.month) == (ref.year, ref.month)
    if p is RelativePeriod.QUARTER:
        return (ts.year, quarter_of(ts)) == (ref.year, quarter_of(ref))
    return ts.year == ref.year
