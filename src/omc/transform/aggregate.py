from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Sequence

import pandas as pd

from omc.core.periods import (
    Granularity,
    RelativePeriod,
    bucket_key,
    bucket_start,
    in_period,
)
from omc.core.records import OrderRecord

SERIES_COLUMNS = ["key", "start", "revenue", "order_count", "customer_count"]


class Metric(str, Enum):
    REVENUE = "revenue"
    ORDER_COUNT = "orderCount"
    CUSTOMER_COUNT = "customerCount"

    @classmethod
    def _missing_(cls, value):
        # Accept the attribute spelling and the short names used by the dashboard links.
        aliases = {
            "order_count": cls.ORDER_COUNT,
            "orders": cls.ORDER_COUNT,
            "customer_count": cls.CUSTOMER_COUNT,
            "customers": cls.CUSTOMER_COUNT,
        }
        return aliases.get(value)

    @property
    def attr(self) -> str:
        return {
            Metric.REVENUE: "revenue",
            Metric.ORDER_COUNT: "order_count",
            Metric.CUSTOMER_COUNT: "customer_count",
        }[self]


@dataclass(frozen=True)
class Bucket:
    key: str
    revenue: float
    order_count: int
    customer_count: int
    # True start of the interval; used for ordering only.
    start: date

    def value(self, metric: Metric | str) -> float:
        return getattr(self, Metric(metric).attr)


@dataclass(frozen=True)
class PeriodSummary:
    period: RelativePeriod
    revenue: float
    order_count: int
    customer_count: int

    def value(self, metric: Metric | str) -> float:
        return getattr(self, Metric(metric).attr)


def _resolve_now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now().astimezone()


def _dated(orders: Iterable[OrderRecord]) -> list[OrderRecord]:
    return [o for o in orders if o.created_at is not None]


def orders_in_period(
    orders: Iterable[OrderRecord],
    period: RelativePeriod | str,
    now: datetime | None = None,
) -> list[OrderRecord]:
    p = RelativePeriod(period)
    ref = _resolve_now(now)
    return [o for o in _dated(orders) if in_period(o.created_at, ref, p)]


def aggregate(
    orders: Sequence[OrderRecord],
    granularity: Granularity | str,
    period: RelativePeriod | str | None = None,
    now: datetime | None = None,
) -> list[Bucket]:
    """
    Phase A: Bucket orders into a chronological series
    - Orders without a resolvable timestamp are skipped (they can't be bucketed).
    - Optional `period` keeps only orders inside that relative period of `now`.

    Phase B: Per bucket
    - revenue = sum of order totals
    - order_count = number of orders
    - customer_count = distinct emails (a missing email counts once)

    Phase C: Ordering
    - Sorted by each bucket's true start date, never by the key string,
      so "2024-9" comes before "2024-10" and "Q4-2024" before "Q1-2025".
    """
    g = Granularity(granularity)
    dated = orders_in_period(orders, period, now) if period is not None else _dated(orders)
    if not dated:
        return []

    df = pd.DataFrame(
        {
            "key": [bucket_key(o.created_at, g) for o in dated],
            "start": [bucket_start(o.created_at, g) for o in dated],
            "total": [float(o.total) for o in dated],
            "email": [o.email if o.email is not None else "" for o in dated],
        }
    )

    grouped = (
        df.groupby(["start", "key"], sort=True)
        .agg(
            revenue=("total", "sum"),
            order_count=("total", "size"),
            customer_count=("email", "nunique"),
        )
        .reset_index()
    )

    return [
        Bucket(
            key=row.key,
            revenue=float(row.revenue),
            order_count=int(row.order_count),
            customer_count=int(row.customer_count),
            start=row.start,
        )
        for row in grouped.itertuples(index=False)
    ]


def metric_values(series: Sequence[Bucket], metric: Metric | str) -> list[float]:
    m = Metric(metric)
    return [b.value(m) for b in series]


def series_to_frame(series: Sequence[Bucket]) -> pd.DataFrame:
    """Chart/parquet friendly view of a series (one row per bucket, in order)."""
    df = pd.DataFrame([asdict(b) for b in series], columns=SERIES_COLUMNS)
    df["start"] = pd.to_datetime(df["start"])
    return df


def period_summary(
    orders: Sequence[OrderRecord],
    period: RelativePeriod | str,
    now: datetime | None = None,
) -> PeriodSummary:
    """Revenue / orders / distinct customers inside one relative period."""
    p = RelativePeriod(period)
    scoped = orders_in_period(orders, p, now)
    return PeriodSummary(
        period=p,
        revenue=float(sum(o.total for o in scoped)),
        order_count=len(scoped),
        customer_count=len({o.email for o in scoped}),
    )


def period_breakdown(
    orders: Sequence[OrderRecord],
    metric: Metric | str,
    now: datetime | None = None,
) -> list[tuple[RelativePeriod, float]]:
    """
    Dashboard breakdown: one value per relative period (day .. year).
    `now` is fixed once so all five periods see the same reference instant.
    """
    m = Metric(metric)
    ref = _resolve_now(now)
    return [(p, period_summary(orders, p, ref).value(m)) for p in RelativePeriod]
