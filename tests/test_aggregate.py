"""Test the shared aggregator, period summaries and breakdowns."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from conftest import make_order
from omc.core.periods import Granularity, RelativePeriod
from omc.transform.aggregate import (
    Bucket,
    Metric,
    aggregate,
    metric_values,
    period_breakdown,
    period_summary,
    series_to_frame,
)


class TestAggregate:

    def test_monthly_scenario(self, scenario_orders):
        series = aggregate(scenario_orders, "monthly")
        assert [(b.key, b.revenue, b.order_count, b.customer_count) for b in series] == [
            ("2024-1", 300.0, 2, 2),
            ("2024-2", 150.0, 1, 1),
        ]

    def test_empty_input(self):
        assert aggregate([], Granularity.DAILY) == []

    def test_only_undated_orders(self):
        assert aggregate([make_order("x", 10.0)], "daily") == []

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_sum_invariants(self, mixed_orders, granularity):
        series = aggregate(mixed_orders, granularity)
        dated = [o for o in mixed_orders if o.created_at is not None]
        assert sum(b.revenue for b in series) == pytest.approx(sum(o.total for o in dated))
        assert sum(b.order_count for b in series) == len(dated)

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_customer_count_bound(self, mixed_orders, granularity):
        for b in aggregate(mixed_orders, granularity):
            assert b.customer_count <= b.order_count

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_strictly_chronological(self, mixed_orders, granularity):
        starts = [b.start for b in aggregate(mixed_orders, granularity)]
        assert all(a < b for a, b in zip(starts, starts[1:]))

    def test_monthly_orders_by_date_not_string(self, mixed_orders):
        keys = [b.key for b in aggregate(mixed_orders, "monthly")]
        assert keys == ["2024-9", "2024-10", "2024-12", "2025-1"]

    def test_quarterly_crosses_year(self, mixed_orders):
        series = aggregate(mixed_orders, "quarterly")
        assert [b.key for b in series] == ["Q3-2024", "Q4-2024", "Q1-2025"]
        assert [b.start for b in series] == [date(2024, 7, 1), date(2024, 10, 1), date(2025, 1, 1)]

    def test_weekly_bucket_spans_two_years(self, mixed_orders):
        series = aggregate(mixed_orders, "weekly")
        last = series[-1]
        assert last.key == "2024-12-29"
        assert last.order_count == 3  # Dec 30, Jan 2, Jan 3
        assert last.revenue == pytest.approx(430.0)

    def test_missing_email_counts_as_one_customer(self):
        orders = [
            make_order("a", 1.0, None, datetime(2024, 5, 1)),
            make_order("b", 1.0, None, datetime(2024, 5, 2)),
            make_order("c", 1.0, "z@x.com", datetime(2024, 5, 3)),
        ]
        (bucket,) = aggregate(orders, "monthly")
        assert bucket.customer_count == 2

    def test_same_day_orders_share_bucket(self, mixed_orders):
        series = aggregate(mixed_orders, "daily")
        oct1 = next(b for b in series if b.key == "2024-10-01")
        assert (oct1.order_count, oct1.customer_count, oct1.revenue) == (2, 2, 100.0)

    def test_input_not_mutated(self, scenario_orders):
        before = list(scenario_orders)
        aggregate(scenario_orders, "weekly")
        assert scenario_orders == before

    def test_restricted_to_period(self, mixed_orders):
        now = datetime(2025, 1, 3, 12)
        series = aggregate(mixed_orders, "daily", period="week", now=now)
        assert [b.key for b in series] == ["2024-12-30", "2025-01-02", "2025-01-03"]

    def test_unknown_granularity(self, scenario_orders):
        with pytest.raises(ValueError):
            aggregate(scenario_orders, "fortnightly")


class TestMetric:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("revenue", Metric.REVENUE),
            ("orderCount", Metric.ORDER_COUNT),
            ("order_count", Metric.ORDER_COUNT),
            ("orders", Metric.ORDER_COUNT),
            ("customerCount", Metric.CUSTOMER_COUNT),
            ("customers", Metric.CUSTOMER_COUNT),
        ],
    )
    def test_aliases(self, raw, expected):
        assert Metric(raw) is expected

    def test_unknown_metric(self):
        with pytest.raises(ValueError):
            Metric("profit")

    def test_metric_values(self, scenario_orders):
        series = aggregate(scenario_orders, "monthly")
        assert metric_values(series, "orderCount") == [2, 1]
        assert metric_values(series, Metric.REVENUE) == [300.0, 150.0]


class TestSeriesFrame:

    def test_columns_and_order(self, scenario_orders):
        df = series_to_frame(aggregate(scenario_orders, "monthly"))
        assert list(df.columns) == ["key", "start", "revenue", "order_count", "customer_count"]
        assert df["key"].tolist() == ["2024-1", "2024-2"]
        assert df["start"].is_monotonic_increasing

    def test_empty(self):
        df = series_to_frame([])
        assert df.empty
        assert "revenue" in df.columns


class TestPeriodSummary:

    NOW = datetime(2025, 1, 3, 12)

    def test_week(self, mixed_orders):
        s = period_summary(mixed_orders, "week", now=self.NOW)
        assert s.period is RelativePeriod.WEEK
        assert s.revenue == pytest.approx(430.0)
        assert s.order_count == 3
        assert s.customer_count == 3  # c, b, anonymous

    def test_quarter_excludes_previous_year(self, mixed_orders):
        s = period_summary(mixed_orders, "quarter", now=self.NOW)
        assert s.order_count == 2
        assert s.revenue == pytest.approx(130.0)

    def test_undated_orders_never_match(self, mixed_orders):
        s = period_summary(mixed_orders, "year", now=datetime(2024, 6, 1))
        assert s.order_count == 4
        assert s.revenue == pytest.approx(450.0)

    def test_breakdown_covers_all_periods(self, mixed_orders):
        rows = period_breakdown(mixed_orders, "orders", now=self.NOW)
        assert [p for p, _ in rows] == list(RelativePeriod)
        assert dict(rows) == {
            RelativePeriod.DAY: 1,
            RelativePeriod.WEEK: 3,
            RelativePeriod.MONTH: 2,
            RelativePeriod.QUARTER: 2,
            RelativePeriod.YEAR: 2,
        }

    def test_breakdown_revenue(self, scenario_orders):
        rows = dict(period_breakdown(scenario_orders, "revenue", now=datetime(2024, 2, 10, 20)))
        assert rows[RelativePeriod.DAY] == 150.0
        assert rows[RelativePeriod.MONTH] == 150.0
        assert rows[RelativePeriod.QUARTER] == 450.0

    def test_bucket_value_accessor(self):
        b = Bucket(key="2024", revenue=1.0, order_count=2, customer_count=1, start=date(2024, 1, 1))
        assert b.value("customerCount") == 1
