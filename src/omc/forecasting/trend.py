from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from omc.config.settings import settings
from omc.transform.aggregate import Bucket, Metric, metric_values


@dataclass(frozen=True)
class ForecastPoint:
    label: str
    # Unconstrained linear projection; may be negative.
    value: float


@dataclass(frozen=True)
class ForecastReport:
    """
    Phase A: What the forecasting page shows
    - forecasts: metric -> projected points (empty when history is too short)
    - alert: advisory message for this computation only, or None
    """

    forecasts: dict
    alert: str | None


def fit_line(values: Sequence[float]) -> tuple[float, float]:
    """
    Ordinary least squares of y against x = 0..n-1.
    Returns (slope, intercept). Needs n >= 2; the denominator is then > 0.
    """
    y = np.asarray(values, dtype=np.float64)
    n = y.size
    if n < 2:
        raise ValueError(f"Need at least 2 points to fit a line, got {n}")

    x = np.arange(n, dtype=np.float64)
    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def forecast(
    series: Sequence[Bucket], metric: Metric | str, horizon: int
) -> list[ForecastPoint]:
    """
    Phase B: Extend the fitted trend `horizon` steps past the last bucket
    - Fewer than 2 buckets -> [] (no trend is a valid outcome, not an error).
    - Labels are "Forecast 1", "Forecast 2", ...
    """
    m = Metric(metric)
    if horizon < 1:
        raise ValueError(f"horizon must be >= 1, got {horizon}")

    values = metric_values(series, m)
    n = len(values)
    if n < 2:
        return []

    slope, intercept = fit_line(values)
    return [
        ForecastPoint(label=f"Forecast {j - n + 1}", value=slope * j + intercept)
        for j in range(n, n + horizon)
    ]


def revenue_alert(
    points: Sequence[ForecastPoint],
    threshold: float = settings.REVENUE_ALERT_THRESHOLD,
) -> str | None:
    """
    Phase C: Threshold rule
    - Only the first forecast point is inspected.
    - Returns the message for this call; callers own display / dedup history.
    """
    if not points:
        return None
    if points[0].value > threshold:
        return f"Revenue is forecasted to exceed ${threshold:,.0f} next period!"
    return None


def build_forecast_report(
    series: Sequence[Bucket],
    horizon: int = settings.FORECAST_HORIZON,
    threshold: float = settings.REVENUE_ALERT_THRESHOLD,
) -> ForecastReport:
    forecasts = {m: forecast(series, m, horizon) for m in Metric}
    alert = revenue_alert(forecasts[Metric.REVENUE], threshold=threshold)
    return ForecastReport(forecasts=forecasts, alert=alert)
