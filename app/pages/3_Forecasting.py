from __future__ import annotations

import bootstrap

bootstrap.add_src_to_path()
# Phase A: Forecasting page goal
# - Fit a straight line through the history of each metric and project it
#   a few periods ahead.
# - Surface the revenue alert for this computation only (no running list).

import pandas as pd
import streamlit as st
import altair as alt

from data import snapshot_or_stop
from omc.config.settings import settings
from omc.core.periods import Granularity
from omc.forecasting.trend import build_forecast_report
from omc.transform.aggregate import Metric, aggregate

st.set_page_config(page_title="Order Metrics Console", layout="wide")


def _plot_frame(series, points, metric: Metric) -> pd.DataFrame:
    # Phase B: History + forecast in one long table for a single legend
    actual = pd.DataFrame(
        {"label": [b.key for b in series], "value": [b.value(metric) for b in series]}
    )
    actual["series"] = "Actual"
    fc = pd.DataFrame({"label": [p.label for p in points], "value": [p.value for p in points]})
    fc["series"] = "Forecast"
    return pd.concat([actual, fc], ignore_index=True)


def main() -> None:
    st.title("Forecasting")

    orders = snapshot_or_stop()

    c1, c2 = st.columns(2)
    granularity = c1.selectbox(
        "Granularity",
        list(Granularity),
        index=list(Granularity).index(Granularity(settings.DEFAULT_GRANULARITY)),
        format_func=lambda g: g.value,
    )
    horizon = c2.slider(
        "Periods ahead", min_value=1, max_value=12, value=settings.FORECAST_HORIZON
    )

    series = aggregate(orders, granularity)
    report = build_forecast_report(series, horizon=horizon)

    # Phase C: Alert (recomputed every run, shown once)
    if report.alert:
        st.success(report.alert)

    if len(series) < 2:
        st.info("At least two periods of history are needed to draw a trend.")
        return

    # Phase D: One chart per metric, x in series order (labels are categorical)
    for metric in Metric:
        st.subheader(metric.attr.replace("_", " ").title())
        plot_df = _plot_frame(series, report.forecasts[metric], metric)
        chart = (
            alt.Chart(plot_df)
            .mark_line(point=True)
            .encode(
                x=alt.X("label:N", sort=None, title=None),
                y=alt.Y("value:Q", title=None, axis=alt.Axis(format=",.0f")),
                color=alt.Color("series:N", title=None, legend=alt.Legend(orient="top")),
                strokeDash=alt.StrokeDash("series:N", legend=None),
                tooltip=[
                    alt.Tooltip("label:N", title="Period"),
                    alt.Tooltip("series:N", title="Series"),
                    alt.Tooltip("value:Q", title="Value", format=",.2f"),
                ],
            )
            .properties(height=300)
        )
        st.altair_chart(chart, use_container_width=True)

    st.caption(
        "Forecasts extend a least-squares straight line; they ignore seasonality "
        "and can go below zero when the trend is falling."
    )


if __name__ == "__main__":
    main()
