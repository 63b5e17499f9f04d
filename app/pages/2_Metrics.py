from __future__ import annotations

import bootstrap

bootstrap.add_src_to_path()
# Phase A: Metrics page goal
# - Chart revenue / orders / customers for every granularity, or only the
#   metric + period passed from the Dashboard (?type=...&period=...).

import altair as alt
import streamlit as st

from data import snapshot_or_stop
from omc.core.periods import PERIOD_GRANULARITY, Granularity, RelativePeriod
from omc.transform.aggregate import Metric, aggregate, series_to_frame

st.set_page_config(page_title="Order Metrics Console", layout="wide")


def _line_chart(df, metric: Metric) -> alt.Chart:
    # Phase B: x is the bucket start (true time axis), key shown in tooltip
    return (
        alt.Chart(df)
        .mark_line(point=True)
        .encode(
            x=alt.X("start:T", title=None),
            y=alt.Y(f"{metric.attr}:Q", title=metric.attr.replace("_", " ").title()),
            tooltip=[
                alt.Tooltip("key:N", title="Bucket"),
                alt.Tooltip(f"{metric.attr}:Q", format=",.2f"),
            ],
        )
        .properties(height=260)
    )


def main() -> None:
    st.title("Detailed Metrics")

    orders = snapshot_or_stop()

    # Phase C: Resolve selection from query params or a Dashboard drill-down
    # (unknown values -> show all)
    params = dict(st.query_params)
    params.update(st.session_state.pop("metrics_selection", {}))
    try:
        metrics = [Metric(params["type"])] if "type" in params else list(Metric)
    except ValueError:
        metrics = list(Metric)
    try:
        granularities = (
            [PERIOD_GRANULARITY[RelativePeriod(params["period"])]]
            if "period" in params
            else list(Granularity)
        )
    except ValueError:
        granularities = list(Granularity)

    # Phase D: One section per granularity, one chart per metric
    for g in granularities:
        st.subheader(f"{g.value.capitalize()} metrics")
        df = series_to_frame(aggregate(orders, g))
        if df.empty:
            st.info("No dated orders yet.")
            continue
        for m in metrics:
            st.altair_chart(_line_chart(df, m), use_container_width=True)


if __name__ == "__main__":
    main()
