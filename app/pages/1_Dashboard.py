from __future__ import annotations

import bootstrap

bootstrap.add_src_to_path()
# Phase A: Dashboard goal
# - Headline tiles over the whole snapshot.
# - A relative-period breakdown (day .. year) for the selected metric,
#   with a jump to the matching Metrics chart.

import pandas as pd
import streamlit as st

from data import snapshot_or_stop
from omc.core.periods import PERIOD_GRANULARITY
from omc.transform.aggregate import Metric, period_breakdown
from omc.transform.growth import headline_totals

st.set_page_config(page_title="Order Metrics Console", layout="wide")

METRIC_LABELS = {
    "Revenue": Metric.REVENUE,
    "Orders": Metric.ORDER_COUNT,
    "Customers": Metric.CUSTOMER_COUNT,
}


def main() -> None:
    st.title("Dashboard")

    orders = snapshot_or_stop()

    # Phase B: Headline tiles
    totals = headline_totals(orders)
    c1, c2, c3 = st.columns(3)
    c1.metric("Total revenue", f"${totals['total_revenue']:,.2f}")
    c2.metric("Total orders", f"{totals['order_count']:,}")
    c3.metric("Customers", f"{totals['customer_count']:,}")

    # Phase C: Period breakdown for the chosen metric
    label = st.radio("Breakdown", list(METRIC_LABELS.keys()), horizontal=True)
    metric = METRIC_LABELS[label]

    rows = period_breakdown(orders, metric)
    view = pd.DataFrame(
        [
            {
                "Period": p.value.capitalize(),
                label: f"${v:,.2f}" if metric is Metric.REVENUE else int(v),
            }
            for p, v in rows
        ]
    )
    st.dataframe(view, hide_index=True, width="stretch")

    # Phase D: Drill-down into Metrics with the same selection
    period = st.selectbox("Open detailed chart for", [p for p, _ in rows], format_func=lambda p: p.value)
    if st.button("Show detailed metrics"):
        st.session_state["metrics_selection"] = {"type": metric.value, "period": period.value}
        st.switch_page("pages/2_Metrics.py")

    st.caption(
        f"Detailed chart uses {PERIOD_GRANULARITY[period].value} buckets. "
        "Orders without a creation date count toward the totals above but not the breakdown."
    )


if __name__ == "__main__":
    main()
