from __future__ import annotations

import bootstrap

bootstrap.add_src_to_path()
# Phase A: Growth page goal
# - Revenue trend at a chosen granularity.
# - Top customers by spend and product performance by line-item revenue.

import altair as alt
import streamlit as st

from data import snapshot_or_stop
from omc.config.settings import settings
from omc.core.periods import Granularity
from omc.transform.aggregate import aggregate, series_to_frame
from omc.transform.growth import product_performance, top_customers

st.set_page_config(page_title="Order Metrics Console", layout="wide")


def main() -> None:
    st.title("Growth")

    orders = snapshot_or_stop()

    # Phase B: Revenue trends
    st.subheader("Revenue trends")
    granularity = st.radio(
        "Granularity", list(Granularity), horizontal=True, format_func=lambda g: g.value
    )
    trend = series_to_frame(aggregate(orders, granularity))
    if trend.empty:
        st.info("No dated orders yet.")
    else:
        chart = (
            alt.Chart(trend)
            .mark_bar()
            .encode(
                x=alt.X("key:N", sort=None, title=None),
                y=alt.Y("revenue:Q", title="Revenue", axis=alt.Axis(format=",.0f")),
                tooltip=[
                    alt.Tooltip("key:N", title="Bucket"),
                    alt.Tooltip("revenue:Q", title="Revenue", format=",.2f"),
                    alt.Tooltip("order_count:Q", title="Orders"),
                ],
            )
            .properties(height=320)
        )
        st.altair_chart(chart, use_container_width=True)

    # Phase C: Tables
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Top customers")
        st.dataframe(top_customers(orders, limit=settings.TOP_N), hide_index=True, width="stretch")
    with c2:
        st.subheader("Product performance")
        st.dataframe(
            product_performance(orders, limit=settings.TOP_N), hide_index=True, width="stretch"
        )


if __name__ == "__main__":
    main()
