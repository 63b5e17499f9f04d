from __future__ import annotations

# Phase A: Streamlit entrypoint
# - Streamlit auto-loads files in app/pages for multi-page apps.
# - This file is mainly for global config and a small landing page.

import streamlit as st


def main() -> None:
    # Phase B: App-wide settings (title, layout)
    st.set_page_config(
        page_title="Order Metrics Console",
        layout="wide",
    )

    st.title("Order Metrics Console")

    st.write(
        "This console reads a snapshot of the orders collection and turns it into "
        "revenue, order and customer metrics. Every page uses the same aggregation "
        "engine, so a number on the dashboard always matches the charts behind it."
    )

    st.write("What you can do here:")
    st.markdown(
        "- **Dashboard:** Headline totals and a day / week / month / quarter / year breakdown.\n"
        "- **Metrics:** Revenue, orders and customers charted at any granularity.\n"
        "- **Forecasting:** A straight-line trend projected a few periods ahead, with a revenue alert.\n"
        "- **Growth:** Revenue trends, top customers and product performance."
    )

    st.info("Use the sidebar to navigate through the pages.")


if __name__ == "__main__":
    main()
