from __future__ import annotations

from typing import Sequence

import pandas as pd

from omc.core.records import OrderRecord


def headline_totals(orders: Sequence[OrderRecord]) -> dict:
    """
    Phase A: Dashboard tiles
    - Whole snapshot, dated or not (these totals are not time based).
    """
    return {
        "total_revenue": float(sum(o.total for o in orders)),
        "order_count": len(orders),
        "customer_count": len({o.email for o in orders}),
    }


def top_customers(orders: Sequence[OrderRecord], limit: int | None = None) -> pd.DataFrame:
    """
    Phase B: Spend per customer
    - Orders without an email can't be attributed and are skipped.
    - Sorted by total spent, highest first.
    """
    cols = ["email", "total", "orders"]
    rows = [{"email": o.email, "total": o.total} for o in orders if o.email]
    if not rows:
        return pd.DataFrame(columns=cols)

    out = (
        pd.DataFrame(rows)
        .groupby("email", as_index=False)
        .agg(total=("total", "sum"), orders=("total", "size"))
        .sort_values(["total", "email"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return out.head(limit) if limit is not None else out


def product_performance(
    orders: Sequence[OrderRecord], limit: int | None = None
) -> pd.DataFrame:
    """
    Phase C: Revenue and units per product title
    - Revenue here is price * quantity from the line items, not the order total.
    """
    cols = ["title", "total_revenue", "quantity_sold"]
    rows = [
        {"title": item.title, "revenue": item.revenue, "quantity": item.quantity}
        for o in orders
        for item in o.items
    ]
    if not rows:
        return pd.DataFrame(columns=cols)

    out = (
        pd.DataFrame(rows)
        .groupby("title", as_index=False)
        .agg(total_revenue=("revenue", "sum"), quantity_sold=("quantity", "sum"))
        .sort_values(["total_revenue", "title"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return out.head(limit) if limit is not None else out
