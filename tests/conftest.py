from __future__ import annotations

from datetime import datetime

import pytest

from omc.core.records import LineItem, OrderRecord


def make_order(
    order_id: str,
    total: float,
    email: str | None = "a@x.com",
    created_at: datetime | None = None,
    items: tuple[LineItem, ...] = (),
) -> OrderRecord:
    return OrderRecord(id=order_id, email=email, total=total, items=items, created_at=created_at)


@pytest.fixture
def scenario_orders() -> list[OrderRecord]:
    """Three orders over January and February 2024, two customers."""
    return [
        make_order("o1", 100.0, "a@x.com", datetime(2024, 1, 5)),
        make_order("o2", 200.0, "b@x.com", datetime(2024, 1, 20)),
        make_order("o3", 150.0, "a@x.com", datetime(2024, 2, 10)),
    ]


@pytest.fixture
def mixed_orders() -> list[OrderRecord]:
    """Orders across years and quarters, plus one without a timestamp."""
    return [
        make_order("m1", 50.0, "a@x.com", datetime(2024, 9, 3, 10, 0)),
        make_order("m2", 75.0, "b@x.com", datetime(2024, 10, 1, 9, 30)),
        make_order("m3", 25.0, "a@x.com", datetime(2024, 10, 1, 18, 0)),
        make_order("m4", 300.0, "c@x.com", datetime(2024, 12, 30, 12, 0)),
        make_order("m5", 120.0, "b@x.com", datetime(2025, 1, 2, 8, 0)),
        make_order("m6", 10.0, None, datetime(2025, 1, 3, 8, 0)),
        make_order("m7", 999.0, "d@x.com", None),
    ]
