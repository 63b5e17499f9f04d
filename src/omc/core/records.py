from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Mapping

import pandas as pd


def _local(epoch_seconds: float) -> datetime:
    # Instants from the store are shown in the machine's local zone.
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).astimezone()


def resolve_timestamp(value: Any) -> datetime | None:
    """
    Phase A: Turn whatever the document store handed us into a datetime
    - datetime / date / pandas.Timestamp -> datetime
    - ISO-8601 strings -> parsed by pandas
    - int/float -> epoch seconds, as an aware local-time datetime
    - {"seconds": .., "nanoseconds": ..} (or the underscored export form), local time
    - "now" / "today" are not timestamps -> None
    - Anything else, or NaT, -> None (the order simply can't be bucketed)
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if seconds is None:
            return None
        try:
            return _local(float(seconds) + float(nanos) / 1e9)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    if isinstance(value, numbers.Real):
        if pd.isna(value):
            return None
        try:
            return _local(float(value))
        except (ValueError, OverflowError, OSError):
            return None

    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, str) and value.strip().lower() in ("", "now", "today"):
        return None

    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


@dataclass(frozen=True)
class LineItem:
    title: str
    price: float
    quantity: int

    @property
    def revenue(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderRecord:
    """
    One order as read from the snapshot.
    - `total` is trusted as given; it is never recomputed from `items`.
    - `created_at` is None when the source timestamp was absent or unparseable.
    """

    id: str
    email: str | None
    total: float
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    @classmethod
    def from_mapping(cls, doc: Mapping[str, Any]) -> "OrderRecord":
        order_id = str(doc.get("id", ""))

        raw_total = doc.get("total", 0)
        try:
            total = float(raw_total if raw_total is not None else 0)
        except (TypeError, ValueError):
            raise ValueError(f"Order {order_id!r}: total is not numeric: {raw_total!r}")
        if pd.isna(total) or total < 0:
            raise ValueError(f"Order {order_id!r}: total must be >= 0, got {raw_total!r}")

        raw_items = doc.get("items")
        if raw_items is None:
            raw_items = ()

        items = tuple(
            LineItem(
                title=str(item.get("title", "")),
                price=float(item.get("price", 0) or 0),
                quantity=int(item.get("quantity", 0) or 0),
            )
            for item in raw_items
        )

        email = doc.get("email")
        if email is not None and not isinstance(email, str):
            email = None if pd.isna(email) else str(email)

        return cls(
            id=order_id,
            email=email or None,
            total=total,
            items=items,
            created_at=resolve_timestamp(doc.get("createdAt")),
        )
