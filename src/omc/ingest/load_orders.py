from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from omc.config.settings import settings
from omc.core.records import OrderRecord


def _assert_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Missing file: {path}")


def _parse_items(value):
    # CSV exports carry line items as a JSON string column.
    if isinstance(value, str):
        return json.loads(value) if value.strip() else []
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    return list(value)


def _read_documents(path: Path) -> list[dict]:
    suffix = path.suffix.lower()

    if suffix == ".json":
        payload = json.loads(path.read_text())
        if isinstance(payload, dict):
            payload = payload.get("orders", [])
        return list(payload)

    if suffix == ".jsonl":
        return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]

    if suffix in (".csv", ".parquet"):
        df = pd.read_csv(path) if suffix == ".csv" else pd.read_parquet(path)
        docs = df.astype(object).where(df.notna(), None).to_dict(orient="records")
        for doc in docs:
            if "items" in doc:
                doc["items"] = _parse_items(doc["items"])
        return docs

    raise ValueError(f"Unsupported snapshot format: {path.suffix!r} ({path})")


def load_orders(path: Path | str | None = None) -> list[OrderRecord]:
    """
    Phase A: Read an order snapshot exported from the document store
    - .json (array, or {"orders": [...]}), .jsonl, .csv, .parquet
    - Each document -> OrderRecord; undated orders are kept (they still
      count toward headline totals).
    """
    path = Path(path) if path is not None else settings.ORDERS_SNAPSHOT
    _assert_exists(path)
    return [OrderRecord.from_mapping(doc) for doc in _read_documents(path)]


def main() -> None:
    orders = load_orders()

    dated = sum(1 for o in orders if o.created_at is not None)
    print(f"✅ Snapshot loaded: {settings.ORDERS_SNAPSHOT}")
    print(f"Orders: {len(orders):,} | dated: {dated:,} | undated: {len(orders) - dated:,}")
    print(f"Distinct customers: {len({o.email for o in orders}):,}")


if __name__ == "__main__":
    main()
