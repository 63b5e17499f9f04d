from __future__ import annotations

# Shared snapshot loader for all pages (one cached read per file change).

from pathlib import Path

import streamlit as st

from omc.config.settings import settings
from omc.core.records import OrderRecord
from omc.ingest.load_orders import load_orders


@st.cache_data
def load_snapshot(path: str, mtime_ns: int) -> list[OrderRecord]:
    # mtime_ns is only part of the cache key: a re-exported file is re-read.
    return load_orders(path)


def read_snapshot(path: Path | str = settings.ORDERS_SNAPSHOT) -> list[OrderRecord]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing file: {path}")
    return load_snapshot(str(path), path.stat().st_mtime_ns)


def snapshot_or_stop() -> list[OrderRecord]:
    try:
        return read_snapshot()
    except FileNotFoundError as exc:
        st.warning(f"{exc}. Export the orders collection to this path first.")
        st.stop()
