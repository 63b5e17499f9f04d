from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    # ---------- Core engine parameters ----------
    FORECAST_HORIZON: int = 3
    REVENUE_ALERT_THRESHOLD: float = 10000.0
    DEFAULT_GRANULARITY: str = "monthly"
    TOP_N: int = 10

    # ---------- Project paths ----------
    PROJECT_ROOT: Path = Path(__file__).resolve().parents[3]

    DATA_DIR: Path = PROJECT_ROOT / "data"
    RAW_DIR: Path = DATA_DIR / "raw"
    OUTPUTS_DIR: Path = DATA_DIR / "outputs"

    ORDERS_SNAPSHOT: Path = RAW_DIR / "orders.json"


settings = Settings()
