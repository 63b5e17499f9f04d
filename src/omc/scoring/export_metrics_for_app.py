from __future__ import annotations

# Phase A: Purpose
# - The app can recompute everything from the snapshot, but a precomputed
#   set of small parquet files is handy for sharing / offline review:
#     one series per granularity + monthly forecasts per metric.

from pathlib import Path

import pandas as pd

from omc.config.settings import settings
from omc.core.periods import Granularity
from omc.forecasting.trend import build_forecast_report
from omc.ingest.load_orders import load_orders
from omc.transform.aggregate import aggregate, series_to_frame


def export_metrics(
    snapshot: Path | str | None = None,
    out_dir: Path | None = None,
    horizon: int = settings.FORECAST_HORIZON,
) -> list[Path]:
    orders = load_orders(snapshot)
    out_dir = out_dir if out_dir is not None else settings.OUTPUTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []

    # Phase B: One series file per granularity
    for g in Granularity:
        series_df = series_to_frame(aggregate(orders, g))
        out_path = out_dir / f"series_{g.value}.parquet"
        series_df.to_parquet(out_path, index=False)
        print(f"✅ Wrote: {out_path} | shape={series_df.shape}")
        written.append(out_path)

    # Phase C: Forecasts on the default granularity
    series = aggregate(orders, settings.DEFAULT_GRANULARITY)
    report = build_forecast_report(series, horizon=horizon)
    for metric, points in report.forecasts.items():
        fc_df = pd.DataFrame(
            [{"label": p.label, "value": p.value} for p in points],
            columns=["label", "value"],
        )
        out_path = out_dir / f"forecast_{metric.value}.parquet"
        fc_df.to_parquet(out_path, index=False)
        print(f"✅ Wrote: {out_path} | shape={fc_df.shape}")
        written.append(out_path)

    if report.alert:
        print(f"Alert: {report.alert}")

    return written


def main() -> None:
    export_metrics()


if __name__ == "__main__":
    main()
