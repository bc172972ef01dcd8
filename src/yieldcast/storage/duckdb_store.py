from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import duckdb
import pandas as pd

from yieldcast.config import ServiceConfig
from yieldcast.service.forecast import ForecastResult


@dataclass(slots=True)
class ForecastStore:
    db_path: Path

    def __post_init__(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self.db_path))

    def _init_schema(self) -> None:
        with self._connect() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS forecast_runs (
                    run_id TEXT PRIMARY KEY,
                    created_at TIMESTAMP,
                    location TEXT,
                    property_type TEXT,
                    rooms INTEGER,
                    config_json TEXT,
                    summary_json TEXT
                );
                """
            )
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS forecast_days (
                    run_id TEXT,
                    day_offset INTEGER,
                    stay_date DATE,
                    predicted_occupancy_pct INTEGER,
                    season_type TEXT,
                    pricing_strategy TEXT,
                    price_multiplier DOUBLE,
                    recommended_adr INTEGER,
                    revenue_focus TEXT,
                    is_critical BOOLEAN
                );
                """
            )

    def run_exists(self, run_id: str) -> bool:
        with self._connect() as con:
            result = con.execute(
                "SELECT COUNT(*) FROM forecast_runs WHERE run_id = ?",
                [run_id],
            ).fetchone()
            return bool(result and result[0] > 0)

    def save_forecast(self, run_id: str, result: ForecastResult, config: ServiceConfig) -> None:
        if self.run_exists(run_id):
            msg = f"Run {run_id} already exists"
            raise ValueError(msg)
        payload = result.to_dict()
        summary = {
            "forecast_summary": payload["forecast_summary"],
            "seasonal_analysis": payload["seasonal_analysis"],
            "survival_metrics": payload["survival_metrics"],
            "actionable_recommendations": payload["actionable_recommendations"],
        }
        critical_offsets = {c.day_offset for c in result.critical_periods}
        with self._connect() as con:
            con.execute(
                "INSERT INTO forecast_runs VALUES (?, ?, ?, ?, ?, ?, ?)",
                [
                    run_id,
                    datetime.now(timezone.utc),
                    result.profile.location,
                    result.profile.property_type.value,
                    result.rooms,
                    json.dumps(config.to_metadata()),
                    json.dumps(summary),
                ],
            )
            days_df = pd.DataFrame(
                [
                    {
                        "run_id": run_id,
                        "day_offset": p.day_offset,
                        "stay_date": p.date.isoformat(),
                        "predicted_occupancy_pct": p.predicted_occupancy_pct,
                        "season_type": p.season_type.value,
                        "pricing_strategy": p.pricing_strategy.value,
                        "price_multiplier": p.price_multiplier,
                        "recommended_adr": p.recommended_adr,
                        "revenue_focus": p.revenue_focus.value,
                        "is_critical": p.day_offset in critical_offsets,
                    }
                    for p in result.forecast
                ]
            )
            if not days_df.empty:
                con.execute(
                    "INSERT INTO forecast_days SELECT run_id, day_offset, CAST(stay_date AS DATE), "
                    "predicted_occupancy_pct, season_type, pricing_strategy, price_multiplier, "
                    "recommended_adr, revenue_focus, is_critical FROM days_df"
                )

    def list_runs(self) -> pd.DataFrame:
        with self._connect() as con:
            return con.execute(
                "SELECT run_id, created_at, location, property_type, rooms "
                "FROM forecast_runs ORDER BY created_at DESC"
            ).fetchdf()

    def load_run_meta(self, run_id: str) -> dict[str, object] | None:
        with self._connect() as con:
            row = con.execute(
                "SELECT config_json, summary_json FROM forecast_runs WHERE run_id = ?",
                [run_id],
            ).fetchone()
            if not row:
                return None
            return {"config": json.loads(row[0]), **json.loads(row[1])}

    def load_forecast_days(self, run_id: str) -> pd.DataFrame:
        with self._connect() as con:
            return con.execute(
                "SELECT * FROM forecast_days WHERE run_id = ? ORDER BY day_offset",
                [run_id],
            ).fetchdf()
