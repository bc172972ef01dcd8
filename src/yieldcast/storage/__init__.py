from __future__ import annotations

from pathlib import Path

from yieldcast.storage.duckdb_store import ForecastStore


def default_storage() -> ForecastStore:
    return ForecastStore(Path(".yieldcast/yieldcast.duckdb"))


__all__ = ["ForecastStore", "default_storage"]
