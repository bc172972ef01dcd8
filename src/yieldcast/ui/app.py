from __future__ import annotations

import asyncio
import uuid

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from yieldcast.config import ForecastConfig, PropertyType, ServiceConfig
from yieldcast.service.forecast import Failure, ForecastService
from yieldcast.storage import default_storage

SEASON_COLORS = {"HIGH": "#d62728", "MEDIUM": "#ff7f0e", "LOW": "#1f77b4"}


st.set_page_config(page_title="yieldcast", layout="wide")

storage = default_storage()


@st.cache_data
def _load_runs() -> pd.DataFrame:
    return storage.list_runs()


@st.cache_resource
def _service(horizon: int, lookback: int, seed: int) -> ForecastService:
    config = ServiceConfig(forecast=ForecastConfig(lookback_months=lookback, horizon_days=horizon, seed=seed))
    return ForecastService.from_config(config)


def _render_header() -> None:
    st.title("yieldcast")
    st.caption("Seasonal occupancy forecasts, dynamic pricing and survival thresholds.")


def _run_form() -> None:
    with st.sidebar:
        st.header("New forecast")
        location = st.text_input("Location", "Salento")
        property_type = st.selectbox("Property type", [p.value for p in PropertyType], index=4)
        rooms = st.number_input("Rooms", min_value=1, max_value=2000, value=24)
        horizon = st.slider("Horizon (days)", 7, 90, 30)
        lookback = st.slider("Lookback (months)", 13, 36, 24)
        seed = st.number_input("Seed", min_value=1, max_value=9999, value=7)
        if not st.button("Run forecast"):
            return
    service = _service(horizon, lookback, int(seed))
    outcome = asyncio.run(service.run(location, property_type, int(rooms)))
    if isinstance(outcome, Failure):
        st.sidebar.error(outcome.message)
        return
    run_id = uuid.uuid4().hex
    storage.save_forecast(run_id, outcome, service.config)
    st.sidebar.success(f"Run saved: {run_id}")
    st.cache_data.clear()


def _plot_occupancy(days: pd.DataFrame, critical_threshold: int) -> go.Figure:
    fig = px.bar(
        days,
        x="stay_date",
        y="predicted_occupancy_pct",
        color="season_type",
        color_discrete_map=SEASON_COLORS,
        title="Forecast occupancy",
    )
    fig.add_hline(y=critical_threshold, line_dash="dash", annotation_text="critical")
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def _plot_adr(days: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=days["stay_date"],
            y=days["recommended_adr"],
            name="Recommended ADR",
            mode="lines+markers",
        )
    )
    critical = days[days["is_critical"]]
    fig.add_trace(
        go.Scatter(
            x=critical["stay_date"],
            y=critical["recommended_adr"],
            name="Critical day",
            mode="markers",
            marker=dict(size=10, symbol="x"),
        )
    )
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10), title="Recommended ADR")
    return fig


def _plot_strategy_mix(days: pd.DataFrame) -> go.Figure:
    grouped = days.groupby("pricing_strategy").size().reset_index(name="days")
    fig = px.pie(grouped, names="pricing_strategy", values="days", title="Strategy mix")
    fig.update_layout(height=300, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def _render_run_view(run_id: str) -> None:
    days = storage.load_forecast_days(run_id)
    meta = storage.load_run_meta(run_id) or {}
    summary = meta.get("forecast_summary", {})
    metrics = meta.get("survival_metrics", {})
    config = meta.get("config", {})
    threshold = config.get("forecast", {}).get("critical_occupancy_threshold", 30)

    st.subheader(f"{summary.get('location', '')} · {summary.get('property_type', '')} · run {run_id}")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Avg occupancy", f"{summary.get('avg_occupancy_pct', 0)}%")
    col2.metric("Avg ADR", f"{summary.get('avg_recommended_adr', 0):,}")
    col3.metric("Critical days", metrics.get("critical_days", 0))
    col4.metric("Survival ADR", f"{metrics.get('survival_rate_adr', 0):,}")

    left, right = st.columns(2)
    with left:
        st.plotly_chart(_plot_occupancy(days, threshold), use_container_width=True)
    with right:
        st.plotly_chart(_plot_adr(days), use_container_width=True)
    st.plotly_chart(_plot_strategy_mix(days), use_container_width=True)

    for line in meta.get("actionable_recommendations", []):
        st.warning(line)
    st.dataframe(days.drop(columns=["run_id"]), use_container_width=True)


def main() -> None:
    _render_header()
    _run_form()

    runs = _load_runs()
    if runs.empty:
        st.info("No forecasts yet. Run one from the sidebar.")
        return
    selected_run = st.selectbox("Select run", runs["run_id"].tolist())
    _render_run_view(selected_run)


if __name__ == "__main__":
    main()
