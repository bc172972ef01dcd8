from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import uuid

from yieldcast.config import BreakerConfig, ForecastConfig, OperationKey, PropertyType, ServiceConfig
from yieldcast.service.forecast import Failure, ForecastResult, ForecastService
from yieldcast.storage import default_storage


def _flag(key: OperationKey) -> str:
    return key.value.replace("_", "-")


def _build_config(args: argparse.Namespace) -> ServiceConfig:
    forecast = ForecastConfig(
        lookback_months=args.lookback_months,
        horizon_days=args.horizon,
        seed=args.seed,
        critical_occupancy_threshold=args.critical_threshold,
        break_even_occupancy_pct=args.break_even,
    )
    defaults = ServiceConfig()
    breakers: dict[OperationKey, BreakerConfig] = {}
    for key in OperationKey:
        base = defaults.breaker_for(key)
        threshold = getattr(args, f"{key.value}_breaker_threshold")
        cooldown = getattr(args, f"{key.value}_breaker_cooldown_sec")
        breakers[key] = BreakerConfig(
            failure_threshold=base.failure_threshold if threshold is None else threshold,
            open_cooldown_sec=base.open_cooldown_sec if cooldown is None else cooldown,
        )
    return ServiceConfig(
        forecast=forecast,
        breakers=breakers,
        min_request_interval_sec=args.min_interval_sec,
        operation_timeout_sec=args.timeout_sec,
    )


def _print_summary(result: ForecastResult) -> None:
    summary = result.forecast_summary()
    seasonal = result.analysis.seasonal_analysis
    print(
        f"{summary['location']} ({summary['property_type']}, {summary['rooms']} rooms, "
        f"{summary['market_class']}): avg occupancy {summary['avg_occupancy_pct']}%, "
        f"avg ADR {summary['avg_recommended_adr']}"
    )
    print(
        f"HIGH {seasonal.high_days} / MEDIUM {seasonal.medium_days} / LOW {seasonal.low_days} days, "
        f"{seasonal.critical_days} critical, cash flow {seasonal.cash_flow_priority.value}"
    )
    for point in result.next_7_days:
        print(
            f"  {point.date.isoformat()}  {point.predicted_occupancy_pct:>3}%  "
            f"{point.season_type.value:<6} {point.pricing_strategy.value:<17} {point.recommended_adr}"
        )
    for line in result.actionable_recommendations:
        print(f"- {line}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seasonal occupancy forecast and pricing strategy")
    parser.add_argument("--location", required=True)
    parser.add_argument(
        "--property-type",
        choices=[p.value for p in PropertyType],
        default=PropertyType.FOUR_STAR.value,
    )
    parser.add_argument("--rooms", type=int, required=True)
    parser.add_argument("--horizon", type=int, default=30)
    parser.add_argument("--lookback-months", type=int, default=24)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--critical-threshold", type=int, default=30)
    parser.add_argument("--break-even", type=int, default=28)
    parser.add_argument("--min-interval-sec", type=float, default=1.0)
    parser.add_argument("--timeout-sec", type=float, default=30.0)
    for key in OperationKey:
        parser.add_argument(f"--{_flag(key)}-breaker-threshold", type=int, default=None)
        parser.add_argument(f"--{_flag(key)}-breaker-cooldown-sec", type=float, default=None)
    parser.add_argument("--save", action="store_true", help="Archive the forecast in DuckDB")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = _build_config(args)
    service = ForecastService.from_config(config)
    outcome = asyncio.run(service.run(args.location, args.property_type, args.rooms))
    if isinstance(outcome, Failure):
        print(json.dumps(outcome.to_dict()), file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        _print_summary(outcome)
    if args.save:
        run_id = uuid.uuid4().hex
        default_storage().save_forecast(run_id, outcome, config)
        print(f"Saved run: {run_id}")


if __name__ == "__main__":
    main()
