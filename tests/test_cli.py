from __future__ import annotations

import json

import pytest

from yieldcast.cli import _build_config, _parser, main
from yieldcast.config import OperationKey


def test_breaker_flags_override_one_key() -> None:
    args = _parser().parse_args(
        [
            "--location",
            "Salento",
            "--rooms",
            "12",
            "--forecasting-breaker-threshold",
            "6",
            "--forecasting-breaker-cooldown-sec",
            "12.5",
        ]
    )
    config = _build_config(args)
    forecasting = config.breaker_for(OperationKey.FORECASTING)
    external = config.breaker_for(OperationKey.EXTERNAL_APIS)
    assert (forecasting.failure_threshold, forecasting.open_cooldown_sec) == (6, 12.5)
    assert (external.failure_threshold, external.open_cooldown_sec) == (5, 60.0)


def test_external_breaker_flags() -> None:
    args = _parser().parse_args(
        ["--location", "Pereira", "--rooms", "3", "--external-apis-breaker-threshold", "2"]
    )
    external = _build_config(args).breaker_for(OperationKey.EXTERNAL_APIS)
    assert (external.failure_threshold, external.open_cooldown_sec) == (2, 60.0)


def test_main_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--location", "Salento", "--property-type", "hostel", "--rooms", "8", "--horizon", "10", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["forecast_summary"]["horizon_days"] == 10
    assert len(payload["forecast"]) == 10
