import logging
import math

import pytest

from backend.engine.config import apply_debug_logging
from backend.engine import (
    ASSET_CONFIGS,
    FeeCalculationParams,
    FeeInputError,
    get_asset_config,
    parse_numeric_input,
    resolve_fee_params,
    validate_params,
)


def _make_params(**overrides) -> FeeCalculationParams:
    values = {
        "trade_size_usd": 1000.0,
        "leverage": 10.0,
        "is_opening": True,
        "position_duration_hours": 24.0,
        "asset": "SOL",
    }
    values.update(overrides)
    return FeeCalculationParams(**values)


def test_asset_lookup_is_case_insensitive():
    assert get_asset_config("eth") is ASSET_CONFIGS["ETH"]
    assert get_asset_config(" btc ") is ASSET_CONFIGS["BTC"]


def test_unknown_asset_falls_back_to_sol(caplog):
    with caplog.at_level(logging.WARNING, logger="backend.engine.config"):
        config = get_asset_config("DOGE")
    assert config is ASSET_CONFIGS["SOL"]
    assert any("Unknown asset" in record.getMessage() for record in caplog.records)


def test_resolve_fills_unset_fields_from_asset():
    resolved = resolve_fee_params(_make_params(asset="eth"))
    assert resolved.asset == "ETH"
    assert resolved.trade_impact_fee_scalar == 120_000_000.0
    assert resolved.utilization_rate == 0.15
    assert resolved.hourly_borrow_rate == 0.5
    assert resolved.custom_increase_position_bps is None
    assert resolved.custom_decrease_position_bps is None


def test_resolve_keeps_explicit_overrides_including_zero():
    params = _make_params(asset="SOL", utilization_rate=0.0, hourly_borrow_rate=2.5)
    resolved = resolve_fee_params(params)
    assert resolved.utilization_rate == 0.0
    assert resolved.hourly_borrow_rate == 2.5
    assert resolved.trade_impact_fee_scalar == 100_000_000.0
    # the input is left untouched
    assert params.trade_impact_fee_scalar is None


def test_sol_defaults_differ_from_global_fallback():
    resolved = resolve_fee_params(_make_params())
    assert resolved.hourly_borrow_rate == 0.606


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1000", 1000.0),
        ("12.5 USD", 12.5),
        ("  7", 7.0),
        (".5", 0.5),
        ("-2", -2.0),
        ("1e3", 1000.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        (3, 3.0),
    ],
)
def test_parse_numeric_input(text, expected):
    assert parse_numeric_input(text) == expected


def test_parse_numeric_input_custom_default():
    assert parse_numeric_input("n/a", default=24.0) == 24.0


def test_validate_accepts_resolved_params():
    params = resolve_fee_params(_make_params())
    assert validate_params(params) is params


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"trade_size_usd": -1.0}, "trade_size_usd"),
        ({"leverage": 0.5}, "leverage"),
        ({"leverage": 51.0}, "leverage"),
        ({"position_duration_hours": -3.0}, "position_duration_hours"),
        ({"trade_impact_fee_scalar": 0.0}, "trade_impact_fee_scalar"),
        ({"utilization_rate": 1.5}, "utilization_rate"),
        ({"hourly_borrow_rate": -0.1}, "hourly_borrow_rate"),
        ({"custom_decrease_position_bps": -6.0}, "custom_decrease_position_bps"),
        ({"trade_size_usd": math.nan}, "finite"),
    ],
)
def test_validate_rejects_invalid_params(overrides, fragment):
    with pytest.raises(FeeInputError) as excinfo:
        validate_params(_make_params(**overrides))
    assert fragment in str(excinfo.value)


def test_validate_reports_every_problem():
    with pytest.raises(FeeInputError) as excinfo:
        validate_params(_make_params(trade_size_usd=-1.0, leverage=0.0, position_duration_hours=-1.0))
    assert len(excinfo.value.problems) == 3
    assert isinstance(excinfo.value, ValueError)


def test_debug_env_flag_lowers_engine_log_level(monkeypatch):
    engine_logger = logging.getLogger("backend.engine")
    previous = engine_logger.level
    try:
        monkeypatch.setenv("FEES_DEBUG_CALCULATIONS", "yes")
        assert apply_debug_logging() is True
        assert engine_logger.level == logging.DEBUG
        assert logging.getLogger("backend.engine.breakdown").getEffectiveLevel() == logging.DEBUG

        monkeypatch.setenv("FEES_DEBUG_CALCULATIONS", "0")
        assert apply_debug_logging() is False
    finally:
        engine_logger.setLevel(previous)
