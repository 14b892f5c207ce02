"""Static fee configuration and default resolution for the fee engine.

Defaults come from three layers.  A value set explicitly on the request wins,
then the per-asset default from :data:`ASSET_CONFIGS`, and finally the global
fallback in :data:`GLOBAL_FEE_DEFAULTS` which :func:`calculate_total_fees`
applies on its own when nothing else was supplied.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .breakdown import FeeCalculationParams

logger = logging.getLogger(__name__)

BPS_POWER = 10_000
USDC_DECIMALS = 1_000_000

BASE_FEE_BPS_OPEN = 6.0
BASE_FEE_BPS_CLOSE = 6.0

DEFAULT_TRADE_IMPACT_FEE_SCALAR = 100_000_000.0

DEFAULT_GAS_FEE_SOL = 0.005
SOL_PRICE_USD = 100.0

MIN_LEVERAGE = 1.0
MAX_LEVERAGE = 50.0

DEFAULT_ASSET = "SOL"

DEBUG_ENV_VAR = "FEES_DEBUG_CALCULATIONS"


def debug_logging_enabled() -> bool:
    value = os.getenv(DEBUG_ENV_VAR, "")
    return value.lower() in {"1", "true", "yes", "on"}


def apply_debug_logging() -> bool:
    """Switch every ``backend.engine`` logger to DEBUG when the env flag is set."""

    enabled = debug_logging_enabled()
    if enabled:
        logging.getLogger(__package__).setLevel(logging.DEBUG)
    return enabled


apply_debug_logging()


@dataclass(frozen=True)
class GlobalFeeDefaults:
    """Fallbacks used by the aggregator when a request leaves a field unset."""

    increase_position_bps: float = BASE_FEE_BPS_OPEN
    decrease_position_bps: float = BASE_FEE_BPS_CLOSE
    trade_impact_fee_scalar: float = DEFAULT_TRADE_IMPACT_FEE_SCALAR
    utilization_rate: float = 0.198
    hourly_borrow_rate: float = 1.2


GLOBAL_FEE_DEFAULTS = GlobalFeeDefaults()


@dataclass(frozen=True)
class AssetConfig:
    symbol: str
    default_hourly_borrow_rate: float
    default_utilization: float
    trade_impact_fee_scalar: float


@dataclass(frozen=True)
class CustodyParams:
    """Reference values of a custody account, as read from chain."""

    increase_position_bps: float = BASE_FEE_BPS_OPEN
    decrease_position_bps: float = BASE_FEE_BPS_CLOSE
    trade_impact_fee_scalar: float = DEFAULT_TRADE_IMPACT_FEE_SCALAR
    hourly_funding_dbps: float = 0.606
    tokens_locked: float = 200.0
    tokens_owned: float = 1010.0


DEFAULT_CUSTODY_PARAMS = CustodyParams()


ASSET_CONFIGS: Dict[str, AssetConfig] = {
    "SOL": AssetConfig(
        symbol="SOL",
        default_hourly_borrow_rate=0.606,
        default_utilization=0.198,
        trade_impact_fee_scalar=100_000_000.0,
    ),
    "ETH": AssetConfig(
        symbol="ETH",
        default_hourly_borrow_rate=0.5,
        default_utilization=0.15,
        trade_impact_fee_scalar=120_000_000.0,
    ),
    "BTC": AssetConfig(
        symbol="BTC",
        default_hourly_borrow_rate=0.4,
        default_utilization=0.12,
        trade_impact_fee_scalar=150_000_000.0,
    ),
    "USDT": AssetConfig(
        symbol="USDT",
        default_hourly_borrow_rate=0.3,
        default_utilization=0.25,
        trade_impact_fee_scalar=200_000_000.0,
    ),
}


def get_asset_config(symbol: Optional[str]) -> AssetConfig:
    """Return the config for ``symbol``, falling back to the default asset."""

    key = (symbol or "").strip().upper()
    config = ASSET_CONFIGS.get(key)
    if config is None:
        logger.warning("Unknown asset, using default asset config", extra={"asset": symbol, "fallback": DEFAULT_ASSET})
        return ASSET_CONFIGS[DEFAULT_ASSET]
    return config


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_fee_params(params: "FeeCalculationParams") -> "FeeCalculationParams":
    """Fill unset overrides from the asset table.

    Only ``None`` counts as unset, an explicit ``0`` is kept.  Fields without an
    asset-level default (the custom bps) are left for the aggregator's global
    fallback.
    """

    asset_config = get_asset_config(params.asset)
    return replace(
        params,
        asset=asset_config.symbol,
        trade_impact_fee_scalar=_first_set(params.trade_impact_fee_scalar, asset_config.trade_impact_fee_scalar),
        utilization_rate=_first_set(params.utilization_rate, asset_config.default_utilization),
        hourly_borrow_rate=_first_set(params.hourly_borrow_rate, asset_config.default_hourly_borrow_rate),
    )
