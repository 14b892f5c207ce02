"""Aggregate fee breakdown for a leveraged position."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .config import DEFAULT_ASSET, DEFAULT_GAS_FEE_SOL, GLOBAL_FEE_DEFAULTS, SOL_PRICE_USD
from .fees import calculate_base_fee, calculate_borrow_fee, calculate_price_impact_fee, safe_divide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeCalculationParams:
    trade_size_usd: float
    leverage: float
    is_opening: bool
    position_duration_hours: float
    asset: str = DEFAULT_ASSET
    trade_impact_fee_scalar: Optional[float] = None
    utilization_rate: Optional[float] = None
    hourly_borrow_rate: Optional[float] = None
    custom_increase_position_bps: Optional[float] = None
    custom_decrease_position_bps: Optional[float] = None

    @property
    def position_size_usd(self) -> float:
        return self.trade_size_usd * self.leverage


@dataclass(frozen=True)
class FeeBreakdown:
    """USD fee amounts and their share of the position notional.

    Percentages are ``nan`` (or ``inf``) when the notional is zero.
    ``borrow_fee_hourly`` is the simple, single-hour borrow amount.
    """

    position_size_usd: float
    base_fee: float
    base_fee_percentage: float
    price_impact_fee: float
    price_impact_fee_percentage: float
    borrow_fee: float
    borrow_fee_hourly: float
    borrow_fee_percentage: float
    estimated_gas_fee: float
    total_fees: float
    total_fees_percentage: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def estimated_gas_fee_usd() -> float:
    """Static estimate of transaction and priority fees in USD."""

    return DEFAULT_GAS_FEE_SOL * SOL_PRICE_USD


def _or_default(value: Optional[float], default: float) -> float:
    # only None is unset; unlike a falsy check, an explicit 0 or nan override is kept
    return default if value is None else value


def calculate_total_fees(params: FeeCalculationParams) -> FeeBreakdown:
    """Compose base, price impact, borrow and gas fees into one breakdown.

    Every calculator works on the leveraged notional.  Unset overrides fall
    back to :data:`GLOBAL_FEE_DEFAULTS`; asset defaults are applied beforehand
    by :func:`resolve_fee_params`.
    """

    defaults = GLOBAL_FEE_DEFAULTS
    position_size = params.position_size_usd

    base = calculate_base_fee(
        position_size,
        params.is_opening,
        increase_position_bps=_or_default(params.custom_increase_position_bps, defaults.increase_position_bps),
        decrease_position_bps=_or_default(params.custom_decrease_position_bps, defaults.decrease_position_bps),
    )
    impact = calculate_price_impact_fee(
        position_size,
        _or_default(params.trade_impact_fee_scalar, defaults.trade_impact_fee_scalar),
    )
    borrow = calculate_borrow_fee(
        position_size,
        _or_default(params.utilization_rate, defaults.utilization_rate),
        _or_default(params.hourly_borrow_rate, defaults.hourly_borrow_rate),
        params.position_duration_hours,
    )
    gas_fee = estimated_gas_fee_usd()

    total_fees = base.fee + impact.fee + borrow.total_fee + gas_fee
    total_pct = safe_divide(total_fees, position_size) * 100.0

    if not math.isfinite(total_fees):
        logger.warning(
            "Fee total is not computable",
            extra={"asset": params.asset, "position_size": position_size, "total_fees": total_fees},
        )
    logger.debug(
        "FEES",
        extra={
            "asset": params.asset,
            "position_size": position_size,
            "is_opening": params.is_opening,
            "base_fee": base.fee,
            "price_impact_fee": impact.fee,
            "borrow_fee": borrow.total_fee,
            "gas_fee": gas_fee,
            "total_fees": total_fees,
        },
    )

    return FeeBreakdown(
        position_size_usd=position_size,
        base_fee=base.fee,
        base_fee_percentage=base.percentage,
        price_impact_fee=impact.fee,
        price_impact_fee_percentage=impact.percentage,
        borrow_fee=borrow.total_fee,
        borrow_fee_hourly=borrow.hourly_fee,
        borrow_fee_percentage=borrow.percentage,
        estimated_gas_fee=gas_fee,
        total_fees=total_fees,
        total_fees_percentage=total_pct,
    )
