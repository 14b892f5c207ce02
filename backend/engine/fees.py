"""Fee calculators for perpetual positions.

All amounts are USD and all calculators are pure.  Inputs are not validated
here: a zero notional produces ``nan`` percentages and a zero impact scalar
produces ``inf`` fees instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import BASE_FEE_BPS_CLOSE, BASE_FEE_BPS_OPEN, BPS_POWER, DEFAULT_TRADE_IMPACT_FEE_SCALAR


@dataclass(frozen=True)
class FeeResult:
    fee: float
    percentage: float


@dataclass(frozen=True)
class BorrowFeeResult:
    hourly_fee: float
    total_fee: float
    percentage: float


def safe_divide(numerator: float, denominator: float) -> float:
    """IEEE division: ``x / 0`` gives ``inf`` or ``nan`` rather than raising."""

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def _power(base: float, exponent: float) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def calculate_base_fee(
    position_size_usd: float,
    is_opening: bool,
    increase_position_bps: Optional[float] = None,
    decrease_position_bps: Optional[float] = None,
) -> FeeResult:
    """Flat open/close fee charged on the position notional.

    A missing or zero rate falls back to the standard 6 bps.
    """

    if is_opening:
        rate_bps = increase_position_bps or BASE_FEE_BPS_OPEN
    else:
        rate_bps = decrease_position_bps or BASE_FEE_BPS_CLOSE
    rate = rate_bps / BPS_POWER
    return FeeResult(fee=position_size_usd * rate, percentage=rate * 100.0)


def calculate_price_impact_fee(
    position_size_usd: float,
    trade_impact_fee_scalar: float = DEFAULT_TRADE_IMPACT_FEE_SCALAR,
) -> FeeResult:
    """Size-dependent impact fee approximating orderbook depth.

    The implied impact rate grows linearly with size, so the fee itself grows
    with the square of the notional.
    """

    size_bps = position_size_usd * BPS_POWER
    impact_bps = safe_divide(size_bps, trade_impact_fee_scalar)
    fee = position_size_usd * impact_bps / BPS_POWER
    return FeeResult(fee=fee, percentage=safe_divide(fee, position_size_usd) * 100.0)


def calculate_utilization(tokens_locked: float, tokens_owned: float) -> float:
    """Share of the custody's owned tokens currently locked in positions."""

    if tokens_owned > 0 and tokens_locked > 0:
        return tokens_locked / tokens_owned
    return 0.0


def calculate_borrow_fee(
    position_size_usd: float,
    utilization_rate: float,
    hourly_funding_dbps: float,
    duration_hours: float,
) -> BorrowFeeResult:
    """Borrow fee compounded hourly over ``duration_hours``.

    ``hourly_funding_dbps / 1000`` scaled by pool utilization gives the
    effective hourly rate.  ``duration_hours`` is used as an exponent, so
    fractional hours are fine.
    """

    hourly_rate = hourly_funding_dbps / 1000.0 * utilization_rate
    hourly_fee = position_size_usd * hourly_rate
    total_fee = position_size_usd * _power(1.0 + hourly_rate, duration_hours) - position_size_usd
    return BorrowFeeResult(
        hourly_fee=hourly_fee,
        total_fee=total_fee,
        percentage=safe_divide(total_fee, position_size_usd) * 100.0,
    )
