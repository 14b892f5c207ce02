"""Input coercion and validation ahead of the fee calculators.

The calculators accept any float and let ``nan``/``inf`` propagate.  Callers
that take user input run it through :func:`parse_numeric_input` and
:func:`validate_params` first; invalid parameters are rejected, never clamped.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional, Union

from .breakdown import FeeCalculationParams
from .config import MAX_LEVERAGE, MIN_LEVERAGE

_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class FeeInputError(ValueError):
    """Raised when fee calculation parameters fail validation."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def parse_numeric_input(value: Union[str, float, int, None], default: Optional[float] = 0.0) -> Optional[float]:
    """Coerce form input to a float.

    Text is read up to the end of its leading number, so ``"12.5 USD"`` gives
    ``12.5``.  Empty or unparsable text gives ``default``.
    """

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMERIC_PREFIX.match(value.strip())
    if match is None:
        return default
    return float(match.group(0))


def _check_finite(name: str, value: Optional[float], problems: List[str]) -> bool:
    if value is None:
        return False
    if not math.isfinite(value):
        problems.append(f"{name} must be a finite number")
        return False
    return True


def validate_params(params: FeeCalculationParams) -> FeeCalculationParams:
    """Reject parameters the fee formulas are not meant for.

    Returns ``params`` unchanged when valid, otherwise raises
    :class:`FeeInputError` listing every problem found.
    """

    problems: List[str] = []

    if _check_finite("trade_size_usd", params.trade_size_usd, problems) and params.trade_size_usd < 0:
        problems.append("trade_size_usd must not be negative")
    if _check_finite("leverage", params.leverage, problems) and not (
        MIN_LEVERAGE <= params.leverage <= MAX_LEVERAGE
    ):
        problems.append(f"leverage must be between {MIN_LEVERAGE:g} and {MAX_LEVERAGE:g}")
    if _check_finite("position_duration_hours", params.position_duration_hours, problems) and (
        params.position_duration_hours < 0
    ):
        problems.append("position_duration_hours must not be negative")
    if _check_finite("trade_impact_fee_scalar", params.trade_impact_fee_scalar, problems) and (
        params.trade_impact_fee_scalar <= 0
    ):
        problems.append("trade_impact_fee_scalar must be positive")
    if _check_finite("utilization_rate", params.utilization_rate, problems) and not (
        0.0 <= params.utilization_rate <= 1.0
    ):
        problems.append("utilization_rate must be between 0 and 1")
    if _check_finite("hourly_borrow_rate", params.hourly_borrow_rate, problems) and params.hourly_borrow_rate < 0:
        problems.append("hourly_borrow_rate must not be negative")
    for name in ("custom_increase_position_bps", "custom_decrease_position_bps"):
        value = getattr(params, name)
        if _check_finite(name, value, problems) and value < 0:
            problems.append(f"{name} must not be negative")

    if problems:
        raise FeeInputError(problems)
    return params
