"""Price impact curve sampling for charts."""

from __future__ import annotations

import numpy as np
import pandas as pd

from .config import DEFAULT_TRADE_IMPACT_FEE_SCALAR
from .fees import calculate_price_impact_fee

CURVE_STEPS = 100


def get_price_impact_data(
    max_trade_size: float = 1_000_000.0,
    scalar: float = DEFAULT_TRADE_IMPACT_FEE_SCALAR,
) -> pd.DataFrame:
    """Sample the price impact fee at 101 evenly spaced sizes from 0 to ``max_trade_size``."""

    sizes = np.linspace(0.0, max_trade_size, CURVE_STEPS + 1)
    fees = [calculate_price_impact_fee(float(size), scalar).fee for size in sizes]
    return pd.DataFrame({"size": sizes, "fee": fees})
