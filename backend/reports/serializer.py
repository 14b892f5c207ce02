"""Serialisers for fee payloads exposed to the frontend."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from backend.engine import FeeBreakdown, format_percentage, format_usd, is_computable

BASE_FEE_TOOLTIP = "0.06% flat rate charged when opening, closing, or partially closing positions"
PRICE_IMPACT_TOOLTIP = (
    "Simulates orderbook dynamics to prevent price manipulation and ensure fair compensation for JLP holders"
)
GAS_FEE_TOOLTIP = (
    "Solana transaction and priority fees. SOL rent for escrow account (PDA) will be returned when position is closed"
)


def _json_float(value: float) -> Optional[float]:
    return float(value) if is_computable(value) else None


def serialise_breakdown(breakdown: FeeBreakdown) -> Dict[str, Optional[float]]:
    """Return the breakdown as JSON-safe floats; non-finite values become ``None``."""

    return {key: _json_float(value) for key, value in breakdown.to_dict().items()}


def serialise_fee_rows(breakdown: FeeBreakdown) -> List[Dict[str, Any]]:
    """Return the formatted rows of the fee breakdown card."""

    borrow_tooltip = (
        f"Compounds hourly at {format_usd(breakdown.borrow_fee_hourly)}/hr. "
        "Based on pool utilization and position duration"
    )
    return [
        {
            "label": "Base Fee",
            "amount": format_usd(breakdown.base_fee),
            "percentage": format_percentage(breakdown.base_fee_percentage),
            "tooltip": BASE_FEE_TOOLTIP,
            "variant": "default",
        },
        {
            "label": "Price Impact Fee",
            "amount": format_usd(breakdown.price_impact_fee),
            "percentage": format_percentage(breakdown.price_impact_fee_percentage),
            "tooltip": PRICE_IMPACT_TOOLTIP,
            "variant": "highlight",
        },
        {
            "label": "Borrow Fee",
            "amount": format_usd(breakdown.borrow_fee),
            "percentage": format_percentage(breakdown.borrow_fee_percentage),
            "tooltip": borrow_tooltip,
            "variant": "default",
        },
        {
            "label": "Est. Gas Fee",
            "amount": format_usd(breakdown.estimated_gas_fee),
            "percentage": "-",
            "tooltip": GAS_FEE_TOOLTIP,
            "variant": "default",
        },
        {
            "label": "Total Fees",
            "amount": format_usd(breakdown.total_fees),
            "percentage": format_percentage(breakdown.total_fees_percentage),
            "tooltip": None,
            "variant": "total",
        },
    ]


def serialise_curve(curve: pd.DataFrame) -> List[Dict[str, Optional[float]]]:
    """Return sampled curve points suitable for JSON responses."""

    if curve is None or curve.empty:
        return []

    payload: List[Dict[str, Optional[float]]] = []
    for row in curve.itertuples():
        payload.append({"size": _json_float(row.size), "fee": _json_float(row.fee)})
    return payload
