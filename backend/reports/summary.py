"""Plain-text fee summary used for the copy/export action."""

from __future__ import annotations

from backend.engine import FeeBreakdown, FeeCalculationParams, format_percentage, format_usd

SUMMARY_TITLE = "Jupiter Perpetuals Fee Calculation"


def build_fee_summary(params: FeeCalculationParams, breakdown: FeeBreakdown) -> str:
    lines = [
        SUMMARY_TITLE,
        f"Position Size: {format_usd(params.position_size_usd)}",
        f"Base Fee: {format_usd(breakdown.base_fee)}",
        f"Price Impact: {format_usd(breakdown.price_impact_fee)}",
        f"Borrow Fee: {format_usd(breakdown.borrow_fee)}",
        f"Total: {format_usd(breakdown.total_fees)} ({format_percentage(breakdown.total_fees_percentage)})",
    ]
    return "\n".join(lines)
