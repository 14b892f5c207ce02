"""Command line fee estimate for a perpetuals position.

Prints the same text summary the calculator's copy action produces::

    fee-calculator --trade-size 1000 --leverage 10 --asset SOL --duration 24

Per-asset defaults fill in any advanced parameter that is not given.  Use
``--json`` for the full breakdown.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from backend.engine import (
    FeeCalculationParams,
    FeeInputError,
    calculate_total_fees,
    parse_numeric_input,
    resolve_fee_params,
    validate_params,
)
from backend.engine.config import DEFAULT_ASSET
from backend.reports.serializer import serialise_breakdown
from backend.reports.summary import build_fee_summary

logger = logging.getLogger(__name__)


def build_params(args: argparse.Namespace) -> FeeCalculationParams:
    params = FeeCalculationParams(
        trade_size_usd=parse_numeric_input(args.trade_size),
        leverage=args.leverage,
        is_opening=not args.close,
        position_duration_hours=parse_numeric_input(args.duration),
        asset=args.asset,
        trade_impact_fee_scalar=args.impact_scalar,
        utilization_rate=args.utilization,
        hourly_borrow_rate=args.hourly_funding,
        custom_increase_position_bps=args.increase_bps,
        custom_decrease_position_bps=args.decrease_bps,
    )
    return validate_params(resolve_fee_params(params))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate perpetuals trading fees")
    parser.add_argument("--trade-size", default="1000", help="Trade size in USD before leverage")
    parser.add_argument("--leverage", default=10.0, type=float, help="Position leverage")
    parser.add_argument("--asset", default=DEFAULT_ASSET, help="Asset symbol (SOL, ETH, BTC, USDT)")
    parser.add_argument("--duration", default="24", help="Expected position duration in hours")
    parser.add_argument("--close", action="store_true", help="Price a closing trade instead of an opening one")
    parser.add_argument("--impact-scalar", default=None, type=float, help="Trade impact fee scalar override")
    parser.add_argument("--utilization", default=None, type=float, help="Pool utilization override (0-1)")
    parser.add_argument("--hourly-funding", default=None, type=float, help="Hourly funding override in dbps")
    parser.add_argument("--increase-bps", default=None, type=float, help="Open position fee in bps")
    parser.add_argument("--decrease-bps", default=None, type=float, help="Close position fee in bps")
    parser.add_argument("--json", action="store_true", help="Print the full breakdown as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        params = build_params(args)
    except FeeInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    logger.debug("Resolved fee parameters", extra={"params": params})

    breakdown = calculate_total_fees(params)
    if args.json:
        print(json.dumps(serialise_breakdown(breakdown), indent=2))
    else:
        print(build_fee_summary(params, breakdown))
    return 0


if __name__ == "__main__":
    sys.exit(main())
