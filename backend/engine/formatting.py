"""Display formatting for fee amounts and percentages."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal

NOT_COMPUTABLE = "N/A"

_USD_QUANTUM = Decimal("0.0001")
# wide enough for any finite float at four decimals
_USD_CONTEXT = Context(prec=400)


def is_computable(value: float) -> bool:
    """Return ``True`` for finite numbers, ``False`` for ``nan``/``inf``."""

    return value is not None and math.isfinite(value)


def format_usd(value: float) -> str:
    """Format ``value`` as en-US dollars with two to four decimals.

    >>> format_usd(1234.5)
    '$1,234.50'
    >>> format_usd(-0.123456)
    '-$0.1235'
    """

    if not is_computable(value):
        return NOT_COMPUTABLE
    amount = Decimal(repr(float(value))).quantize(_USD_QUANTUM, rounding=ROUND_HALF_UP, context=_USD_CONTEXT)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{amount.copy_abs():,.4f}".split(".")
    fraction = fraction.rstrip("0").ljust(2, "0")
    return f"{sign}${whole}.{fraction}"


def format_percentage(value: float) -> str:
    """Format ``value`` (already in percent) with four decimals.

    >>> format_percentage(1.23456)
    '1.2346%'
    """

    if not is_computable(value):
        return NOT_COMPUTABLE
    return f"{value:.4f}%"
