"""Core fee engine primitives."""

from .config import (
    ASSET_CONFIGS,
    BPS_POWER,
    DEFAULT_CUSTODY_PARAMS,
    GLOBAL_FEE_DEFAULTS,
    AssetConfig,
    CustodyParams,
    get_asset_config,
    resolve_fee_params,
)
from .fees import (
    BorrowFeeResult,
    FeeResult,
    calculate_base_fee,
    calculate_borrow_fee,
    calculate_price_impact_fee,
    calculate_utilization,
)
from .breakdown import FeeBreakdown, FeeCalculationParams, calculate_total_fees, estimated_gas_fee_usd
from .formatting import NOT_COMPUTABLE, format_percentage, format_usd, is_computable
from .curves import get_price_impact_data
from .validation import FeeInputError, parse_numeric_input, validate_params

__all__ = [
    "ASSET_CONFIGS",
    "BPS_POWER",
    "DEFAULT_CUSTODY_PARAMS",
    "GLOBAL_FEE_DEFAULTS",
    "AssetConfig",
    "CustodyParams",
    "get_asset_config",
    "resolve_fee_params",
    "BorrowFeeResult",
    "FeeResult",
    "calculate_base_fee",
    "calculate_borrow_fee",
    "calculate_price_impact_fee",
    "calculate_utilization",
    "FeeBreakdown",
    "FeeCalculationParams",
    "calculate_total_fees",
    "estimated_gas_fee_usd",
    "NOT_COMPUTABLE",
    "format_percentage",
    "format_usd",
    "is_computable",
    "get_price_impact_data",
    "FeeInputError",
    "parse_numeric_input",
    "validate_params",
]
