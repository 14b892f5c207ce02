from __future__ import annotations

import logging
import math
from typing import Dict, List, Literal, Optional, Tuple

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, field_validator

from backend.engine import (
    ASSET_CONFIGS,
    FeeBreakdown,
    FeeCalculationParams,
    FeeInputError,
    calculate_total_fees,
    get_asset_config,
    get_price_impact_data,
    parse_numeric_input,
    resolve_fee_params,
    validate_params,
)
from backend.engine.config import DEFAULT_ASSET
from backend.reports.serializer import serialise_breakdown, serialise_curve, serialise_fee_rows
from backend.reports.summary import build_fee_summary

logger = logging.getLogger(__name__)

DEFAULT_CURVE_MAX_TRADE_SIZE = 1_000_000.0

app = FastAPI(title="Perpetuals Fee Calculator API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FeeRequest(BaseModel):
    trade_size_usd: float = 1000.0
    leverage: float = 10.0
    asset: str = DEFAULT_ASSET
    position_duration_hours: float = 24.0
    is_opening: bool = True
    position_type: Literal["long", "short"] = "long"
    swap_type: Literal["exactIn", "exactOut"] = "exactIn"
    trade_impact_fee_scalar: Optional[float] = None
    utilization_rate: Optional[float] = None
    hourly_borrow_rate: Optional[float] = None
    custom_increase_position_bps: Optional[float] = None
    custom_decrease_position_bps: Optional[float] = None

    @field_validator("trade_size_usd", "leverage", "position_duration_hours", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if isinstance(v, str):
            return parse_numeric_input(v)
        return v

    @field_validator(
        "trade_impact_fee_scalar",
        "utilization_rate",
        "hourly_borrow_rate",
        "custom_increase_position_bps",
        "custom_decrease_position_bps",
        mode="before",
    )
    @classmethod
    def _coerce_override_text(cls, v):
        # empty or unparsable text leaves the override unset so the asset default applies
        if isinstance(v, str):
            return parse_numeric_input(v, default=None)
        return v

    @field_validator("asset")
    @classmethod
    def _normalise_asset(cls, v: str) -> str:
        return v.strip().upper() or DEFAULT_ASSET


class ResolvedParams(BaseModel):
    trade_size_usd: float
    leverage: float
    asset: str
    position_duration_hours: float
    is_opening: bool
    position_size_usd: float
    trade_impact_fee_scalar: Optional[float] = None
    utilization_rate: Optional[float] = None
    hourly_borrow_rate: Optional[float] = None
    custom_increase_position_bps: Optional[float] = None
    custom_decrease_position_bps: Optional[float] = None


class FeeRow(BaseModel):
    label: str
    amount: str
    percentage: str
    tooltip: Optional[str] = None
    variant: Literal["default", "highlight", "total"] = "default"


class FeeResponse(BaseModel):
    params: ResolvedParams
    breakdown: Dict[str, Optional[float]]
    rows: List[FeeRow] = Field(default_factory=list)
    summary: str


class AssetPayload(BaseModel):
    symbol: str
    default_hourly_borrow_rate: float
    default_utilization: float
    trade_impact_fee_scalar: float


class CurvePoint(BaseModel):
    size: Optional[float]
    fee: Optional[float]


class CurveResponse(BaseModel):
    asset: str
    scalar: float
    max_trade_size: float
    points: List[CurvePoint] = Field(default_factory=list)


def _build_params(payload: FeeRequest) -> FeeCalculationParams:
    params = FeeCalculationParams(
        trade_size_usd=payload.trade_size_usd,
        leverage=payload.leverage,
        is_opening=payload.is_opening,
        position_duration_hours=payload.position_duration_hours,
        asset=payload.asset,
        trade_impact_fee_scalar=payload.trade_impact_fee_scalar,
        utilization_rate=payload.utilization_rate,
        hourly_borrow_rate=payload.hourly_borrow_rate,
        custom_increase_position_bps=payload.custom_increase_position_bps,
        custom_decrease_position_bps=payload.custom_decrease_position_bps,
    )
    resolved = resolve_fee_params(params)
    try:
        return validate_params(resolved)
    except FeeInputError as exc:
        raise HTTPException(status_code=400, detail=exc.problems) from exc


def _calculate(payload: FeeRequest) -> Tuple[FeeCalculationParams, FeeBreakdown]:
    params = _build_params(payload)
    breakdown = calculate_total_fees(params)
    logger.info(
        "Calculated fees",
        extra={
            "asset": params.asset,
            "position_type": payload.position_type,
            "position_size": params.position_size_usd,
            "total_fees": breakdown.total_fees,
        },
    )
    return params, breakdown


@app.get("/healthz")
def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/assets", response_model=List[AssetPayload])
def assets() -> List[AssetPayload]:
    return [
        AssetPayload(
            symbol=config.symbol,
            default_hourly_borrow_rate=config.default_hourly_borrow_rate,
            default_utilization=config.default_utilization,
            trade_impact_fee_scalar=config.trade_impact_fee_scalar,
        )
        for config in ASSET_CONFIGS.values()
    ]


@app.post("/fees", response_model=FeeResponse)
def calculate_fees(payload: FeeRequest) -> FeeResponse:
    params, breakdown = _calculate(payload)
    return FeeResponse(
        params=ResolvedParams(
            trade_size_usd=params.trade_size_usd,
            leverage=params.leverage,
            asset=params.asset,
            position_duration_hours=params.position_duration_hours,
            is_opening=params.is_opening,
            position_size_usd=params.position_size_usd,
            trade_impact_fee_scalar=params.trade_impact_fee_scalar,
            utilization_rate=params.utilization_rate,
            hourly_borrow_rate=params.hourly_borrow_rate,
            custom_increase_position_bps=params.custom_increase_position_bps,
            custom_decrease_position_bps=params.custom_decrease_position_bps,
        ),
        breakdown=serialise_breakdown(breakdown),
        rows=[FeeRow(**row) for row in serialise_fee_rows(breakdown)],
        summary=build_fee_summary(params, breakdown),
    )


@app.post("/fees/summary", response_class=PlainTextResponse)
def fee_summary(payload: FeeRequest) -> str:
    params, breakdown = _calculate(payload)
    return build_fee_summary(params, breakdown)


@app.get("/price_impact_curve", response_model=CurveResponse)
def price_impact_curve(
    max_trade_size: float = Query(DEFAULT_CURVE_MAX_TRADE_SIZE, ge=0),
    asset: str = DEFAULT_ASSET,
    scalar: Optional[float] = None,
) -> CurveResponse:
    asset_config = get_asset_config(asset)
    if scalar is None:
        scalar = asset_config.trade_impact_fee_scalar
    if not math.isfinite(max_trade_size):
        raise HTTPException(status_code=400, detail="max_trade_size must be a finite number")
    if not math.isfinite(scalar) or scalar <= 0:
        raise HTTPException(status_code=400, detail="scalar must be a positive finite number")
    curve = get_price_impact_data(max_trade_size, scalar)
    return CurveResponse(
        asset=asset_config.symbol,
        scalar=scalar,
        max_trade_size=max_trade_size,
        points=[CurvePoint(**point) for point in serialise_curve(curve)],
    )
