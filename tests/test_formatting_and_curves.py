import math

import pytest

from backend.engine import (
    NOT_COMPUTABLE,
    format_percentage,
    format_usd,
    get_price_impact_data,
    is_computable,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1234.5, "$1,234.50"),
        (6.0, "$6.00"),
        (0.0, "$0.00"),
        (28.83689104, "$28.8369"),
        (1_234_567.891234, "$1,234,567.8912"),
        (0.00005, "$0.0001"),
        (-5.0, "-$5.00"),
        (-0.00001, "-$0.00"),
    ],
)
def test_format_usd(value, expected):
    assert format_usd(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.23456, "1.2346%"),
        (0.06, "0.0600%"),
        (0.0, "0.0000%"),
        (-0.5, "-0.5000%"),
    ],
)
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


def test_non_finite_values_render_placeholder():
    for value in (math.nan, math.inf, -math.inf):
        assert not is_computable(value)
        assert format_usd(value) == NOT_COMPUTABLE
        assert format_percentage(value) == NOT_COMPUTABLE
    assert is_computable(0.0)


def test_price_impact_curve_bounds():
    curve = get_price_impact_data(1_000_000.0, 100_000_000.0)

    assert list(curve.columns) == ["size", "fee"]
    assert len(curve) == 101
    assert curve["size"].iloc[0] == 0.0
    assert curve["size"].iloc[-1] == 1_000_000.0
    assert curve["size"].diff().dropna().to_numpy() == pytest.approx(10_000.0)
    assert curve["fee"].iloc[0] == 0.0
    assert curve["fee"].iloc[-1] == pytest.approx(10_000.0)
    assert curve["fee"].is_monotonic_increasing


def test_price_impact_curve_is_restartable_and_scalar_sensitive():
    first = get_price_impact_data(50_000.0)
    second = get_price_impact_data(50_000.0)
    assert first.equals(second)

    cheaper = get_price_impact_data(50_000.0, 200_000_000.0)
    assert cheaper["fee"].iloc[-1] == pytest.approx(first["fee"].iloc[-1] / 2.0)


def test_price_impact_curve_with_zero_max_size():
    curve = get_price_impact_data(0.0)
    assert len(curve) == 101
    assert (curve["size"] == 0.0).all()
    assert (curve["fee"] == 0.0).all()
