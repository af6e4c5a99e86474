"""Rendering of dispatcher results."""

from __future__ import annotations

import pytest

from crunner.core.results import GasEstimate, NativeBalance, format_native


@pytest.mark.parametrize(
    "value, expected",
    [
        (3e-9, "0.000000003"),
        (1.25, "1.25"),
        (1e-18, "0.000000000000000001"),
        (1e21, "1000000000000000000000"),
    ],
)
def test_format_native_is_positional(value, expected):
    assert format_native(value) == expected


def test_gas_estimate_render_has_no_exponent():
    rendered = GasEstimate(gas=46_000, gas_price=3 * 10**9, unit="BNB").render()

    gas, price, total = rendered.split()
    assert gas == "46000"
    assert price == "0.000000003"
    assert "e" not in total.lower()
    assert float(total) == pytest.approx(0.000138)


def test_small_balance_render():
    assert NativeBalance(raw=5, unit="ETH").render() == "5 0.000000000000000005"
