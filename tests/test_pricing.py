from decimal import Decimal

import pytest

from summercamp.services.pricing import (
    calculate_pricing,
    child_price,
    discount_percent,
    to_minor_units,
)


def test_discount_tiers_by_position():
    assert [discount_percent(i) for i in range(6)] == [0, 10, 15, 20, 20, 20]


@pytest.mark.parametrize("base", [Decimal("250"), Decimal("150"), Decimal("1600"), Decimal("2520"), Decimal("1")])
def test_child_price_non_increasing_and_floored_at_80_percent(base):
    prices = [child_price(base, i) for i in range(5)]
    assert prices[0] == base
    assert all(a >= b for a, b in zip(prices, prices[1:]))
    assert prices[3] == prices[4] == (base * Decimal("0.8")).quantize(Decimal("0.01"))


def test_three_children_on_one_day_plan():
    r = calculate_pricing(Decimal("250"), 3)
    assert r.per_child_prices == (Decimal("250"), Decimal("225"), Decimal("212.5"))
    assert r.subtotal == Decimal("687.5")
    assert r.original_total == Decimal("750")
    assert r.discount_total == Decimal("62.5")
    assert r.tax_amount == Decimal("34.38")
    assert r.final_total == Decimal("721.88")


def test_single_child_clinic_day():
    r = calculate_pricing(Decimal("150"), 1)
    assert r.per_child_prices == (Decimal("150"),)
    assert r.subtotal == Decimal("150")
    assert r.discount_total == 0
    assert r.tax_amount == Decimal("7.5")
    assert r.final_total == Decimal("157.5")


@pytest.mark.parametrize("base", ["250", "650", "850", "1600", "3000", "5700", "390", "1440", "2520", "1", "0.99"])
@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
def test_totals_add_up_exactly(base, n):
    r = calculate_pricing(Decimal(base), n)
    assert r.subtotal + r.tax_amount == r.final_total
    assert r.tax_amount == (r.subtotal * Decimal("0.05")).quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")
    assert r.final_total.as_tuple().exponent >= -2


def test_same_input_same_result():
    assert calculate_pricing(Decimal("850"), 4) == calculate_pricing(Decimal("850"), 4)


@pytest.mark.parametrize("n", [0, 6, -1])
def test_children_count_out_of_range(n):
    with pytest.raises(ValueError):
        calculate_pricing(Decimal("250"), n)


def test_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("721.88")) == 72188
    assert to_minor_units(Decimal("157.5")) == 15750
    assert to_minor_units(Decimal("0.005")) == 1
