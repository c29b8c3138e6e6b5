"""Sibling-discount pricing.

Child 1 pays full price, child 2 gets 10% off, child 3 15%, child 4 and
beyond 20%. Tax (5%) is charged on the discounted subtotal. All money is
Decimal, rounded half-up to fils (2 places).
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

TAX_RATE = Decimal("0.05")
MAX_CHILDREN = 5
MAX_DISCOUNT_PERCENT = 20

_CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricingResult:
    per_child_prices: tuple[Decimal, ...]
    subtotal: Decimal
    original_total: Decimal
    discount_total: Decimal
    tax_amount: Decimal
    final_total: Decimal

    def as_dict(self) -> dict:
        return {
            "perChildPrices": [float(p) for p in self.per_child_prices],
            "subtotal": float(self.subtotal),
            "originalTotal": float(self.original_total),
            "discountTotal": float(self.discount_total),
            "taxAmount": float(self.tax_amount),
            "finalTotal": float(self.final_total),
        }


def discount_percent(index: int) -> int:
    """Discount for the child at 0-based position `index` in the booking."""
    if index < 0:
        raise ValueError("child index must be >= 0")
    if index == 0:
        return 0
    return min(10 + (index - 1) * 5, MAX_DISCOUNT_PERCENT)


def child_price(base_price: Decimal, index: int) -> Decimal:
    base = Decimal(base_price)
    return round_money(base * (Decimal(100) - discount_percent(index)) / Decimal(100))


def calculate_pricing(base_price: Decimal, n_children: int, tax_rate: Decimal = TAX_RATE) -> PricingResult:
    if not 1 <= n_children <= MAX_CHILDREN:
        raise ValueError(f"a booking covers 1 to {MAX_CHILDREN} children, got {n_children}")
    base = Decimal(base_price)
    if base < 0:
        raise ValueError("base price must be >= 0")

    prices = tuple(child_price(base, i) for i in range(n_children))
    subtotal = sum(prices, Decimal("0"))
    original = round_money(base * n_children)
    tax = round_money(subtotal * tax_rate)
    return PricingResult(
        per_child_prices=prices,
        subtotal=subtotal,
        original_total=original,
        discount_total=original - subtotal,
        tax_amount=tax,
        final_total=subtotal + tax,
    )


def to_minor_units(amount: Decimal) -> int:
    """AED -> fils, as the card gateway expects integer amounts."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
