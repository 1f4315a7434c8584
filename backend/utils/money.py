# utils/money.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Quantize to cents. Floats go through str() so 0.1 stays 0.10, not 0.1000000000000000055."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity: int, unit_price: Number) -> Decimal:
    return to_money(Decimal(quantity) * to_money(unit_price))


def sum_money(values: Iterable[Number]) -> Decimal:
    return to_money(sum((to_money(v) for v in values), Decimal("0")))


def percent_of(amount: Number, rate: Number) -> Decimal:
    # Flat percentage, e.g. rate=18 -> 18% of amount
    return to_money(to_money(amount) * Decimal(str(rate)) / Decimal(100))
