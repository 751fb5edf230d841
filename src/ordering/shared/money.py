"""Fixed-point money arithmetic.

All amounts are ``Decimal``. Line totals and subtotals are exact; VAT is the
only rounded figure (half-up, two places) and is never re-rounded afterwards.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    vat: Decimal
    total: Decimal


def to_amount(value: Decimal | int | str) -> Decimal:
    """Coerce ``value`` to a non-negative, finite Decimal.

    Floats are refused outright: a binary float has usually already lost the
    amount the caller meant.
    """
    if isinstance(value, float):
        raise ValueError(f"Monetary amounts must not be floats: {value!r}")
    if isinstance(value, bool):
        raise ValueError(f"Not a decimal amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: {value!r}")
    return amount


def to_price(value: Decimal | int | str) -> Decimal:
    """Coerce ``value`` to a price with exactly two fractional digits."""
    amount = to_amount(value)
    if amount != amount.quantize(MONEY_PLACES):
        raise ValueError(f"Price has more than two decimal places: {value!r}")
    return amount.quantize(MONEY_PLACES)


def line_total(unit_price: Decimal, quantity: int) -> Decimal:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError(f"Quantity must be a positive integer: {quantity!r}")
    return to_amount(unit_price) * quantity


def subtotal(line_totals: Iterable[Decimal]) -> Decimal:
    return sum((to_amount(amount) for amount in line_totals), ZERO)


def vat(amount: Decimal, rate: Decimal) -> Decimal:
    return (to_amount(amount) * to_amount(rate)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def order_totals(line_totals: Iterable[Decimal], rate: Decimal) -> Totals:
    """Subtotal, VAT and grand total for a sequence of line totals."""
    net = subtotal(line_totals)
    tax = vat(net, rate)
    return Totals(subtotal=net, vat=tax, total=net + tax)
