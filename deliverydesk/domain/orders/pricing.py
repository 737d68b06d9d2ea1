"""Order pricing: subtotal, discount and total from line items.

Every view that shows order amounts (entry, editing, payment at delivery)
goes through :func:`compute_totals`; nothing else does arithmetic on order
money. The functions here never validate; see
:mod:`deliverydesk.domain.orders.validation` for the checked entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Protocol

DEFAULT_DECIMAL_PLACES = 2
ZERO = Decimal("0")
HUNDRED = Decimal("100")
NAN = Decimal("NaN")
# digits kept by order arithmetic; validated inputs stay far below this
AMOUNT_PRECISION = 60


class PricedLine(Protocol):
    quantity: Any
    price_per_unit: Any


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    discount: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "subtotal": str(self.subtotal),
            "discount": str(self.discount),
            "total": str(self.total),
        }


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric input to Decimal; anything unusable becomes NaN."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        return NAN
    if isinstance(value, int):
        return Decimal(value)
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return NAN


def _configure(ctx) -> None:
    ctx.prec = AMOUNT_PRECISION
    ctx.traps[InvalidOperation] = False


def quantize_amount(value: Decimal, places: int = DEFAULT_DECIMAL_PLACES) -> Decimal:
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        _configure(ctx)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def line_subtotal(quantity: Any, price_per_unit: Any) -> Decimal:
    with localcontext() as ctx:
        _configure(ctx)
        return to_decimal(quantity) * to_decimal(price_per_unit)


def calculate_discount(subtotal: Any, discount_percent: Any = 0) -> Decimal:
    """``subtotal * discount_percent / 100``; a missing or zero percent gives 0.

    A NaN percent propagates as NaN; it is not read as "no discount".
    """
    if discount_percent is None:
        return ZERO
    pct = to_decimal(discount_percent)
    if pct == ZERO:
        return ZERO
    with localcontext() as ctx:
        _configure(ctx)
        return to_decimal(subtotal) * pct / HUNDRED


def compute_totals(
    items: Iterable[PricedLine],
    discount_percent: Any = 0,
    places: int = DEFAULT_DECIMAL_PLACES,
) -> OrderTotals:
    """Return the totals of ``items`` after a uniform percentage discount.

    Subtotal and discount are rounded half-up to ``places`` decimals and the
    total is taken from the rounded values, so ``total == subtotal - discount``
    holds exactly. Non-numeric inputs are not rejected: they come out as NaN.
    """
    with localcontext() as ctx:
        _configure(ctx)
        subtotal = sum((line_subtotal(item.quantity, item.price_per_unit) for item in items), ZERO)
        subtotal = quantize_amount(subtotal, places)
        discount = quantize_amount(calculate_discount(subtotal, discount_percent), places)
        total = subtotal - discount
    return OrderTotals(subtotal=subtotal, discount=discount, total=total)
