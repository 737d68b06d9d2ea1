from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Literal

from deliverydesk.domain.orders.pricing import (
    DEFAULT_DECIMAL_PLACES,
    HUNDRED,
    ZERO,
    OrderTotals,
    PricedLine,
    compute_totals,
    to_decimal,
)

logger = logging.getLogger(__name__)

ErrorCode = Literal["invalid_quantity", "invalid_price", "invalid_discount", "invalid_input"]

MAX_QUANTITY = Decimal(10) ** 9
MAX_PRICE = Decimal(10) ** 12


@dataclass(frozen=True)
class FieldError:
    code: ErrorCode
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "field": self.field, "message": self.message}


class PricingValidationError(ValueError):
    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))


@dataclass(frozen=True)
class PricingQuote:
    totals: OrderTotals | None
    errors: list[FieldError] = field(default_factory=list)
    discount_percent: Decimal | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


def check_quantity(value: Any, field_name: str = "quantity") -> FieldError | None:
    qty = to_decimal(value)
    if not qty.is_finite():
        return FieldError("invalid_quantity", field_name, "quantity must be a number")
    if qty != qty.to_integral_value():
        return FieldError("invalid_quantity", field_name, "quantity must be a whole number")
    if qty < ZERO:
        return FieldError("invalid_quantity", field_name, "quantity must not be negative")
    if qty > MAX_QUANTITY:
        return FieldError("invalid_quantity", field_name, f"quantity must not exceed {MAX_QUANTITY}")
    return None


def check_price(value: Any, field_name: str = "price_per_unit") -> FieldError | None:
    price = to_decimal(value)
    if not price.is_finite():
        return FieldError("invalid_price", field_name, "price must be a number")
    if price < ZERO:
        return FieldError("invalid_price", field_name, "price must not be negative")
    if price > MAX_PRICE:
        return FieldError("invalid_price", field_name, f"price must not exceed {MAX_PRICE}")
    return None


def validate_line_items(items: Iterable[PricedLine]) -> list[FieldError]:
    errors: list[FieldError] = []
    for index, item in enumerate(items):
        for error in (
            check_quantity(item.quantity, f"items[{index}].quantity"),
            check_price(item.price_per_unit, f"items[{index}].price_per_unit"),
        ):
            if error is not None:
                errors.append(error)
    return errors


def validate_discount(discount_percent: Any, field_name: str = "discount_percent") -> list[FieldError]:
    if discount_percent is None:
        return []
    pct = to_decimal(discount_percent)
    if not pct.is_finite():
        return [FieldError("invalid_discount", field_name, "discount must be a number")]
    if pct < ZERO or pct > HUNDRED:
        return [FieldError("invalid_discount", field_name, "discount must be between 0 and 100")]
    return []


def clamp_discount(discount_percent: Any) -> Decimal:
    pct = to_decimal(discount_percent)
    if not pct.is_finite():
        return pct
    return min(max(pct, ZERO), HUNDRED)


def quote_order(
    items: Iterable[PricedLine],
    discount_percent: Any = 0,
    clamp: bool = False,
    places: int = DEFAULT_DECIMAL_PLACES,
) -> PricingQuote:
    items = list(items)
    pct = ZERO if discount_percent is None else to_decimal(discount_percent)
    if clamp and pct.is_finite():
        pct = clamp_discount(pct)

    errors = validate_line_items(items) + validate_discount(pct)
    if errors:
        logger.info("pricing input rejected: %s", ", ".join(e.field for e in errors))
        return PricingQuote(totals=None, errors=errors, discount_percent=None)
    return PricingQuote(totals=compute_totals(items, pct, places=places), discount_percent=pct)


def ensure_valid(errors: list[FieldError]) -> None:
    if errors:
        raise PricingValidationError(errors)
