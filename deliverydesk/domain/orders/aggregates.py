from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from deliverydesk.domain.orders.pricing import (
    DEFAULT_DECIMAL_PLACES,
    ZERO,
    OrderTotals,
    compute_totals,
    line_subtotal,
    to_decimal,
)
from deliverydesk.domain.orders.validation import check_price, check_quantity, ensure_valid, validate_discount

ORDER_STATUSES = ("pendiente", "en_ruta", "entregado", "devolucion_parcial", "cancelado", "consignacion")
ORDER_TYPES = ("normal", "consignacion")


@dataclass
class LineItem:
    product_id: int
    product_name: str
    quantity: int
    price_per_unit: Decimal
    price_list: str | None = None

    @property
    def subtotal(self) -> Decimal:
        return line_subtotal(self.quantity, self.price_per_unit)

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price_per_unit": str(self.price_per_unit),
            "price_list": self.price_list,
            "subtotal": str(self.subtotal),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            product_id=int(data["product_id"]),
            product_name=str(data.get("product_name") or ""),
            quantity=int(data["quantity"]),
            price_per_unit=to_decimal(data["price_per_unit"]),
            price_list=data.get("price_list"),
        )


def _checked_item(item: LineItem, index: int) -> LineItem:
    errors = [
        e
        for e in (
            check_quantity(item.quantity, f"items[{index}].quantity"),
            check_price(item.price_per_unit, f"items[{index}].price_per_unit"),
        )
        if e is not None
    ]
    ensure_valid(errors)
    item.quantity = int(to_decimal(item.quantity))
    item.price_per_unit = to_decimal(item.price_per_unit)
    return item


@dataclass
class OrderDraft:
    order_id: str
    client_ref: str | None = None
    price_list: str = "lista_a"
    items: list[LineItem] = field(default_factory=list)
    discount_percent: Decimal = ZERO
    order_type: str = "normal"
    status: str = "pendiente"
    places: int = DEFAULT_DECIMAL_PLACES

    def __post_init__(self) -> None:
        if self.order_type not in ORDER_TYPES:
            raise ValueError(f"unknown order_type={self.order_type}")
        if self.status not in ORDER_STATUSES:
            raise ValueError(f"unknown status={self.status}")

    @property
    def totals(self) -> OrderTotals:
        return compute_totals(self.items, self.discount_percent, places=self.places)

    def add_item(self, item: LineItem) -> int:
        index = len(self.items)
        self.items.append(_checked_item(item, index))
        return index

    def update_item(self, index: int, quantity: Any = None, price_per_unit: Any = None) -> LineItem:
        current = self._item_at(index)
        candidate = LineItem(
            product_id=current.product_id,
            product_name=current.product_name,
            quantity=current.quantity if quantity is None else quantity,
            price_per_unit=current.price_per_unit if price_per_unit is None else price_per_unit,
            price_list=current.price_list,
        )
        self.items[index] = _checked_item(candidate, index)
        return self.items[index]

    def remove_item(self, index: int) -> LineItem:
        self._item_at(index)
        return self.items.pop(index)

    def set_discount(self, discount_percent: Any) -> None:
        ensure_valid(validate_discount(discount_percent))
        self.discount_percent = ZERO if discount_percent is None else to_decimal(discount_percent)

    def set_status(self, status: str) -> None:
        if status not in ORDER_STATUSES:
            raise ValueError(f"unknown status={status}")
        self.status = status

    def _item_at(self, index: int) -> LineItem:
        if index < 0 or index >= len(self.items):
            raise IndexError(f"no line item at index={index}")
        return self.items[index]
