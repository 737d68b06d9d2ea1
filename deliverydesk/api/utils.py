from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from deliverydesk.domain.catalog import PRICE_LISTS, build_line_item
from deliverydesk.domain.orders.aggregates import LineItem, OrderDraft
from deliverydesk.persistence.models import OrderDraftModel
from deliverydesk.persistence.repository import get_product


def parse_price_list(price_list: str | None, default: str) -> str:
    value = price_list or default
    if value not in PRICE_LISTS:
        raise ValueError(f"unknown price_list={value}; expected one of {', '.join(PRICE_LISTS)}")
    return value


def resolve_line_item(
    session: Session,
    product_id: int,
    quantity: Any,
    price_list: str,
    price_per_unit: Decimal | None = None,
) -> LineItem:
    """Catalog-backed line item; an explicit price overrides the list price."""
    product = get_product(session, product_id)
    item = build_line_item(product, quantity, price_list)
    if price_per_unit is not None:
        item.price_per_unit = price_per_unit
    return item


def order_payload(draft: OrderDraft, row: OrderDraftModel) -> dict:
    return {
        "order_id": draft.order_id,
        "client_ref": draft.client_ref,
        "price_list": draft.price_list,
        "order_type": draft.order_type,
        "status": draft.status,
        "discount_percent": str(draft.discount_percent),
        "items": [item.to_dict() for item in draft.items],
        "totals": draft.totals.to_dict(),
        "payment": {
            "status": row.payment_status,
            "method": row.payment_method,
            "paid_amount": row.paid_amount,
        },
        "updated_at": row.updated_at.isoformat().replace("+00:00", "Z"),
    }
