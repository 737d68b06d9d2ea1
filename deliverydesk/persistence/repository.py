from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from deliverydesk.domain.catalog import Product
from deliverydesk.domain.orders.aggregates import LineItem, OrderDraft
from deliverydesk.domain.orders.pricing import to_decimal
from deliverydesk.domain.payments import PaymentOutcome
from deliverydesk.persistence.models import OrderDraftModel, ProductModel


class NotFoundError(LookupError):
    pass


def product_from_row(row: ProductModel) -> Product:
    return Product(
        product_id=row.product_id,
        code=row.code,
        name=row.name,
        category=row.category,
        prices={name: Decimal(value) for name, value in (row.prices or {}).items()},
        unit=row.unit,
        pack_size=row.pack_size,
        stock=row.stock,
        min_stock=row.min_stock,
        description=row.description,
    )


def list_products(session: Session) -> list[Product]:
    rows = session.scalars(select(ProductModel).order_by(ProductModel.product_id.asc())).all()
    return [product_from_row(row) for row in rows]


def get_product(session: Session, product_id: int) -> Product:
    row = session.get(ProductModel, product_id)
    if row is None:
        raise NotFoundError(f"product not found: {product_id}")
    return product_from_row(row)


def upsert_product(session: Session, product: Product) -> None:
    row = session.get(ProductModel, product.product_id)
    if row is None:
        row = ProductModel(product_id=product.product_id)
        session.add(row)
    row.code = product.code
    row.name = product.name
    row.category = product.category
    row.description = product.description
    row.unit = product.unit
    row.pack_size = product.pack_size
    row.prices = {name: str(value) for name, value in product.prices.items()}
    row.stock = product.stock
    row.min_stock = product.min_stock


def draft_from_row(row: OrderDraftModel, places: int) -> OrderDraft:
    return OrderDraft(
        order_id=row.order_id,
        client_ref=row.client_ref,
        price_list=row.price_list,
        items=[LineItem.from_dict(item) for item in row.line_items or []],
        discount_percent=to_decimal(row.discount_percent),
        order_type=row.order_type,
        status=row.status,
        places=places,
    )


def load_draft(session: Session, order_id: str, places: int) -> OrderDraft:
    row = session.get(OrderDraftModel, order_id)
    if row is None:
        raise NotFoundError(f"order not found: {order_id}")
    return draft_from_row(row, places)


def new_order_id() -> str:
    return str(uuid4())


def save_draft(session: Session, draft: OrderDraft) -> OrderDraftModel:
    row = session.get(OrderDraftModel, draft.order_id)
    if row is None:
        row = OrderDraftModel(order_id=draft.order_id)
        session.add(row)
    row.client_ref = draft.client_ref
    row.price_list = draft.price_list
    row.order_type = draft.order_type
    row.status = draft.status
    row.discount_percent = str(draft.discount_percent)
    # subtotal is derived; only the inputs are stored
    row.line_items = [
        {key: value for key, value in item.to_dict().items() if key != "subtotal"} for item in draft.items
    ]
    row.updated_at = datetime.now(timezone.utc)
    if row.payment_status is None:
        row.payment_status = "pendiente"
    if row.paid_amount is None:
        row.paid_amount = "0"
    session.flush()
    return row


def record_payment(session: Session, order_id: str, outcome: PaymentOutcome) -> OrderDraftModel:
    row = session.get(OrderDraftModel, order_id)
    if row is None:
        raise NotFoundError(f"order not found: {order_id}")
    row.payment_status = outcome.status
    row.payment_method = outcome.method
    row.paid_amount = str(outcome.applied)
    row.updated_at = datetime.now(timezone.utc)
    return row
