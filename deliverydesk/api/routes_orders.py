from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from deliverydesk.api.utils import order_payload, parse_price_list, resolve_line_item
from deliverydesk.core.config import get_settings
from deliverydesk.domain.orders.aggregates import OrderDraft
from deliverydesk.domain.payments import settle_payment
from deliverydesk.persistence.models import OrderDraftModel
from deliverydesk.persistence.pg import get_session
from deliverydesk.persistence.repository import load_draft, new_order_id, record_payment, save_draft

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"])


class OrderLineRequest(BaseModel):
    product_id: int
    quantity: Decimal
    price_per_unit: Decimal | None = None


class OrderCreateRequest(BaseModel):
    client_ref: str | None = None
    price_list: str | None = None
    order_type: str = "normal"
    discount_percent: Decimal | None = Decimal("0")
    items: list[OrderLineRequest] = Field(default_factory=list)


class LineUpdateRequest(BaseModel):
    quantity: Decimal | None = None
    price_per_unit: Decimal | None = None


class DiscountRequest(BaseModel):
    discount_percent: Decimal | None


class StatusRequest(BaseModel):
    status: str


class PaymentRequest(BaseModel):
    method: str
    amount: Decimal | None = None


def _load(session: Session, order_id: str) -> OrderDraft:
    return load_draft(session, order_id, places=get_settings().currency_decimal_places)


def _load_editable(session: Session, order_id: str) -> OrderDraft:
    draft = _load(session, order_id)
    row = session.get(OrderDraftModel, order_id)
    if row.payment_method is not None:
        raise HTTPException(
            status_code=409,
            detail=f"order {order_id} already settled with payment_method={row.payment_method}; lines and discount are locked",
        )
    return draft


def _respond(session: Session, draft: OrderDraft) -> dict:
    row = save_draft(session, draft)
    return order_payload(draft, row)


@router.post("/orders")
def create_order(request: OrderCreateRequest, session: Session = Depends(get_session)):
    settings = get_settings()
    try:
        price_list = parse_price_list(request.price_list, settings.default_price_list)
        draft = OrderDraft(
            order_id=new_order_id(),
            client_ref=request.client_ref,
            price_list=price_list,
            order_type=request.order_type,
            status="consignacion" if request.order_type == "consignacion" else "pendiente",
            places=settings.currency_decimal_places,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    draft.set_discount(request.discount_percent)
    for line in request.items:
        draft.add_item(resolve_line_item(session, line.product_id, line.quantity, price_list, line.price_per_unit))

    payload = _respond(session, draft)
    logger.info("order draft created: order_id=%s items=%s", draft.order_id, len(draft.items))
    return payload


@router.get("/orders/{order_id}")
def get_order(order_id: str, session: Session = Depends(get_session)):
    draft = _load(session, order_id)
    return order_payload(draft, session.get(OrderDraftModel, order_id))


@router.post("/orders/{order_id}/items")
def add_order_item(order_id: str, request: OrderLineRequest, session: Session = Depends(get_session)):
    draft = _load_editable(session, order_id)
    draft.add_item(
        resolve_line_item(session, request.product_id, request.quantity, draft.price_list, request.price_per_unit)
    )
    return _respond(session, draft)


@router.patch("/orders/{order_id}/items/{index}")
def update_order_item(
    order_id: str,
    index: int,
    request: LineUpdateRequest,
    session: Session = Depends(get_session),
):
    draft = _load_editable(session, order_id)
    try:
        draft.update_item(index, quantity=request.quantity, price_per_unit=request.price_per_unit)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _respond(session, draft)


@router.delete("/orders/{order_id}/items/{index}")
def delete_order_item(order_id: str, index: int, session: Session = Depends(get_session)):
    draft = _load_editable(session, order_id)
    try:
        draft.remove_item(index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _respond(session, draft)


@router.put("/orders/{order_id}/discount")
def set_order_discount(order_id: str, request: DiscountRequest, session: Session = Depends(get_session)):
    draft = _load_editable(session, order_id)
    draft.set_discount(request.discount_percent)
    return _respond(session, draft)


@router.put("/orders/{order_id}/status")
def set_order_status(order_id: str, request: StatusRequest, session: Session = Depends(get_session)):
    draft = _load(session, order_id)
    try:
        draft.set_status(request.status)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _respond(session, draft)


@router.post("/orders/{order_id}/payments")
def settle_order_payment(order_id: str, request: PaymentRequest, session: Session = Depends(get_session)):
    draft = _load(session, order_id)
    outcome = settle_payment(draft.totals.total, request.method, request.amount)
    row = record_payment(session, order_id, outcome)
    logger.info("payment settled: order_id=%s method=%s status=%s", order_id, outcome.method, outcome.status)
    return {
        "order_id": order_id,
        "totals": draft.totals.to_dict(),
        "payment": outcome.to_dict(),
        "order": order_payload(draft, row),
    }
