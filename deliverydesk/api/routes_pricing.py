from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from deliverydesk.api.utils import parse_price_list, resolve_line_item
from deliverydesk.core.config import get_settings
from deliverydesk.domain.orders.aggregates import LineItem
from deliverydesk.domain.orders.validation import quote_order
from deliverydesk.persistence.pg import get_session

router = APIRouter(tags=["pricing"])


class QuoteLine(BaseModel):
    product_id: int | None = None
    product_name: str = ""
    quantity: Decimal
    price_per_unit: Decimal | None = Field(default=None, description="omit to take the catalog price")


class QuoteRequest(BaseModel):
    items: list[QuoteLine] = Field(default_factory=list)
    discount_percent: Decimal | None = Decimal("0")
    price_list: str | None = None


@router.post("/pricing/quote")
def create_quote(request: QuoteRequest, session: Session = Depends(get_session)):
    settings = get_settings()
    try:
        price_list = parse_price_list(request.price_list, settings.default_price_list)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    lines: list[LineItem] = []
    for index, line in enumerate(request.items):
        if line.price_per_unit is None:
            if line.product_id is None:
                raise HTTPException(
                    status_code=400,
                    detail=f"items[{index}] needs price_per_unit or a catalog product_id",
                )
            lines.append(resolve_line_item(session, line.product_id, line.quantity, price_list))
            continue
        lines.append(
            LineItem(
                product_id=line.product_id or 0,
                product_name=line.product_name,
                quantity=line.quantity,
                price_per_unit=line.price_per_unit,
                price_list=price_list,
            )
        )

    quote = quote_order(
        lines,
        request.discount_percent,
        clamp=settings.clamp_discount,
        places=settings.currency_decimal_places,
    )
    if not quote.ok:
        return JSONResponse(
            status_code=422,
            content={"error": "validation", "errors": [e.to_dict() for e in quote.errors]},
        )
    return {
        "price_list": price_list,
        "discount_percent": str(quote.discount_percent),
        "items": [item.to_dict() for item in lines],
        "totals": quote.totals.to_dict(),
    }
