from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from deliverydesk.api.utils import parse_price_list
from deliverydesk.core.config import get_settings
from deliverydesk.domain.catalog import PRICE_LIST_LABELS, Product, get_product_price, stock_status
from deliverydesk.persistence.pg import get_session
from deliverydesk.persistence.repository import get_product, list_products

router = APIRouter(tags=["catalog"])


def _product_payload(product: Product, price_list: str) -> dict:
    return {
        "product_id": product.product_id,
        "code": product.code,
        "name": product.name,
        "category": product.category,
        "unit": product.unit,
        "pack_size": product.pack_size,
        "price_list": price_list,
        "price": str(get_product_price(product, price_list)),
        "prices": {name: str(value) for name, value in product.prices.items()},
        "stock": product.stock,
        "min_stock": product.min_stock,
        "stock_status": stock_status(product.stock, product.min_stock),
    }


@router.get("/catalog/price-lists")
def get_price_lists():
    return {"price_lists": [{"id": key, "label": label} for key, label in PRICE_LIST_LABELS.items()]}


@router.get("/catalog/products")
def get_products(
    price_list: str | None = Query(default=None),
    category: str | None = Query(default=None),
    session: Session = Depends(get_session),
):
    try:
        selected = parse_price_list(price_list, get_settings().default_price_list)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    products = [p for p in list_products(session) if category is None or p.category == category]
    return {
        "count": len(products),
        "products": [_product_payload(p, selected) for p in products],
    }


@router.get("/catalog/products/{product_id}")
def get_catalog_product(
    product_id: int,
    price_list: str | None = Query(default=None),
    session: Session = Depends(get_session),
):
    try:
        selected = parse_price_list(price_list, get_settings().default_price_list)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _product_payload(get_product(session, product_id), selected)
