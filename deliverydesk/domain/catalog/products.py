from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from deliverydesk.domain.orders.aggregates import LineItem
from deliverydesk.domain.orders.pricing import ZERO

PRICE_LISTS = ("lista_a", "lista_b", "lista_c")
PRICE_LIST_LABELS = {
    "lista_a": "Lista A (Estándar)",
    "lista_b": "Lista B (-10%)",
    "lista_c": "Lista C (-15%)",
}
BASE_PRICE_LIST = "lista_a"
CATEGORIES = ("bebidas", "energizantes", "aguas", "alcoholes", "licores")

StockLevel = Literal["ok", "low", "critical"]


@dataclass
class Product:
    product_id: int
    code: str
    name: str
    category: str
    prices: dict[str, Decimal] = field(default_factory=dict)
    unit: str = "unidad"
    pack_size: int = 1
    stock: int = 0
    min_stock: int = 0
    description: str = ""


def get_product_price(product: Product | None, price_list: str | None) -> Decimal:
    if product is None or not product.prices:
        return ZERO
    price = product.prices.get(price_list or BASE_PRICE_LIST)
    if price:
        return price
    return product.prices.get(BASE_PRICE_LIST) or ZERO


def stock_status(current_stock: int, min_stock: int) -> StockLevel:
    if current_stock <= min_stock * 0.5:
        return "critical"
    if current_stock <= min_stock:
        return "low"
    return "ok"


def build_line_item(product: Product, quantity: int, price_list: str | None = None) -> LineItem:
    """Line item priced from the catalog for the client's price list."""
    return LineItem(
        product_id=product.product_id,
        product_name=product.name,
        quantity=quantity,
        price_per_unit=get_product_price(product, price_list),
        price_list=price_list or BASE_PRICE_LIST,
    )
