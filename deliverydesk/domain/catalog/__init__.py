from deliverydesk.domain.catalog.products import (
    BASE_PRICE_LIST,
    PRICE_LIST_LABELS,
    PRICE_LISTS,
    Product,
    build_line_item,
    get_product_price,
    stock_status,
)

__all__ = [
    "BASE_PRICE_LIST",
    "PRICE_LIST_LABELS",
    "PRICE_LISTS",
    "Product",
    "build_line_item",
    "get_product_price",
    "stock_status",
]
