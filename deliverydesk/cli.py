from __future__ import annotations

import argparse
import json

from deliverydesk.core.config import get_settings
from deliverydesk.demo import DEMO_PRODUCTS
from deliverydesk.domain.catalog import PRICE_LISTS, get_product_price, stock_status
from deliverydesk.domain.orders.aggregates import LineItem
from deliverydesk.domain.orders.validation import FieldError, quote_order


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Delivery Desk CLI")
    top = parser.add_subparsers(dest="command", required=True)

    quote = top.add_parser("quote", help="Compute order totals for line items")
    quote.add_argument(
        "--items",
        required=True,
        help='JSON list, e.g. [{"quantity": 2, "price_per_unit": 1200}]',
    )
    quote.add_argument("--discount", default="0", help="Discount percent (0-100)")

    catalog = top.add_parser("catalog", help="List the demo catalog")
    catalog.add_argument("--price-list", choices=PRICE_LISTS, default=None)

    return parser


def _parse_items(text: str) -> tuple[list[LineItem], list[FieldError]]:
    try:
        raw_items = json.loads(text)
    except json.JSONDecodeError as exc:
        return [], [FieldError("invalid_input", "items", f"items is not valid JSON: {exc.msg}")]
    if not isinstance(raw_items, list):
        return [], [FieldError("invalid_input", "items", "items must be a JSON list")]

    items: list[LineItem] = []
    errors: list[FieldError] = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            errors.append(FieldError("invalid_input", f"items[{index}]", "line item must be a JSON object"))
            continue
        try:
            product_id = int(raw.get("product_id", 0))
        except (TypeError, ValueError):
            errors.append(FieldError("invalid_input", f"items[{index}].product_id", "product_id must be an integer"))
            continue
        items.append(
            LineItem(
                product_id=product_id,
                product_name=str(raw.get("product_name", "")),
                quantity=raw.get("quantity"),
                price_per_unit=raw.get("price_per_unit"),
            )
        )
    return items, errors


def _print_errors(errors: list[FieldError]) -> int:
    print(json.dumps({"errors": [e.to_dict() for e in errors]}, ensure_ascii=False, indent=2))
    return 1


def _quote(args: argparse.Namespace) -> int:
    settings = get_settings()
    items, errors = _parse_items(args.items)
    if errors:
        return _print_errors(errors)
    result = quote_order(
        items,
        args.discount,
        clamp=settings.clamp_discount,
        places=settings.currency_decimal_places,
    )
    if not result.ok:
        return _print_errors(result.errors)
    print(json.dumps(result.totals.to_dict(), indent=2))
    return 0


def _catalog(args: argparse.Namespace) -> int:
    price_list = args.price_list or get_settings().default_price_list
    rows = [
        {
            "product_id": p.product_id,
            "code": p.code,
            "name": p.name,
            "price": str(get_product_price(p, price_list)),
            "stock_status": stock_status(p.stock, p.min_stock),
        }
        for p in DEMO_PRODUCTS
    ]
    print(json.dumps({"price_list": price_list, "products": rows}, ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "quote":
        return _quote(args)
    if args.command == "catalog":
        return _catalog(args)

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
