from __future__ import annotations

from decimal import Decimal

from deliverydesk.domain.orders.aggregates import LineItem
from deliverydesk.domain.orders.validation import (
    PricingValidationError,
    clamp_discount,
    quote_order,
    validate_discount,
    validate_line_items,
)


def _item(quantity, price) -> LineItem:
    return LineItem(product_id=1, product_name="Speed 250ml", quantity=quantity, price_per_unit=price)


def test_valid_quote_returns_totals_without_errors():
    quote = quote_order([_item(2, 1200), _item(1, 800)], 10)

    assert quote.ok
    assert quote.errors == []
    assert quote.totals.total == 2880


def test_negative_quantity_and_price_are_reported_per_field():
    errors = validate_line_items([_item(1, 100), _item(-2, 100), _item(3, -5)])

    assert [(e.code, e.field) for e in errors] == [
        ("invalid_quantity", "items[1].quantity"),
        ("invalid_price", "items[2].price_per_unit"),
    ]


def test_non_numeric_and_fractional_quantities_are_rejected():
    errors = validate_line_items([_item("abc", 10), _item(Decimal("1.5"), 10), _item(None, 10)])

    assert [e.code for e in errors] == ["invalid_quantity"] * 3
    assert "whole number" in errors[1].message


def test_nan_price_is_rejected():
    errors = validate_line_items([_item(1, float("nan"))])

    assert len(errors) == 1
    assert errors[0].code == "invalid_price"


def test_discount_range_is_inclusive():
    assert validate_discount(0) == []
    assert validate_discount(100) == []
    assert validate_discount(None) == []
    assert validate_discount(-0.5)[0].code == "invalid_discount"
    assert validate_discount(100.01)[0].code == "invalid_discount"
    assert validate_discount("ten")[0].message == "discount must be a number"


def test_invalid_quote_returns_errors_instead_of_raising():
    quote = quote_order([_item(-1, 100)], 150)

    assert not quote.ok
    assert quote.totals is None
    assert {e.code for e in quote.errors} == {"invalid_quantity", "invalid_discount"}


def test_clamp_moves_discount_into_range():
    assert clamp_discount(-10) == 0
    assert clamp_discount(250) == 100
    assert clamp_discount("42.5") == Decimal("42.5")

    quote = quote_order([_item(1, 1000)], 120, clamp=True)
    assert quote.ok
    assert quote.discount_percent == 100
    assert quote.totals.total == 0


def test_clamp_does_not_hide_non_numeric_discount():
    quote = quote_order([_item(1, 1000)], "lots", clamp=True)

    assert not quote.ok
    assert quote.errors[0].field == "discount_percent"


def test_validation_error_carries_field_errors():
    errors = validate_line_items([_item(-1, 10)])
    exc = PricingValidationError(errors)

    assert isinstance(exc, ValueError)
    assert exc.errors == errors
    assert "items[0].quantity" in str(exc)


def test_amounts_beyond_limits_are_rejected_not_nan():
    quote = quote_order([_item(10**15, Decimal("1e15"))], 10)

    assert not quote.ok
    assert quote.totals is None
    assert [(e.code, e.field) for e in quote.errors] == [
        ("invalid_quantity", "items[0].quantity"),
        ("invalid_price", "items[0].price_per_unit"),
    ]


def test_largest_accepted_order_has_finite_totals():
    quote = quote_order([_item(10**9, Decimal(10) ** 12)] * 3, 10)

    assert quote.ok
    assert quote.totals.subtotal == 3 * Decimal(10) ** 21
    assert quote.totals.total.is_finite()
