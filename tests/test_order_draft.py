from __future__ import annotations

from decimal import Decimal

import pytest

from deliverydesk.domain.orders.aggregates import LineItem, OrderDraft
from deliverydesk.domain.orders.validation import PricingValidationError


def _draft() -> OrderDraft:
    draft = OrderDraft(order_id="o-1", client_ref="kiosco-centro", price_list="lista_b")
    draft.add_item(LineItem(1, "Speed 250ml", 2, Decimal("1200")))
    draft.add_item(LineItem(4, "Agua BLOCK 500ml", 1, Decimal("800")))
    return draft


def test_totals_follow_every_mutation():
    draft = _draft()
    assert draft.totals.subtotal == 3200

    draft.set_discount(10)
    assert draft.totals.total == 2880

    draft.update_item(0, quantity=3)
    assert draft.items[0].subtotal == 3600
    assert draft.totals.subtotal == 4400
    assert draft.totals.total == 3960

    draft.update_item(1, price_per_unit="720")
    assert draft.totals.subtotal == 4320

    removed = draft.remove_item(1)
    assert removed.product_id == 4
    assert draft.totals.subtotal == 3600
    assert draft.totals.discount == 360


def test_invalid_mutations_leave_draft_untouched():
    draft = _draft()

    with pytest.raises(PricingValidationError) as excinfo:
        draft.update_item(0, quantity=-1)
    assert excinfo.value.errors[0].field == "items[0].quantity"
    assert draft.items[0].quantity == 2

    with pytest.raises(PricingValidationError):
        draft.set_discount(101)
    assert draft.discount_percent == 0

    with pytest.raises(PricingValidationError):
        draft.add_item(LineItem(9, "Fernet 750ml", 1, Decimal("-4800")))
    assert len(draft.items) == 2


def test_missing_item_index_raises_index_error():
    draft = _draft()

    with pytest.raises(IndexError):
        draft.remove_item(5)
    with pytest.raises(IndexError):
        draft.update_item(-1, quantity=1)


def test_quantity_is_normalized_to_int():
    draft = OrderDraft(order_id="o-2")
    draft.add_item(LineItem(1, "Speed 250ml", "3", 1200))

    assert draft.items[0].quantity == 3
    assert isinstance(draft.items[0].price_per_unit, Decimal)


def test_unknown_status_and_type_rejected():
    with pytest.raises(ValueError):
        OrderDraft(order_id="o-3", order_type="express")

    draft = OrderDraft(order_id="o-4")
    draft.set_status("en_ruta")
    assert draft.status == "en_ruta"
    with pytest.raises(ValueError):
        draft.set_status("perdido")


def test_line_item_dict_round_trip_keeps_inputs():
    item = LineItem(5, "Champagne", 2, Decimal("3510"), price_list="lista_b")
    data = item.to_dict()

    assert data["subtotal"] == "7020"
    assert LineItem.from_dict(data) == item
