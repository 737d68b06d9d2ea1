from __future__ import annotations


def _create(client, **overrides) -> dict:
    body = {
        "client_ref": "bar-san-telmo",
        "price_list": "lista_b",
        "discount_percent": 10,
        "items": [{"product_id": 1, "quantity": 2}, {"product_id": 4, "quantity": 1}],
    }
    body.update(overrides)
    resp = client.post("/orders", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_order_prices_lines_from_client_list(client):
    order = _create(client)

    assert [item["price_per_unit"] for item in order["items"]] == ["1080", "720"]
    assert order["totals"] == {"subtotal": "2880.00", "discount": "288.00", "total": "2592.00"}
    assert order["status"] == "pendiente"
    assert order["payment"]["status"] == "pendiente"

    fetched = client.get(f"/orders/{order['order_id']}")
    assert fetched.status_code == 200
    assert fetched.json()["totals"] == order["totals"]


def test_editing_lines_recomputes_totals(client):
    order_id = _create(client)["order_id"]

    added = client.post(f"/orders/{order_id}/items", json={"product_id": 9, "quantity": 1})
    assert added.json()["totals"]["subtotal"] == "7200.00"

    edited = client.patch(f"/orders/{order_id}/items/0", json={"quantity": 3, "price_per_unit": 1200})
    assert edited.json()["items"][0]["subtotal"] == "3600"
    assert edited.json()["totals"]["subtotal"] == "8640.00"

    removed = client.delete(f"/orders/{order_id}/items/1")
    assert removed.json()["totals"]["subtotal"] == "7920.00"

    discount = client.put(f"/orders/{order_id}/discount", json={"discount_percent": 0})
    assert discount.json()["totals"]["total"] == "7920.00"


def test_invalid_edits_return_field_errors(client):
    order_id = _create(client)["order_id"]

    bad_qty = client.patch(f"/orders/{order_id}/items/1", json={"quantity": -4})
    assert bad_qty.status_code == 422
    assert bad_qty.json()["errors"][0] == {
        "code": "invalid_quantity",
        "field": "items[1].quantity",
        "message": "quantity must not be negative",
    }

    bad_discount = client.put(f"/orders/{order_id}/discount", json={"discount_percent": 101})
    assert bad_discount.status_code == 422
    assert bad_discount.json()["errors"][0]["code"] == "invalid_discount"

    missing_line = client.delete(f"/orders/{order_id}/items/7")
    assert missing_line.status_code == 404

    unchanged = client.get(f"/orders/{order_id}").json()
    assert unchanged["totals"]["total"] == "2592.00"


def test_unknown_order_is_404(client):
    assert client.get("/orders/does-not-exist").status_code == 404


def test_cash_payment_settles_computed_total(client):
    order_id = _create(client)["order_id"]

    resp = client.post(f"/orders/{order_id}/payments", json={"method": "efectivo", "amount": 3000})
    assert resp.status_code == 200
    body = resp.json()
    assert body["payment"]["status"] == "pagado"
    assert body["payment"]["change_due"] == "408.00"
    assert body["order"]["payment"] == {"status": "pagado", "method": "efectivo", "paid_amount": "2592.00"}


def test_partial_and_invalid_payments(client):
    order_id = _create(client)["order_id"]

    partial = client.post(f"/orders/{order_id}/payments", json={"method": "eft_trans", "amount": 1000})
    assert partial.json()["payment"]["status"] == "parcial"

    rejected = client.post(f"/orders/{order_id}/payments", json={"method": "tarjeta", "amount": 0})
    assert rejected.status_code == 422
    assert rejected.json()["error"] == "payment"


def test_order_status_and_consignment(client):
    order = _create(client, order_type="consignacion")
    assert order["status"] == "consignacion"

    moved = client.put(f"/orders/{order['order_id']}/status", json={"status": "en_ruta"})
    assert moved.json()["status"] == "en_ruta"

    bad = client.put(f"/orders/{order['order_id']}/status", json={"status": "volando"})
    assert bad.status_code == 400


def test_settled_order_locks_lines_and_discount(client):
    order_id = _create(client)["order_id"]
    paid = client.post(f"/orders/{order_id}/payments", json={"method": "efectivo", "amount": 2592})
    assert paid.json()["payment"]["status"] == "pagado"

    edits = [
        client.post(f"/orders/{order_id}/items", json={"product_id": 9, "quantity": 1}),
        client.patch(f"/orders/{order_id}/items/0", json={"quantity": 5}),
        client.delete(f"/orders/{order_id}/items/1"),
        client.put(f"/orders/{order_id}/discount", json={"discount_percent": 0}),
    ]
    assert [resp.status_code for resp in edits] == [409, 409, 409, 409]

    order = client.get(f"/orders/{order_id}").json()
    assert order["totals"]["total"] == "2592.00"
    assert order["payment"] == {"status": "pagado", "method": "efectivo", "paid_amount": "2592.00"}

    delivered = client.put(f"/orders/{order_id}/status", json={"status": "entregado"})
    assert delivered.status_code == 200
