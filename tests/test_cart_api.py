from decimal import Decimal

import pytest

from tests.conftest import API, BRUSCHETTA_ID, COFFEE_ID

CART = f"{API}/cart"

pytestmark = pytest.mark.usefixtures("seeded_menu")

def line_for(cart, menu_item_id):
    return next(item for item in cart["items"] if item["menu_item_id"] == menu_item_id)

async def test_cart_requires_login(client):
    resp = await client.get(f"{CART}/")
    assert resp.status_code == 401

async def test_empty_cart(client, customer):
    _, headers = customer
    resp = await client.get(f"{CART}/", headers=headers)
    assert resp.status_code == 200
    cart = resp.json()
    assert cart["items"] == []
    assert cart["total_items"] == 0
    assert Decimal(cart["summary"]["delivery_fee"]) == 0

async def test_adding_same_item_merges_quantity(client, customer):
    _, headers = customer
    await client.post(f"{CART}/items", json={"menu_item_id": BRUSCHETTA_ID}, headers=headers)
    resp = await client.post(
        f"{CART}/items", json={"menu_item_id": BRUSCHETTA_ID, "quantity": 2}, headers=headers
    )
    assert resp.status_code == 201
    cart = resp.json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3

    # Persisted, not only in the response
    cart = (await client.get(f"{CART}/", headers=headers)).json()
    assert cart["total_items"] == 3
    assert Decimal(cart["total_amount"]) == Decimal("26.97")

async def test_malformed_menu_item_id_is_rejected(client, customer):
    _, headers = customer
    resp = await client.post(f"{CART}/items", json={"menu_item_id": "app-1"}, headers=headers)
    assert resp.status_code == 422
    cart = (await client.get(f"{CART}/", headers=headers)).json()
    assert cart["items"] == []

async def test_unknown_menu_item(client, customer):
    _, headers = customer
    resp = await client.post(
        f"{CART}/items",
        json={"menu_item_id": "00000000-0000-0000-0000-000000000000"},
        headers=headers,
    )
    assert resp.status_code == 404

async def test_update_and_remove(client, customer):
    _, headers = customer
    await client.post(f"{CART}/items", json={"menu_item_id": BRUSCHETTA_ID}, headers=headers)
    cart = (await client.post(
        f"{CART}/items", json={"menu_item_id": COFFEE_ID}, headers=headers
    )).json()
    coffee = line_for(cart, COFFEE_ID)

    resp = await client.patch(f"{CART}/items/{coffee['id']}", json={"quantity": 4}, headers=headers)
    assert resp.status_code == 200
    assert line_for(resp.json(), COFFEE_ID)["quantity"] == 4

    # Zero quantity removes the line
    resp = await client.patch(f"{CART}/items/{coffee['id']}", json={"quantity": 0}, headers=headers)
    assert [i["menu_item_id"] for i in resp.json()["items"]] == [BRUSCHETTA_ID]

    resp = await client.delete(f"{CART}/items/{coffee['id']}", headers=headers)
    assert resp.status_code == 404

    resp = await client.delete(f"{CART}/", headers=headers)
    assert resp.json()["items"] == []

async def test_carts_are_per_user(client, customer, admin):
    _, customer_headers = customer
    _, admin_headers = admin
    await client.post(f"{CART}/items", json={"menu_item_id": COFFEE_ID}, headers=customer_headers)
    cart = (await client.get(f"{CART}/", headers=admin_headers)).json()
    assert cart["items"] == []

async def test_checkout_places_order_and_empties_cart(client, customer):
    user_id, headers = customer
    await client.post(
        f"{CART}/items", json={"menu_item_id": BRUSCHETTA_ID, "quantity": 2}, headers=headers
    )
    cart = (await client.post(f"{CART}/items", json={"menu_item_id": COFFEE_ID}, headers=headers)).json()
    summary = cart["summary"]
    assert Decimal(summary["subtotal"]) == Decimal("21.47")
    assert Decimal(summary["delivery_fee"]) == Decimal("40.00")
    assert Decimal(summary["tax"]) == Decimal("1.07")
    assert Decimal(summary["total"]) == Decimal("62.54")

    resp = await client.post(
        f"{API}/orders/checkout",
        json={"delivery_address": "12 Harbour Rd", "contact_number": "555-0100"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["user_id"] == user_id
    assert order["status"] == "pending"
    assert Decimal(order["total_amount"]) == Decimal("62.54")
    prices = sorted(Decimal(item["price"]) for item in order["items"])
    assert prices == [Decimal("3.49"), Decimal("8.99")]

    cart = (await client.get(f"{CART}/", headers=headers)).json()
    assert cart["items"] == []

    mine = (await client.get(f"{API}/orders/mine", headers=headers)).json()
    assert [o["id"] for o in mine] == [order["id"]]

async def test_checkout_with_empty_cart(client, customer):
    _, headers = customer
    resp = await client.post(f"{API}/orders/checkout", json={}, headers=headers)
    assert resp.status_code == 400

async def test_oversized_quantities_are_rejected(client, customer):
    _, headers = customer
    resp = await client.post(
        f"{CART}/items", json={"menu_item_id": COFFEE_ID, "quantity": 10**30}, headers=headers
    )
    assert resp.status_code == 422

    cart = (await client.post(
        f"{CART}/items", json={"menu_item_id": COFFEE_ID, "quantity": 999}, headers=headers
    )).json()
    resp = await client.post(f"{CART}/items", json={"menu_item_id": COFFEE_ID}, headers=headers)
    assert resp.status_code == 422

    line = cart["items"][0]
    resp = await client.patch(f"{CART}/items/{line['id']}", json={"quantity": 10**30}, headers=headers)
    assert resp.status_code == 422

    cart = (await client.get(f"{CART}/", headers=headers)).json()
    assert cart["total_items"] == 999
