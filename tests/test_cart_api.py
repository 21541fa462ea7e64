import pytest

from conftest import SQUARE, headers_for
from storefront.data.models import CartModel


@pytest.fixture
def shop(factory):
    zone = factory.zone(SQUARE)
    near = factory.store(name="Near")
    far = factory.store(name="Far")
    factory.link(zone, near)
    user = factory.user(lat=0.5, lng=0.5, zone=zone)
    return {
        "zone": zone,
        "user": user,
        "milk": factory.product(near, name="Milk", price="2.50"),
        "bread": factory.product(near, name="Bread", price="4.00"),
        "far_item": factory.product(far, name="Cheese", price="9.99"),
    }


def test_cart_requires_session(client):
    assert client.get("/cart/").status_code == 401


def test_get_cart_creates_one_active_cart(client, shop, sessions, db):
    headers = headers_for(sessions, shop["user"])

    first = client.get("/cart/", headers=headers).json()
    second = client.get("/cart/", headers=headers).json()

    assert first["cart_id"] == second["cart_id"]
    assert first["status"] == "shopping"
    assert first["zone_id"] == shop["zone"].id
    assert db.query(CartModel).filter_by(user_id=shop["user"].id).count() == 1


def test_add_reachable_product(client, shop, sessions):
    headers = headers_for(sessions, shop["user"])

    client.post("/cart/items", json={"store_product_id": shop["milk"].id, "quantity": 2}, headers=headers)
    body = client.post("/cart/items", json={"store_product_id": shop["bread"].id}, headers=headers).json()

    assert [i["name"] for i in body["items"]] == ["Milk", "Bread"]
    assert float(body["total"]) == 9.0
    assert body["version"] == 3


def test_adding_same_product_merges_quantity(client, shop, sessions):
    headers = headers_for(sessions, shop["user"])

    client.post("/cart/items", json={"store_product_id": shop["milk"].id}, headers=headers)
    body = client.post("/cart/items", json={"store_product_id": shop["milk"].id, "quantity": 3}, headers=headers).json()

    assert len(body["items"]) == 1
    assert body["items"][0]["quantity"] == 4


def test_product_outside_zone_is_rejected(client, shop, sessions):
    resp = client.post(
        "/cart/items",
        json={"store_product_id": shop["far_item"].id},
        headers=headers_for(sessions, shop["user"]),
    )

    assert resp.status_code == 400


def test_user_without_zone_cannot_add(client, shop, factory, sessions):
    drifter = factory.user(name="Drifter")

    resp = client.post(
        "/cart/items",
        json={"store_product_id": shop["milk"].id},
        headers=headers_for(sessions, drifter),
    )

    assert resp.status_code == 400


def test_unknown_product_is_404(client, shop, sessions):
    resp = client.post("/cart/items", json={"store_product_id": 999}, headers=headers_for(sessions, shop["user"]))

    assert resp.status_code == 404


def test_remove_item(client, shop, sessions):
    headers = headers_for(sessions, shop["user"])
    body = client.post("/cart/items", json={"store_product_id": shop["milk"].id}, headers=headers).json()
    item_id = body["items"][0]["id"]

    body = client.delete(f"/cart/items/{item_id}", headers=headers).json()

    assert body["items"] == []
    assert client.delete(f"/cart/items/{item_id}", headers=headers).status_code == 404


def test_checkout_closes_cart(client, shop, sessions):
    headers = headers_for(sessions, shop["user"])
    first = client.post("/cart/items", json={"store_product_id": shop["milk"].id}, headers=headers).json()

    body = client.post("/cart/checkout", headers=headers).json()
    fresh = client.get("/cart/", headers=headers).json()

    assert body["status"] == "checked_out"
    assert fresh["cart_id"] != first["cart_id"]
    assert fresh["items"] == []


def test_checkout_empty_cart_is_rejected(client, shop, sessions):
    headers = headers_for(sessions, shop["user"])
    client.get("/cart/", headers=headers)

    assert client.post("/cart/checkout", headers=headers).status_code == 400


def test_checkout_without_cart_is_404(client, shop, sessions):
    assert client.post("/cart/checkout", headers=headers_for(sessions, shop["user"])).status_code == 404
