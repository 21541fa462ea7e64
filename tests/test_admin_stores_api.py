from conftest import SQUARE, headers_for


def test_store_routes_are_admin_only(client, factory, sessions):
    shopper = factory.user()

    assert client.get("/admin/stores/").status_code == 401
    assert client.get("/admin/stores/", headers=headers_for(sessions, shopper)).status_code == 403


def test_create_store_takes_english_name(client, admin_headers):
    resp = client.post(
        "/admin/stores/",
        json={"translations": {"en": "Bakery", "fr": "Boulangerie"}, "latitude": 0.5, "longitude": 0.5},
        headers=admin_headers,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Bakery"
    assert body["zone_ids"] == []


def test_create_store_without_translations(client, admin_headers):
    body = client.post("/admin/stores/", json={}, headers=admin_headers).json()

    assert body["name"] == "Unnamed Store"
    assert body["name_translations"] == {}


def test_list_stores_search_and_zone_ids(client, factory, admin_headers):
    zone = factory.zone(SQUARE)
    bakery = factory.store(name="Bakery")
    factory.store(name="Butcher")
    factory.link(zone, bakery)

    body = client.get("/admin/stores/?search=bak", headers=admin_headers).json()

    assert [s["name"] for s in body] == ["Bakery"]
    assert body[0]["zone_ids"] == [zone.id]


def test_add_product(client, factory, admin_headers):
    store = factory.store()

    resp = client.post(
        f"/admin/stores/{store.id}/products",
        json={"translations": {"en": "Bread"}, "price": 3.5},
        headers=admin_headers,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["store_id"] == store.id
    assert body["name"] == "Bread"
    assert float(body["price"]) == 3.5


def test_add_product_to_unknown_store_is_404(client, admin_headers):
    resp = client.post("/admin/stores/999/products", json={"price": 1}, headers=admin_headers)

    assert resp.status_code == 404


def test_add_product_rejects_non_positive_price(client, factory, admin_headers):
    store = factory.store()

    resp = client.post(f"/admin/stores/{store.id}/products", json={"price": 0}, headers=admin_headers)

    assert resp.status_code == 422
