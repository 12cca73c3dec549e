# tests/test_builds.py
from decimal import Decimal

from conftest import auth

ALL_MISSING = ["CPU", "Motherboard", "RAM", "Power Supply", "Storage"]


def new_build(client, headers, name="Gaming rig"):
    response = client.post("/api/builds", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["id"]


def add(client, headers, build_id, product_id, quantity=1):
    response = client.post(
        f"/api/builds/{build_id}/add-product",
        json={"product_id": product_id, "quantity": quantity},
        headers=headers,
    )
    assert response.status_code == 200, response.json()


def complete_parts(seed):
    return [
        seed.product(name="Ryzen", price="200.00", category="Cpu"),
        seed.product(name="Board", price="150.00", category="Motherboard"),
        seed.product(name="DDR5", price="80.00", category="Memory"),
        seed.product(name="PSU", price="70.00", category="Power Supply"),
        seed.product(name="USB drive", price="50.00", category="External Hard Drive"),
    ]


def test_build_with_no_required_parts(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    add(client, headers, build_id, seed.product(name="GPU", category="Video Card").id)

    body = client.get(f"/api/builds/{build_id}/validate", headers=headers).json()
    assert body == {"is_valid": False, "missing": ALL_MISSING}


def test_external_drive_counts_as_storage(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    for product in complete_parts(seed):
        add(client, headers, build_id, product.id)

    body = client.get(f"/api/builds/{build_id}/validate", headers=headers).json()
    assert body == {"is_valid": True, "missing": []}

    detail = client.get(f"/api/builds/{build_id}", headers=headers).json()
    assert detail["product_count"] == 5
    assert Decimal(str(detail["total_price"])) == Decimal("550.00")
    assert detail["validation"]["is_valid"] is True


def test_cpu_category_spelling_is_normalized(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    add(client, headers, build_id, seed.product(name="Intel", category="CPU").id)

    body = client.get(f"/api/builds/{build_id}/validate", headers=headers).json()
    assert "CPU" not in body["missing"]


def test_incomplete_build_cannot_go_in_cart(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    add(client, headers, build_id, seed.product(category="Cpu").id)

    response = client.post("/api/cart/add", json={"build_id": build_id}, headers=headers)
    assert response.status_code == 400
    assert response.json()["missing"] == ALL_MISSING[1:]


def test_complete_build_goes_in_cart_at_derived_price(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    for product in complete_parts(seed):
        add(client, headers, build_id, product.id)

    response = client.post("/api/cart/add", json={"build_id": build_id, "quantity": 2}, headers=headers)
    assert response.status_code == 200, response.json()

    cart = client.get("/api/cart", headers=headers).json()
    assert cart["items"][0]["build_name"] == "Gaming rig"
    assert Decimal(cart["total"]) == Decimal("1100.00")


def test_rename_remove_and_delete(client, seed):
    headers = auth(userId=1)
    build_id = new_build(client, headers)
    product = seed.product()
    add(client, headers, build_id, product.id)

    assert client.put(f"/api/builds/{build_id}", json={"name": "Office"}, headers=headers).json()["name"] == "Office"
    assert client.delete(f"/api/builds/{build_id}/product/{product.id}", headers=headers).status_code == 200
    assert client.delete(f"/api/builds/{build_id}/product/{product.id}", headers=headers).status_code == 404
    assert client.delete(f"/api/builds/{build_id}", headers=headers).status_code == 200
    assert client.get("/api/builds", headers=headers).json() == []


def test_builds_are_owner_scoped(client):
    build_id = new_build(client, auth(userId=1))
    assert client.get(f"/api/builds/{build_id}", headers=auth(userId=2)).status_code == 404
