# tests/test_admin.py
from decimal import Decimal

from sqlalchemy import select

from conftest import ADDRESS, auth
from logicbuilders.data.models import AdminLogModel, ProductAttributeModel, ProductModel


def admin_headers(seed, clearance):
    return auth(admin_id=seed.admin(clearance).admin_id)


def stock_of(db, product_id):
    db.expire_all()
    return db.execute(
        select(ProductAttributeModel.stock).where(ProductAttributeModel.product_id == product_id)
    ).scalar_one()


def place_order(client, seed, quantity=2, stock=5, name="Widget"):
    product = seed.product(name=name, stock=stock)
    headers = auth(userId=1)
    client.post("/api/cart/add", json={"product_id": product.id, "quantity": quantity}, headers=headers)
    body = client.post(
        "/api/orders/checkout",
        json={"payment_method": "card", "shipping_address": ADDRESS},
        headers=headers,
    ).json()
    return product, body["orderId"]


class TestClearance:
    def test_missing_token(self, client):
        assert client.get("/api/admin/orders").status_code == 401

    def test_unknown_admin(self, client):
        assert client.get("/api/admin/orders", headers=auth(admin_id=999)).status_code == 401

    def test_wrong_tier_is_denied(self, client, seed):
        response = client.get("/api/admin/promotions", headers=admin_headers(seed, "INVENTORY_MANAGER"))
        assert response.status_code == 403
        assert response.json() == {
            "detail": "Insufficient clearance level.",
            "required": "PROMO_MANAGER",
            "current": "INVENTORY_MANAGER",
        }

    def test_general_manager_opens_everything(self, client, seed):
        headers = admin_headers(seed, "GENERAL_MANAGER")
        assert client.get("/api/admin/promotions", headers=headers).status_code == 200
        assert client.get("/api/admin/orders", headers=headers).status_code == 200

    def test_set_clearance(self, client, seed):
        target = seed.admin("ANALYTICS")
        response = client.put(
            f"/api/admin/admins/{target.admin_id}/clearance",
            json={"clearance_level": "PROMO_MANAGER"},
            headers=admin_headers(seed, "GENERAL_MANAGER"),
        )
        assert response.status_code == 200
        assert response.json()["clearance_level"] == "PROMO_MANAGER"

        response = client.put(
            f"/api/admin/admins/{target.admin_id}/clearance",
            json={"clearance_level": "GENERAL_MANAGER"},
            headers=admin_headers(seed, "PROMO_MANAGER"),
        )
        assert response.status_code == 403


class TestOrderWorkflow:
    def test_approve_deducts_and_cancel_restores(self, client, seed, db):
        product, order_id = place_order(client, seed, quantity=2, stock=5)
        headers = admin_headers(seed, "INVENTORY_MANAGER")
        assert stock_of(db, product.id) == 5

        response = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "processing"}, headers=headers)
        assert response.status_code == 200, response.json()
        assert response.json()["stock_updated"] is True
        assert stock_of(db, product.id) == 3

        response = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "cancelled"}, headers=headers)
        assert response.json()["order"]["status"] == "cancelled"
        assert stock_of(db, product.id) == 5

    def test_approve_fails_when_stock_is_gone(self, client, seed, db):
        product, order_id = place_order(client, seed, quantity=2, stock=5)
        client.put(
            f"/api/admin/inventory/{product.id}/stock",
            json={"stock": 1},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )

        response = client.put(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "processing"},
            headers=admin_headers(seed, "GENERAL_MANAGER"),
        )
        assert response.status_code == 400
        assert response.json()["available"] == 1
        assert stock_of(db, product.id) == 1
        assert client.get(f"/api/orders/{order_id}", headers=auth(userId=1)).json()["status"] == "pending"

    def test_illegal_transition(self, client, seed):
        _, order_id = place_order(client, seed)
        response = client.put(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "delivered"},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )
        assert response.status_code == 400
        assert response.json()["current"] == "pending"

    def test_payment_and_notes(self, client, seed):
        _, order_id = place_order(client, seed)
        response = client.put(
            f"/api/admin/orders/{order_id}/status",
            json={"payment_status": True, "admin_notes": "paid by phone"},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )
        body = response.json()
        assert body["stock_updated"] is False
        assert body["order"]["payment_status"] is True
        assert body["order"]["admin_notes"] == "paid by phone"

    def test_admin_order_detail(self, client, seed):
        product, order_id = place_order(client, seed)
        headers = admin_headers(seed, "INVENTORY_MANAGER")

        response = client.get(f"/api/admin/orders/{order_id}", headers=headers)
        assert response.status_code == 200, response.json()
        body = response.json()
        assert body["customer_id"] == 1
        assert body["shipping_address"]["city"] == "Springfield"
        assert [item["product_id"] for item in body["items"]] == [product.id]

        assert client.get("/api/admin/orders/9999", headers=headers).status_code == 404

    def test_bulk_status_skips_orders_that_fail(self, client, seed, db):
        first, first_id = place_order(client, seed, name="Fan")
        second, second_id = place_order(client, seed, name="Cable")
        headers = admin_headers(seed, "INVENTORY_MANAGER")
        client.put(f"/api/admin/inventory/{second.id}/stock", json={"stock": 1}, headers=headers)

        response = client.put(
            "/api/admin/orders/bulk/status",
            json={"order_ids": [first_id, second_id, 9999], "status": "processing"},
            headers=headers,
        )
        assert response.status_code == 200, response.json()
        body = response.json()
        assert body["summary"] == {"success": 1, "errors": 2}
        results = {r["order_id"]: r for r in body["results"]}
        assert results[first_id]["success"] is True
        assert results[second_id]["error"].startswith("Insufficient stock for Cable")
        assert results[9999]["error"] == "Order not found"

        assert stock_of(db, first.id) == 3
        assert stock_of(db, second.id) == 1
        customer = auth(userId=1)
        assert client.get(f"/api/orders/{first_id}", headers=customer).json()["status"] == "processing"
        assert client.get(f"/api/orders/{second_id}", headers=customer).json()["status"] == "pending"

    def test_bulk_status_needs_a_change(self, client, seed):
        _, order_id = place_order(client, seed)
        response = client.put(
            "/api/admin/orders/bulk/status",
            json={"order_ids": [order_id]},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )
        assert response.status_code == 400

    def test_customer_cancel_and_return(self, client, seed, db):
        product, order_id = place_order(client, seed, quantity=2, stock=5)
        headers = auth(userId=1)

        response = client.put(f"/api/orders/{order_id}/status", json={"status": "returned"}, headers=headers)
        assert response.status_code == 400

        admin = admin_headers(seed, "INVENTORY_MANAGER")
        client.put(f"/api/admin/orders/{order_id}/status", json={"status": "processing"}, headers=admin)
        response = client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}, headers=headers)
        assert response.status_code == 200
        assert stock_of(db, product.id) == 5

    def test_orders_list_and_detail(self, client, seed):
        _, order_id = place_order(client, seed)
        headers = auth(userId=1)

        orders = client.get("/api/orders", headers=headers).json()
        assert [o["id"] for o in orders] == [order_id]
        assert orders[0]["item_count"] == 1

        detail = client.get(f"/api/orders/{order_id}", headers=headers).json()
        assert detail["shipping_address"]["city"] == "Springfield"
        assert len(detail["items"]) == 1
        assert client.get(f"/api/orders/{order_id}", headers=auth(userId=2)).status_code == 404

        pending = client.get(
            "/api/admin/orders", params={"status": "pending"}, headers=admin_headers(seed, "INVENTORY_MANAGER")
        ).json()
        assert [o["id"] for o in pending] == [order_id]


class TestCatalog:
    def test_specs_are_validated_per_category(self, client, seed, db):
        product = seed.product(category="Cpu")
        headers = admin_headers(seed, "PRODUCT_EXPERT")

        response = client.post(
            f"/api/admin/products/{product.id}/specs",
            json={"specs": {"socket": "AM5", "cores": 8}},
            headers=headers,
        )
        assert response.status_code == 200, response.json()
        assert response.json() == {"product_id": product.id, "category": "cpu", "specs": {"category": "cpu", "socket": "AM5", "cores": 8}}

        response = client.post(
            f"/api/admin/products/{product.id}/specs",
            json={"specs": {"wattage": 650}},
            headers=headers,
        )
        assert response.status_code == 400

        db.expire_all()
        assert db.get(ProductModel, product.id).specs["socket"] == "AM5"

    def test_stock_update(self, client, seed, db):
        product = seed.product(stock=3)
        response = client.put(
            f"/api/admin/inventory/{product.id}/stock",
            json={"stock": 12},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )
        assert response.json() == {"product_id": product.id, "stock": 12}
        assert stock_of(db, product.id) == 12


class TestPromotions:
    def test_create_list_update(self, client, seed):
        headers = admin_headers(seed, "PROMO_MANAGER")
        payload = {"name": "Spring", "code": "SPRING5", "type": "fixed_amount", "discount_value": "5.00"}

        response = client.post("/api/admin/promotions", json=payload, headers=headers)
        assert response.status_code == 201, response.json()
        promotion_id = response.json()["id"]

        assert client.post("/api/admin/promotions", json=payload, headers=headers).status_code == 400

        response = client.put(f"/api/admin/promotions/{promotion_id}", json={"is_active": False}, headers=headers)
        assert response.json()["status"] == "Inactive"

        listed = client.get("/api/admin/promotions", headers=headers).json()
        assert [p["code"] for p in listed] == ["SPRING5"]

    def test_fixed_promotion_at_checkout_counts_usage(self, client, seed):
        headers = admin_headers(seed, "PROMO_MANAGER")
        client.post(
            "/api/admin/promotions",
            json={"name": "Once", "code": "ONCE5", "type": "fixed_amount", "discount_value": "5.00", "max_uses": 1},
            headers=headers,
        )
        product = seed.product(price="12.50")
        customer = auth(userId=1)

        totals = []
        for _ in range(2):
            client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=customer)
            body = client.post(
                "/api/orders/checkout",
                json={"payment_method": "card", "shipping_address": ADDRESS, "promo_code": "once5"},
                headers=customer,
            ).json()
            totals.append(Decimal(str(body["total_price"])))

        assert totals == [Decimal("30.00"), Decimal("35.00")]
        assert client.get("/api/admin/promotions", headers=headers).json()[0]["total_used"] == 1

    def test_free_shipping_promotion(self, client, seed):
        client.post(
            "/api/admin/promotions",
            json={"name": "Ship", "code": "FREESHIP", "type": "free_shipping"},
            headers=admin_headers(seed, "PROMO_MANAGER"),
        )
        product = seed.product(price="12.50")
        customer = auth(userId=1)
        client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=customer)

        body = client.post(
            "/api/orders/checkout",
            json={"payment_method": "card", "shipping_address": ADDRESS, "promo_code": "FREESHIP"},
            headers=customer,
        ).json()
        assert Decimal(str(body["total_price"])) == Decimal("25.00")

    def test_generate_coupons(self, client, seed):
        response = client.post(
            "/api/admin/promotions/generate-coupons",
            json={"name": "Batch", "prefix": "vip", "count": 3, "type": "percentage", "discount_value": "15"},
            headers=admin_headers(seed, "PROMO_MANAGER"),
        )
        assert response.status_code == 201, response.json()
        codes = response.json()["codes"]
        assert len(set(codes)) == 3
        assert all(code.startswith("VIP-") for code in codes)

    def test_delete_unused_promotion(self, client, seed):
        headers = admin_headers(seed, "PROMO_MANAGER")
        promotion_id = client.post(
            "/api/admin/promotions",
            json={"name": "Spare", "code": "SPARE5", "type": "fixed_amount", "discount_value": "5.00"},
            headers=headers,
        ).json()["id"]

        response = client.delete(f"/api/admin/promotions/{promotion_id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Promotion deleted successfully"}
        assert client.get("/api/admin/promotions", headers=headers).json() == []
        assert client.delete(f"/api/admin/promotions/{promotion_id}", headers=headers).status_code == 404

    def test_used_promotion_keeps_its_usage(self, client, seed):
        headers = admin_headers(seed, "PROMO_MANAGER")
        promotion_id = client.post(
            "/api/admin/promotions",
            json={"name": "Used", "code": "USED5", "type": "fixed_amount", "discount_value": "5.00"},
            headers=headers,
        ).json()["id"]
        product = seed.product(price="12.50")
        customer = auth(userId=1)
        client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=customer)
        order_id = client.post(
            "/api/orders/checkout",
            json={"payment_method": "card", "shipping_address": ADDRESS, "promo_code": "USED5"},
            headers=customer,
        ).json()["orderId"]

        usage = client.get(f"/api/admin/promotions/{promotion_id}/usage", headers=headers).json()
        assert [u["order_id"] for u in usage] == [order_id]
        assert Decimal(str(usage[0]["discount_amount"])) == Decimal("5.00")
        assert Decimal(str(usage[0]["order_value"])) == Decimal("25.00")

        response = client.delete(f"/api/admin/promotions/{promotion_id}", headers=headers)
        assert response.status_code == 400
        assert response.json()["total_used"] == 1

        assert client.get("/api/admin/promotions/9999/usage", headers=headers).status_code == 404


class TestAuditTrail:
    def test_order_status_change_is_logged(self, client, seed, db):
        _, order_id = place_order(client, seed)
        admin = seed.admin("INVENTORY_MANAGER")

        response = client.put(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "processing"},
            headers=auth(admin_id=admin.admin_id),
        )
        assert response.status_code == 200, response.json()

        db.expire_all()
        entry = db.execute(select(AdminLogModel)).scalar_one()
        assert (entry.admin_id, entry.action, entry.target_type, entry.target_id) == (
            admin.admin_id,
            "UPDATE_ORDER",
            "ORDER",
            str(order_id),
        )
        assert entry.details["old_status"] == "pending"
        assert entry.details["new_status"] == "processing"
        assert entry.details["stock_updated"] is True

    def test_rejected_change_leaves_no_entry(self, client, seed, db):
        _, order_id = place_order(client, seed)
        response = client.put(
            f"/api/admin/orders/{order_id}/status",
            json={"status": "delivered"},
            headers=admin_headers(seed, "INVENTORY_MANAGER"),
        )
        assert response.status_code == 400

        db.expire_all()
        assert db.execute(select(AdminLogModel)).scalars().all() == []

    def test_logs_endpoint_filters_by_target(self, client, seed):
        product = seed.product(stock=3)
        inventory = admin_headers(seed, "INVENTORY_MANAGER")
        client.put(f"/api/admin/inventory/{product.id}/stock", json={"stock": 7}, headers=inventory)
        client.post(
            "/api/admin/promotions",
            json={"name": "Spring", "code": "SPRING5", "type": "fixed_amount", "discount_value": "5.00"},
            headers=admin_headers(seed, "PROMO_MANAGER"),
        )

        manager = admin_headers(seed, "GENERAL_MANAGER")
        logs = client.get(
            "/api/admin/logs", params={"target_type": "PRODUCT", "target_id": product.id}, headers=manager
        ).json()
        assert [log["action"] for log in logs] == ["UPDATE_STOCK"]
        assert logs[0]["details"] == {"old_stock": 3, "new_stock": 7}

        assert len(client.get("/api/admin/logs", headers=manager).json()) == 2
        assert client.get("/api/admin/logs", headers=inventory).status_code == 403
