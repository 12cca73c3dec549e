# tests/test_points.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from conftest import ADDRESS, auth
from logicbuilders.data.models import CustomerPointsModel, NotificationModel, VoucherModel
from logicbuilders.services.points_service import points_for
from logicbuilders.tasks.vouchers import expire_vouchers_task, notify_vouchers_available_task


def give_points(db, ctx, balance):
    db.add(CustomerPointsModel(customer_id=ctx.customer_id, balance=balance, total_earned=balance, total_redeemed=0))
    db.commit()


@pytest.mark.parametrize("total, expected", [("35.00", 35), ("99.99", 99), ("0.50", 0)])
def test_points_are_floored(total, expected):
    assert points_for(Decimal(total)) == expected


def test_redeem_requires_multiple_of_100(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 500)

    response = client.post("/api/account/redeem-points", json={"points": 150}, headers=auth(userId=1))
    assert response.status_code == 400


def test_redeem_more_than_balance(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 150)

    response = client.post("/api/account/redeem-points", json={"points": 200}, headers=auth(userId=1))
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient points"


def test_redeem_mints_vouchers(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 300)

    response = client.post("/api/account/redeem-points", json={"points": 200}, headers=auth(userId=1))
    assert response.status_code == 200, response.json()
    body = response.json()
    assert body["remaining_points"] == 100
    assert len(body["vouchers"]) == 2
    assert all(code.startswith("LBV-") for code in body["vouchers"])

    summary = client.get("/api/account/vouchers", headers=auth(userId=1)).json()
    assert summary["points"] == 100
    assert summary["total_redeemed"] == 200
    assert {v["code"] for v in summary["vouchers"]} == set(body["vouchers"])


def test_voucher_is_single_use_at_checkout(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 100)
    product = seed.product(price="12.50")
    headers = auth(userId=1)

    code = client.post("/api/account/redeem-points", json={"points": 100}, headers=headers).json()["vouchers"][0]

    def checkout():
        client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=headers)
        return client.post(
            "/api/orders/checkout",
            json={"payment_method": "card", "shipping_address": ADDRESS, "promo_code": code},
            headers=headers,
        ).json()

    assert Decimal(str(checkout()["total_price"])) == Decimal("32.50")
    assert Decimal(str(checkout()["total_price"])) == Decimal("35.00")

    db.expire_all()
    voucher = db.query(VoucherModel).filter_by(code=code).one()
    assert voucher.status == "used"
    assert voucher.is_redeemed is True


def test_voucher_discount_is_capped(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 100)
    product = seed.product(price="500.00")
    headers = auth(userId=1)

    code = client.post("/api/account/redeem-points", json={"points": 100}, headers=headers).json()["vouchers"][0]
    client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=headers)

    response = client.post(
        "/api/orders/checkout",
        json={"payment_method": "card", "shipping_address": ADDRESS, "promo_code": code},
        headers=headers,
    )
    assert response.status_code == 200, response.json()
    assert Decimal(str(response.json()["total_price"])) == Decimal("960.00")


def test_redeemed_voucher_expires_after_30_days(client, seed, db):
    ctx = seed.customer(user_id=1)
    give_points(db, ctx, 100)

    code = client.post("/api/account/redeem-points", json={"points": 100}, headers=auth(userId=1)).json()["vouchers"][0]

    db.expire_all()
    voucher = db.query(VoucherModel).filter_by(code=code).one()
    #sqlite hands back naive datetimes
    expires_at = voucher.expires_at.replace(tzinfo=None)
    remaining = expires_at - datetime.now(timezone.utc).replace(tzinfo=None)
    assert timedelta(days=29, hours=23) < remaining <= timedelta(days=30)
    assert voucher.max_discount == Decimal("50.00")


def test_expire_vouchers_task(seed, db):
    ctx = seed.customer()
    now = datetime.now(timezone.utc)
    for code, expires_at in (("LBV-OLD", now - timedelta(days=1)), ("LBV-NEW", now + timedelta(days=1))):
        db.add(
            VoucherModel(
                customer_id=ctx.customer_id,
                code=code,
                discount_percent=Decimal("10"),
                max_discount=Decimal("50.00"),
                points_cost=100,
                expires_at=expires_at,
            )
        )
    db.commit()

    assert expire_vouchers_task() == 1

    db.expire_all()
    statuses = {v.code: v.status for v in db.query(VoucherModel)}
    assert statuses == {"LBV-OLD": "expired", "LBV-NEW": "active"}


def test_voucher_reminder_is_sent_once_per_window(seed, db):
    ctx = seed.customer(user_id=42)
    db.add(
        VoucherModel(
            customer_id=ctx.customer_id,
            code="LBV-REMIND",
            discount_percent=Decimal("10"),
            max_discount=Decimal("50.00"),
            points_cost=100,
            expires_at=datetime.now(timezone.utc) + timedelta(days=5),
        )
    )
    db.commit()

    assert notify_vouchers_available_task() == 1
    assert notify_vouchers_available_task() == 0

    db.expire_all()
    notification = db.query(NotificationModel).one()
    assert notification.user_id == 42
    assert notification.data == {"voucher_count": 1}
