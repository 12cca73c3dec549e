# tests/conftest.py
import itertools
import os

#must be set before logicbuilders is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-with-enough-bytes-for-hs256"
os.environ["CHECKOUT_ENFORCE_STOCK"] = "false"

from datetime import date, timedelta
from decimal import Decimal

import jwt
import pytest
from fastapi.testclient import TestClient

from logicbuilders.data.database import Base, SessionLocal, engine
from logicbuilders.data.models import (
    AdminUserModel,
    CustomerModel,
    ProductAttributeModel,
    ProductCategoryModel,
    ProductModel,
    PromoModel,
)
from logicbuilders.domain.context import CustomerContext
from logicbuilders.main import app
from logicbuilders.services import notification_service
from logicbuilders.utils import settings


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def queued(monkeypatch):
    """Capture Celery .delay calls instead of talking to a broker."""
    calls = []
    monkeypatch.setattr(
        notification_service.send_order_notification_task,
        "delay",
        lambda *args, **kwargs: calls.append(args),
    )
    return calls


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def token(**claims) -> str:
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth(**claims) -> dict:
    return {"Authorization": f"Bearer {token(**claims)}"}


# =====================================================
# seed helpers, each commits so the app's sessions see the rows
# =====================================================

class Seed:
    def __init__(self, db):
        self.db = db
        self._categories = {}
        self._ids = itertools.count(1)

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        return obj

    def customer(self, user_id=1, username="alice"):
        customer = self._save(CustomerModel(user_id=user_id, username=username))
        return CustomerContext(customer_id=customer.id, user_id=user_id, username=username)

    def admin(self, clearance="GENERAL_MANAGER"):
        return self._save(
            AdminUserModel(
                employee_id=f"EMP-{next(self._ids)}",
                name="Admin",
                clearance_level=clearance,
            )
        )

    def category(self, name):
        if name not in self._categories:
            self._categories[name] = self._save(ProductCategoryModel(name=name))
        return self._categories[name]

    def product(self, name="Widget", price="12.50", stock=10, category="Case", availability=True):
        product = self._save(
            ProductModel(
                name=name,
                price=Decimal(price),
                availability=availability,
                category_id=self.category(category).id,
            )
        )
        self._save(ProductAttributeModel(product_id=product.id, stock=stock))
        return product

    def promo(self, name="SAVE10", percent="10", start=None, end=None):
        today = date.today()
        return self._save(
            PromoModel(
                name=name,
                discount_percent=Decimal(percent),
                status="active",
                start_date=start or today - timedelta(days=1),
                end_date=end or today + timedelta(days=30),
            )
        )


@pytest.fixture
def seed(db):
    return Seed(db)


ADDRESS = {"address": "1 Main St", "city": "Springfield", "zip_code": "12345", "country": "US"}
