# tests/test_domain.py
import importlib
from decimal import Decimal

import pytest
from pydantic import ValidationError

from logicbuilders.domain.components import (
    ComponentCategory,
    CpuSpecs,
    GenericSpecs,
    parse_specs,
    validate_build,
)
from logicbuilders.domain.enums import Clearance, OrderStatus
from logicbuilders.domain.order_flow import ADMIN_TRANSITIONS, CUSTOMER_TRANSITIONS, can_transition
from logicbuilders.services.pricing_service import AppliedDiscount, PriceLine, quote
from logicbuilders.utils import settings


def test_cpu_spellings_are_one_category():
    assert ComponentCategory.from_name("Cpu") is ComponentCategory.from_name("CPU") is ComponentCategory.CPU
    assert ComponentCategory.from_name("Keyboard") is ComponentCategory.OTHER
    assert ComponentCategory.from_name(None) is ComponentCategory.OTHER


def test_validate_build_reports_missing_in_fixed_order():
    result = validate_build(["Power Supply", "Video Card"])
    assert not result.is_valid
    assert result.missing == ["CPU", "Motherboard", "RAM", "Storage"]

    result = validate_build(["CPU", "Motherboard", "Memory", "Power Supply", "Internal Hard Drive"])
    assert result.is_valid
    assert result.missing == []


def test_specs_follow_category_schema():
    assert isinstance(parse_specs("CPU", {"socket": "LGA1700", "cores": 16}), CpuSpecs)
    assert isinstance(parse_specs("Case", {"color": "black"}), GenericSpecs)

    with pytest.raises(ValidationError):
        parse_specs("Cpu", {"socket": "AM5", "cores": 8, "wattage": 500})


def test_clearance_tiers():
    assert Clearance.GENERAL_MANAGER.permits(Clearance.PROMO_MANAGER)
    assert Clearance.PROMO_MANAGER.permits(Clearance.PROMO_MANAGER)
    assert not Clearance.PROMO_MANAGER.permits(Clearance.INVENTORY_MANAGER)


@pytest.mark.parametrize(
    "table, current, target, allowed",
    [
        (CUSTOMER_TRANSITIONS, OrderStatus.PENDING, OrderStatus.CANCELLED, True),
        (CUSTOMER_TRANSITIONS, OrderStatus.SHIPPED, OrderStatus.CANCELLED, False),
        (CUSTOMER_TRANSITIONS, OrderStatus.DELIVERED, OrderStatus.AWAITING_RETURN, True),
        (ADMIN_TRANSITIONS, OrderStatus.AWAITING_RETURN, OrderStatus.RETURNED, True),
        (ADMIN_TRANSITIONS, OrderStatus.CANCELLED, OrderStatus.PENDING, False),
    ],
)
def test_status_transitions(table, current, target, allowed):
    assert can_transition(table, current, target) is allowed


class TestQuote:
    lines = [PriceLine(unit_price=Decimal("12.50"), quantity=2)]

    def test_plain(self):
        result = quote(self.lines, delivery_charge=Decimal("10"))
        assert (result.subtotal, result.discount, result.total) == (Decimal("25.00"), Decimal("0.00"), Decimal("35.00"))

    def test_discount_is_capped_at_subtotal(self):
        result = quote(self.lines, AppliedDiscount(amount=Decimal("40")), delivery_charge=Decimal("10"))
        assert result.discount == Decimal("25.00")
        assert result.total == Decimal("10.00")

    def test_free_shipping(self):
        result = quote(self.lines, AppliedDiscount(free_shipping=True), delivery_charge=Decimal("10"))
        assert result.delivery_charge == Decimal("0.00")
        assert result.total == Decimal("25.00")


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "OK"
    assert body["uptime"] >= 0


def test_celery_urls_default_to_redis_url(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache.internal:6380/2")
    monkeypatch.delenv("CELERY_BROKER_URL", raising=False)
    monkeypatch.delenv("CELERY_RESULT_BACKEND", raising=False)
    try:
        importlib.reload(settings)
        assert settings.CELERY_BROKER_URL == "redis://cache.internal:6380/2"
        assert settings.CELERY_RESULT_BACKEND == "redis://cache.internal:6380/2"

        monkeypatch.setenv("CELERY_BROKER_URL", "redis://broker:6379/0")
        importlib.reload(settings)
        assert settings.CELERY_BROKER_URL == "redis://broker:6379/0"
        assert settings.CELERY_RESULT_BACKEND == "redis://cache.internal:6380/2"
    finally:
        monkeypatch.undo()
        importlib.reload(settings)
