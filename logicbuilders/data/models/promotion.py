#logicbuilders/data/models/promotion.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Boolean, ForeignKey, Text

from logicbuilders.data.database import Base


class PromoModel(Base):
    """Legacy shared promo code, matched by name."""

    __tablename__ = "promo"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    discount_percent = Column(Numeric(5, 2), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)


class PromotionModel(Base):
    """Admin-managed promotion code (percentage, fixed amount or free shipping)."""

    __tablename__ = "promotions"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    code = Column(String(40), nullable=False, unique=True)
    type = Column(String(20), nullable=False)
    discount_value = Column(Numeric(10, 2), nullable=False, default=0)
    max_uses = Column(Integer, nullable=True)
    min_order_value = Column(Numeric(10, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("admin_users.admin_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class PromotionUsageModel(Base):
    __tablename__ = "promotion_usage"

    id = Column(Integer, primary_key=True)
    promotion_id = Column(Integer, ForeignKey("promotions.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False)
    order_id = Column(Integer, ForeignKey("order.id"), nullable=True)
    discount_amount = Column(Numeric(10, 2), nullable=False)
    order_value = Column(Numeric(10, 2), nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
