from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, ForeignKey

from logicbuilders.data.database import Base


class VoucherModel(Base):
    """Customer-scoped, single-use discount code minted from loyalty points."""

    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    code = Column(String(40), nullable=False, unique=True)
    discount_percent = Column(Numeric(5, 2), nullable=False)
    max_discount = Column(Numeric(10, 2), nullable=False)
    points_cost = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="active")
    is_redeemed = Column(Boolean, nullable=False, default=False)
    redeemed_at = Column(DateTime(timezone=True), nullable=True)
    order_id = Column(Integer, ForeignKey("order.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    expires_at = Column(DateTime(timezone=True), nullable=False)
