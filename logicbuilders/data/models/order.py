from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, Boolean, Text
from sqlalchemy.orm import relationship

from logicbuilders.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "order"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    shipping_address_id = Column(Integer, ForeignKey("shipping_address.id"), nullable=False)

    promo_id = Column(Integer, ForeignKey("promo.id"), nullable=True)
    promotion_id = Column(Integer, ForeignKey("promotions.id"), nullable=True)

    # pending, processing, shipped, delivered, cancelled, awaiting_return, returned, return_declined
    status = Column(String(20), nullable=False, default="pending")
    payment_status = Column(Boolean, nullable=False, default=False)
    payment_method = Column(String(30), nullable=False)

    delivery_charge = Column(Numeric(10, 2), nullable=False)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), nullable=False)
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    items = relationship("OrderItemModel", back_populates="order", order_by="OrderItemModel.id")
    shipping_address = relationship("ShippingAddressModel")


class OrderItemModel(Base):
    #frozen copy of a cart line, decoupled from live product/build data
    __tablename__ = "order_item"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("order.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=True)
    build_id = Column(Integer, ForeignKey("build.id", ondelete="SET NULL"), nullable=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="items")
