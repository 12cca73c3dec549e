from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, Numeric, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from logicbuilders.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_item"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("cart.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=True)
    build_id = Column(Integer, ForeignKey("build.id", ondelete="CASCADE"), nullable=True)

    quantity = Column(Integer, nullable=False)
    #snapshot at add-time, never re-derived at checkout
    unit_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cart = relationship("CartModel", back_populates="items")
    product = relationship("ProductModel")
    build = relationship("BuildModel")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_cart_item_quantity"),
        CheckConstraint("(product_id IS NULL) <> (build_id IS NULL)", name="ck_cart_item_one_ref"),
    )
