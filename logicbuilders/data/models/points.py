from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from logicbuilders.data.database import Base


class CustomerPointsModel(Base):
    __tablename__ = "customer_points"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, unique=True)
    balance = Column(Integer, nullable=False, default=0)
    total_earned = Column(Integer, nullable=False, default=0)
    total_redeemed = Column(Integer, nullable=False, default=0)


class PointsTransactionModel(Base):
    __tablename__ = "points_transaction"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    # earned (+) / redeemed (-)
    type = Column(String(20), nullable=False)
    points = Column(Integer, nullable=False)
    order_id = Column(Integer, ForeignKey("order.id"), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
