from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from logicbuilders.data.database import Base


class BuildModel(Base):
    __tablename__ = "build"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    name = Column(String, nullable=False, default="Custom Build")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    products = relationship(
        "BuildProductModel",
        back_populates="build",
        cascade="all, delete-orphan",
    )


class BuildProductModel(Base):
    __tablename__ = "build_product"

    id = Column(Integer, primary_key=True)
    build_id = Column(Integer, ForeignKey("build.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    build = relationship("BuildModel", back_populates="products")
    product = relationship("ProductModel")

    __table_args__ = (UniqueConstraint("build_id", "product_id", name="u_build_product"),)
