#logicbuilders/data/models/product.py
from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship

from logicbuilders.data.database import Base


class ProductCategoryModel(Base):
    __tablename__ = "product_category"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)


class ProductModel(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    availability = Column(Boolean, nullable=False, default=True)
    category_id = Column(Integer, ForeignKey("product_category.id"), nullable=False)
    specs = Column(JSON, nullable=True)
    image_url = Column(String, nullable=True)

    category = relationship("ProductCategoryModel")
    attribute = relationship("ProductAttributeModel", uselist=False, back_populates="product")


class ProductAttributeModel(Base):
    #stock lives in a separate record
    __tablename__ = "product_attribute"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), nullable=False, unique=True)
    stock = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="attribute")
