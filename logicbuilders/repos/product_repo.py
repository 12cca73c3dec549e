# logicbuilders/repos/product_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from logicbuilders.data.models.product import ProductModel, ProductAttributeModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.attribute), joinedload(ProductModel.category))
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def get_attribute(self, product_id: int, for_update: bool = False) -> ProductAttributeModel | None:
        stmt = select(ProductAttributeModel).where(ProductAttributeModel.product_id == product_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def add_attribute(self, attribute: ProductAttributeModel) -> ProductAttributeModel:
        self.db.add(attribute)
        self.db.flush()
        return attribute
