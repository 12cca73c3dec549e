# logicbuilders/repos/build_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from logicbuilders.data.models.build import BuildModel, BuildProductModel
from logicbuilders.data.models.product import ProductModel


class BuildRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_owned_build(self, build_id: int, customer_id: int) -> BuildModel | None:
        return self.db.execute(
            select(BuildModel).where(BuildModel.id == build_id, BuildModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def list_builds(self, customer_id: int) -> List[BuildModel]:
        return list(
            self.db.execute(
                select(BuildModel)
                .where(BuildModel.customer_id == customer_id)
                .order_by(BuildModel.created_at.desc(), BuildModel.id.desc())
            ).scalars()
        )

    def get_build_products(self, build_id: int) -> List[BuildProductModel]:
        return list(
            self.db.execute(
                select(BuildProductModel)
                .options(joinedload(BuildProductModel.product).joinedload(ProductModel.category))
                .where(BuildProductModel.build_id == build_id)
                .order_by(BuildProductModel.id)
            ).scalars()
        )

    def get_build_product(self, build_id: int, product_id: int) -> BuildProductModel | None:
        return self.db.execute(
            select(BuildProductModel).where(
                BuildProductModel.build_id == build_id,
                BuildProductModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def build_price(self, build_id: int) -> Decimal:
        """Derived price: sum of component price x quantity."""
        total = self.db.execute(
            select(func.coalesce(func.sum(BuildProductModel.quantity * ProductModel.price), 0))
            .join(ProductModel, BuildProductModel.product_id == ProductModel.id)
            .where(BuildProductModel.build_id == build_id)
        ).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.flush()

    def commit(self):
        self.db.commit()
