# logicbuilders/repos/order_repo.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from logicbuilders.data.models.order import OrderModel, OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def get_order(self, order_id: int, for_update: bool = False) -> OrderModel | None:
        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def get_order_detail(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.shipping_address))
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def get_owned_order(self, order_id: int, customer_id: int, for_update: bool = False) -> OrderModel | None:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.shipping_address))
            .where(OrderModel.id == order_id, OrderModel.customer_id == customer_id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def list_orders(self, customer_id: int | None = None, status: str | None = None) -> List[tuple[OrderModel, int]]:
        """Orders (newest first) with their line count."""
        item_count = (
            select(func.count(OrderItemModel.id))
            .where(OrderItemModel.order_id == OrderModel.id)
            .correlate(OrderModel)
            .scalar_subquery()
        )
        stmt = select(OrderModel, item_count).order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        if customer_id is not None:
            stmt = stmt.where(OrderModel.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status)
        return [(order, count) for order, count in self.db.execute(stmt).all()]

    def get_product_lines(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel).where(
                    OrderItemModel.order_id == order_id,
                    OrderItemModel.product_id.is_not(None),
                )
            ).scalars()
        )
