# logicbuilders/repos/cart_repo.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session, joinedload

from logicbuilders.data.models.cart import CartModel
from logicbuilders.data.models.cart_item import CartItemModel
from logicbuilders.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_customer(self, customer_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .options(
                    joinedload(CartItemModel.product).joinedload(ProductModel.attribute),
                    joinedload(CartItemModel.build),
                )
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.created_at.desc(), CartItemModel.id.desc())
            ).scalars().unique()
        )

    def get_line(
        self,
        cart_id: int,
        product_id: int | None = None,
        build_id: int | None = None,
    ) -> CartItemModel | None:
        stmt = select(CartItemModel).where(CartItemModel.cart_id == cart_id)
        if product_id is not None:
            stmt = stmt.where(CartItemModel.product_id == product_id)
        else:
            stmt = stmt.where(CartItemModel.build_id == build_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_owned_item(self, item_id: int, customer_id: int) -> CartItemModel | None:
        #item only visible through the caller's own cart
        return self.db.execute(
            select(CartItemModel)
            .join(CartModel, CartItemModel.cart_id == CartModel.id)
            .where(CartItemModel.id == item_id, CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear(self, cart_id: int) -> int:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
