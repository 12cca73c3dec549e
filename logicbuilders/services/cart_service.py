# logicbuilders/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from logicbuilders.data.models.cart import CartModel
from logicbuilders.data.models.cart_item import CartItemModel
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.repos.cart_repo import CartRepo
from logicbuilders.repos.product_repo import ProductRepo
from logicbuilders.services.build_service import BuildService
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Simple cqrs split for the cart domain:
    commands (add, update, remove, clear) change state,
    query (get) only reads.
    Concurrent writes to the same cart are last-write-wins.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.builds = BuildService(db)

    #query
    def get_cart(self, ctx: CustomerContext) -> Dict[str, Any]:
        cart = self._get_or_create_cart(ctx)
        self.repo.commit()

        items = self.repo.get_cart_items(cart.id)
        total = sum((i.unit_price * i.quantity for i in items), Decimal("0.00"))

        return {
            "cart_id": cart.id,
            "items": [
                {
                    "id": i.id,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                    "product_id": i.product_id,
                    "build_id": i.build_id,
                    "product_name": i.product.name if i.product else None,
                    "product_availability": i.product.availability if i.product else None,
                    "build_name": i.build.name if i.build else None,
                }
                for i in items
            ],
            "total": total.quantize(Decimal("0.01")),
        }

    #commands
    def add_item(
        self,
        ctx: CustomerContext,
        product_id: int | None,
        build_id: int | None,
        quantity: int,
    ) -> None:
        #a line references exactly one of product/build
        if not product_id and not build_id:
            raise ValidationFailed("Either product_id or build_id is required")
        if product_id and build_id:
            raise ValidationFailed("Cannot add both product and build in same item")
        if quantity is None or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")

        try:
            cart = self._get_or_create_cart(ctx)
            if product_id:
                self._add_product(cart, product_id, quantity)
            else:
                self._add_build(ctx, cart, build_id, quantity)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    def _add_product(self, cart: CartModel, product_id: int, quantity: int) -> None:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        if not product.availability:
            raise BusinessRuleViolation("Product is not available")

        stock = product.attribute.stock if product.attribute else 0
        if stock < quantity:
            raise BusinessRuleViolation(
                "Insufficient stock",
                available=stock,
                requested=quantity,
            )

        existing = self.repo.get_line(cart.id, product_id=product_id)
        if existing:
            total_quantity = existing.quantity + quantity
            if total_quantity > stock:
                raise BusinessRuleViolation(
                    "Total quantity exceeds available stock",
                    available=stock,
                    currentInCart=existing.quantity,
                    trying_to_add=quantity,
                    total=total_quantity,
                )
            logger.info(
                f"Product {product_id} already in cart {cart.id}, quantity "
                f"{existing.quantity} -> {total_quantity}"
            )
            existing.quantity = total_quantity
        else:
            logger.info(f"Adding product {product_id} x{quantity} to cart {cart.id}")
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=product.price,
                )
            )

    def _add_build(self, ctx: CustomerContext, cart: CartModel, build_id: int, quantity: int) -> None:
        price = self.builds.purchasable_price(ctx, build_id)

        existing = self.repo.get_line(cart.id, build_id=build_id)
        if existing:
            logger.info(f"Build {build_id} already in cart {cart.id}, quantity +{quantity}")
            existing.quantity += quantity
        else:
            logger.info(f"Adding build {build_id} x{quantity} to cart {cart.id} at {price}")
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    build_id=build_id,
                    quantity=quantity,
                    unit_price=price,
                )
            )

    def update_quantity(self, ctx: CustomerContext, item_id: int, quantity: int) -> None:
        if quantity is None or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")

        item = self.repo.get_owned_item(item_id, ctx.customer_id)
        if not item:
            raise NotFound("Cart item not found")

        item.quantity = quantity
        self.repo.commit()
        logger.info(f"Cart item {item_id} quantity set to {quantity}")

    def remove_item(self, ctx: CustomerContext, item_id: int) -> None:
        item = self.repo.get_owned_item(item_id, ctx.customer_id)
        if not item:
            raise NotFound("Cart item not found")

        self.repo.delete_cart_item(item)
        self.repo.commit()
        logger.info(f"Cart item {item_id} removed")

    def clear(self, ctx: CustomerContext) -> int:
        cart = self.repo.get_cart_by_customer(ctx.customer_id)
        if not cart:
            return 0
        removed = self.repo.clear(cart.id)
        self.repo.commit()
        logger.info(f"Cart {cart.id} cleared ({removed} items)")
        return removed

    def _get_or_create_cart(self, ctx: CustomerContext) -> CartModel:
        cart = self.repo.get_cart_by_customer(ctx.customer_id)
        if cart:
            return cart
        logger.info(f"Creating cart for customer {ctx.customer_id}")
        return self.repo.create_cart(CartModel(customer_id=ctx.customer_id))
