# logicbuilders/services/order_service.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from logicbuilders.data.models.order import OrderModel, OrderItemModel
from logicbuilders.data.models.promotion import PromotionUsageModel
from logicbuilders.data.models.shipping_address import ShippingAddressModel
from logicbuilders.data.models.voucher import VoucherModel
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.enums import OrderStatus, VoucherStatus
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.domain.order_flow import CUSTOMER_TRANSITIONS, STOCK_DEDUCTED, can_transition
from logicbuilders.domain.schemas import AddressIn
from logicbuilders.repos.address_repo import AddressRepo
from logicbuilders.repos.cart_repo import CartRepo
from logicbuilders.repos.order_repo import OrderRepo
from logicbuilders.repos.promotion_repo import PromotionRepo
from logicbuilders.services.catalog_service import ensure_available
from logicbuilders.services.inventory_service import InventoryService
from logicbuilders.services.notification_service import NotificationService
from logicbuilders.services.points_service import PointsService
from logicbuilders.services.pricing_service import PriceLine, PricingService, Quote
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlaceOrder:
    """
    One checkout request. Exactly one address source is used: an inline
    address (deduplicated against the customer's saved ones) or the id of a
    saved address.
    """

    payment_method: str
    code: Optional[str] = None
    inline_address: Optional[AddressIn] = None
    address_id: Optional[int] = None
    enforce_stock: bool = False


@dataclass(frozen=True)
class PlacedOrder:
    order: OrderModel
    quote: Quote
    points_earned: int
    total_items: int


class OrderWriter:
    """
    Turns the caller's cart into an order in a single transaction:
    address, availability check, pricing, order + items, code consumption,
    cart clearing and points credit. Any failure rolls everything back.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)
        self.addresses = AddressRepo(db)
        self.promotions = PromotionRepo(db)
        self.pricing = PricingService(db)
        self.points = PointsService(db)
        self.notification_service = notification_service or NotificationService()

    def place_order(self, ctx: CustomerContext, request: PlaceOrder) -> PlacedOrder:
        try:
            address = self._resolve_address(ctx, request)

            cart = self.carts.get_cart_by_customer(ctx.customer_id)
            lines = self.carts.get_cart_items(cart.id) if cart else []
            if not lines:
                raise BusinessRuleViolation("Cart is empty")

            ensure_available(lines, enforce_stock=request.enforce_stock)

            price_lines = [PriceLine(unit_price=line.unit_price, quantity=line.quantity) for line in lines]
            quote = self.pricing.price_cart(ctx.customer_id, price_lines, request.code)
            applied = quote.applied

            order = self.orders.add_order(
                OrderModel(
                    customer_id=ctx.customer_id,
                    shipping_address_id=address.id,
                    promo_id=applied.promo_id,
                    promotion_id=applied.promotion_id,
                    status=OrderStatus.PENDING.value,
                    payment_status=False,
                    payment_method=request.payment_method,
                    delivery_charge=quote.delivery_charge,
                    discount_amount=quote.discount,
                    total_price=quote.total,
                )
            )

            for line, price_line in zip(lines, price_lines):
                self.orders.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line.product_id,
                        build_id=line.build_id,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        total_price=price_line.total,
                    )
                )

            self._consume_code(ctx, order, quote)
            self.carts.clear(cart.id)
            points_earned = self.points.credit(ctx.customer_id, quote.total, order.id)

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Checkout rolled back for customer {ctx.customer_id}: {e}")
            raise

        logger.info(
            f"Order {order.id} placed by customer {ctx.customer_id}: {len(lines)} lines, "
            f"subtotal {quote.subtotal}, discount {quote.discount}, total {quote.total}"
        )

        self.notification_service.send_order_notification(
            ctx.user_id,
            order.id,
            coupon_code=quote.applied.code,
            discount=quote.discount,
            total_items=len(lines),
        )

        return PlacedOrder(order=order, quote=quote, points_earned=points_earned, total_items=len(lines))

    def _resolve_address(self, ctx: CustomerContext, request: PlaceOrder) -> ShippingAddressModel:
        if request.address_id is not None:
            address = self.addresses.get_owned(request.address_id, ctx.customer_id)
            if not address:
                raise ValidationFailed("Invalid shipping address")
            return address

        inline = request.inline_address
        if inline is None:
            raise ValidationFailed("Shipping address is required")

        fields = (inline.address, inline.city, inline.zip_code, inline.country)
        if not all(fields):
            raise ValidationFailed("All address fields are required")

        existing = self.addresses.find_exact(ctx.customer_id, *fields)
        if existing:
            return existing

        return self.addresses.add(
            ShippingAddressModel(
                customer_id=ctx.customer_id,
                address=inline.address,
                city=inline.city,
                zip_code=inline.zip_code,
                country=inline.country,
            )
        )

    def _consume_code(self, ctx: CustomerContext, order: OrderModel, quote: Quote) -> None:
        applied = quote.applied

        if applied.voucher_id is not None:
            voucher = self.db.get(VoucherModel, applied.voucher_id)
            voucher.is_redeemed = True
            voucher.redeemed_at = datetime.now(timezone.utc)
            voucher.status = VoucherStatus.USED.value
            voucher.order_id = order.id
            logger.info(f"Voucher {voucher.code} used on order {order.id}")

        if applied.promotion_id is not None:
            self.promotions.add(
                PromotionUsageModel(
                    promotion_id=applied.promotion_id,
                    customer_id=ctx.customer_id,
                    order_id=order.id,
                    discount_amount=quote.discount,
                    order_value=quote.subtotal,
                )
            )


class OrderService:
    """Customer-side order queries and status requests."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.inventory = InventoryService(db)

    def list_orders(self, ctx: CustomerContext) -> List[Dict[str, Any]]:
        return [order_row(order, count) for order, count in self.repo.list_orders(customer_id=ctx.customer_id)]

    def get_order(self, ctx: CustomerContext, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_owned_order(order_id, ctx.customer_id)
        if not order:
            raise NotFound("Order not found")

        return {
            **order_row(order, len(order.items)),
            "shipping_address": order.shipping_address,
            "items": order.items,
        }

    def request_status(self, ctx: CustomerContext, order_id: int, target: OrderStatus) -> Dict[str, Any]:
        """Customer-initiated cancel or return request."""
        try:
            order = self.repo.get_owned_order(order_id, ctx.customer_id, for_update=True)
            if not order:
                raise NotFound("Order not found")

            current = OrderStatus(order.status)
            if not can_transition(CUSTOMER_TRANSITIONS, current, target):
                raise BusinessRuleViolation(
                    f"Cannot change order status from {current.value} to {target.value}",
                    current=current.value,
                    requested=target.value,
                )

            if target is OrderStatus.CANCELLED and current in STOCK_DEDUCTED:
                self.inventory.restore_for_order(order.id)

            order.status = target.value
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Customer {ctx.customer_id} moved order {order_id} {current.value} -> {target.value}")
        return order_row(order, len(order.items))


def order_row(order: OrderModel, item_count: int) -> Dict[str, Any]:
    return {
        "id": order.id,
        "status": order.status,
        "payment_status": order.payment_status,
        "payment_method": order.payment_method,
        "delivery_charge": order.delivery_charge,
        "discount_amount": order.discount_amount,
        "total_price": order.total_price,
        "shipping_address_id": order.shipping_address_id,
        "promo_id": order.promo_id,
        "promotion_id": order.promotion_id,
        "admin_notes": order.admin_notes,
        "created_at": order.created_at,
        "item_count": item_count,
    }
