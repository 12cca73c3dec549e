# logicbuilders/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from logicbuilders.api.deps import get_customer
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.errors import ValidationFailed
from logicbuilders.domain.schemas import (
    CheckoutIn,
    CheckoutOut,
    FromCartIn,
    FromCartOut,
    OrderDetailOut,
    OrderOut,
    OrderStatusIn,
)
from logicbuilders.services.order_service import OrderService, OrderWriter, PlaceOrder, order_row
from logicbuilders.utils import settings

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=List[OrderOut])
def list_orders(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(ctx)


@router.post("/checkout", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    """
    Place an order from the cart with an inline shipping address.
    Live stock is only re-checked when CHECKOUT_ENFORCE_STOCK is on.
    """
    if not payload.payment_method or payload.shipping_address is None:
        raise ValidationFailed("Payment method and shipping address are required")

    placed = OrderWriter(db).place_order(
        ctx,
        PlaceOrder(
            payment_method=payload.payment_method,
            code=payload.promo_code,
            inline_address=payload.shipping_address,
            enforce_stock=settings.CHECKOUT_ENFORCE_STOCK,
        ),
    )
    return {
        "orderId": placed.order.id,
        "total_price": placed.quote.total,
        "points_earned": placed.points_earned,
        "message": "Order placed successfully",
    }


@router.post("/from-cart", response_model=FromCartOut)
def create_from_cart(
    payload: FromCartIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    """
    Place an order from the cart with a saved shipping address.
    Always re-checks live stock.
    """
    if payload.shipping_address_id is None:
        raise ValidationFailed("Shipping address is required")

    placed = OrderWriter(db).place_order(
        ctx,
        PlaceOrder(
            payment_method=payload.payment_method,
            code=payload.coupon_code,
            address_id=payload.shipping_address_id,
            enforce_stock=True,
        ),
    )
    return {
        "message": "Order created successfully",
        "order": order_row(placed.order, placed.total_items),
        "total_items": placed.total_items,
        "discount_applied": placed.quote.discount,
    }


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(ctx, order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: OrderStatusIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).request_status(ctx, order_id, payload.status)
