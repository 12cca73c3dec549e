# logicbuilders/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from logicbuilders.api.deps import get_customer
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.schemas import CartAddIn, CartItemUpdateIn, CartOut, MessageOut
from logicbuilders.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(ctx)


@router.post("/add", response_model=MessageOut)
def add_item(
    payload: CartAddIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).add_item(
        ctx,
        product_id=payload.product_id,
        build_id=payload.build_id,
        quantity=payload.quantity,
    )
    return {"message": "Item added to cart successfully"}


@router.put("/item/{item_id}", response_model=MessageOut)
def update_item(
    item_id: int,
    payload: CartItemUpdateIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).update_quantity(ctx, item_id, payload.quantity)
    return {"message": "Cart item updated successfully"}


@router.delete("/item/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).remove_item(ctx, item_id)
    return {"message": "Item removed from cart successfully"}


@router.delete("/clear", response_model=MessageOut)
def clear_cart(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).clear(ctx)
    return {"message": "Cart cleared successfully"}
