# logicbuilders/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from logicbuilders.domain.enums import Clearance, OrderStatus, PromotionType


class MessageOut(BaseModel):
    message: str


# =====================================================
# cart
# =====================================================

class CartAddIn(BaseModel):
    """Add a product or a build to the cart (exactly one of the two ids)."""

    product_id: Optional[int] = Field(None, gt=0)
    build_id: Optional[int] = Field(None, gt=0)
    quantity: int = 1


class CartItemUpdateIn(BaseModel):
    quantity: int


class CartLineOut(BaseModel):
    id: int
    quantity: int
    unit_price: Decimal
    product_id: Optional[int] = None
    build_id: Optional[int] = None
    product_name: Optional[str] = None
    product_availability: Optional[bool] = None
    build_name: Optional[str] = None


class CartOut(BaseModel):
    cart_id: int
    items: List[CartLineOut]
    total: Decimal


# =====================================================
# addresses
# =====================================================

class AddressIn(BaseModel):
    """Inline shipping address, as sent with /checkout."""

    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class AddressCreateIn(AddressIn):
    """Saved address, as sent by the account page (zipCode)."""

    model_config = ConfigDict(populate_by_name=True)

    zip_code: Optional[str] = Field(None, alias="zipCode")


class AddressOut(BaseModel):
    id: int
    address: str
    city: str
    zip_code: str
    country: str

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# orders
# =====================================================

class CheckoutIn(BaseModel):
    payment_method: Optional[str] = None
    shipping_address: Optional[AddressIn] = None
    promo_code: Optional[str] = None


class CheckoutOut(BaseModel):
    orderId: int
    total_price: Decimal
    points_earned: int
    message: str = "Order placed successfully"


class FromCartIn(BaseModel):
    shipping_address_id: Optional[int] = None
    coupon_code: Optional[str] = None
    payment_method: str = "cod"


class OrderItemOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    build_id: Optional[int] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    status: OrderStatus
    payment_status: bool
    payment_method: str
    delivery_charge: Decimal
    discount_amount: Decimal
    total_price: Decimal
    shipping_address_id: int
    promo_id: Optional[int] = None
    promotion_id: Optional[int] = None
    admin_notes: Optional[str] = None
    created_at: datetime
    item_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(OrderOut):
    shipping_address: Optional[AddressOut] = None
    items: List[OrderItemOut] = []


class FromCartOut(BaseModel):
    message: str = "Order created successfully"
    order: OrderOut
    total_items: int
    discount_applied: Decimal


class OrderStatusIn(BaseModel):
    status: OrderStatus


class AdminOrderUpdateIn(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[bool] = None
    admin_notes: Optional[str] = None


class AdminOrderUpdateOut(BaseModel):
    message: str = "Order updated successfully"
    order: OrderOut
    stock_updated: bool


class AdminOrderDetailOut(OrderDetailOut):
    customer_id: int


class BulkOrderUpdateIn(BaseModel):
    order_ids: List[int] = Field(..., min_length=1)
    status: Optional[OrderStatus] = None
    payment_status: Optional[bool] = None


class BulkOrderResult(BaseModel):
    order_id: int
    success: bool
    error: Optional[str] = None


class BulkOrderUpdateOut(BaseModel):
    message: str
    results: List[BulkOrderResult]
    summary: Dict[str, int]


# =====================================================
# loyalty points / vouchers
# =====================================================

class RedeemPointsIn(BaseModel):
    points: int


class RedeemPointsOut(BaseModel):
    message: str
    points_redeemed: int
    remaining_points: int
    vouchers: List[str]


class VoucherOut(BaseModel):
    id: int
    code: str
    discount_percent: Decimal
    max_discount: Decimal
    status: str
    is_redeemed: bool
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VouchersOut(BaseModel):
    points: int
    total_redeemed: int
    vouchers: List[VoucherOut]


# =====================================================
# builds
# =====================================================

class BuildCreateIn(BaseModel):
    name: str = Field("My Build", min_length=1, max_length=100)


class BuildUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class BuildAddProductIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class BuildValidationOut(BaseModel):
    is_valid: bool
    missing: List[str]


class BuildProductOut(BaseModel):
    id: int
    product_id: int
    name: str
    price: Decimal
    quantity: int
    category_name: str


class BuildOut(BaseModel):
    id: int
    name: str
    created_at: datetime
    product_count: int
    total_price: Decimal


class BuildDetailOut(BuildOut):
    products: List[BuildProductOut]
    validation: BuildValidationOut


# =====================================================
# admin
# =====================================================

class StockUpdateIn(BaseModel):
    stock: int = Field(..., ge=0)


class StockOut(BaseModel):
    product_id: int
    stock: int


class ProductSpecsIn(BaseModel):
    specs: Dict[str, Any]


class ProductSpecsOut(BaseModel):
    product_id: int
    category: str
    specs: Dict[str, Any]


class PromotionIn(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=3, max_length=40)
    type: PromotionType
    discount_value: Decimal = Field(Decimal("0"), ge=0)
    max_uses: Optional[int] = Field(None, gt=0)
    min_order_value: Optional[Decimal] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


class PromotionUpdateIn(BaseModel):
    name: Optional[str] = None
    type: Optional[PromotionType] = None
    discount_value: Optional[Decimal] = Field(None, ge=0)
    max_uses: Optional[int] = Field(None, gt=0)
    min_order_value: Optional[Decimal] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class PromotionOut(BaseModel):
    id: int
    name: str
    code: str
    type: PromotionType
    discount_value: Decimal
    max_uses: Optional[int] = None
    min_order_value: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    is_active: bool
    total_used: int = 0
    status: str = "Active"

    model_config = ConfigDict(from_attributes=True)


class PromotionUsageOut(BaseModel):
    id: int
    order_id: Optional[int] = None
    customer_id: int
    discount_amount: Decimal
    order_value: Decimal
    used_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CouponBatchIn(BaseModel):
    """Mint a batch of single-use promotion codes sharing one rule."""

    name: str = Field(..., min_length=1)
    prefix: str = Field("LB", min_length=1, max_length=10, pattern=r"^[A-Za-z0-9]+$")
    count: int = Field(..., ge=1, le=500)
    type: PromotionType
    discount_value: Decimal = Field(Decimal("0"), ge=0)
    max_uses: int = Field(1, gt=0)
    min_order_value: Optional[Decimal] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


class CouponBatchOut(BaseModel):
    message: str
    codes: List[str]


class ClearanceUpdateIn(BaseModel):
    clearance_level: Clearance


class AdminOut(BaseModel):
    admin_id: int
    employee_id: str
    name: str
    clearance_level: Clearance

    model_config = ConfigDict(from_attributes=True)


class AdminLogOut(BaseModel):
    id: int
    admin_id: int
    action: str
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
