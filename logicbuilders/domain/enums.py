# logicbuilders/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    AWAITING_RETURN = "awaiting_return"
    RETURNED = "returned"
    RETURN_DECLINED = "return_declined"


class PromotionType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_SHIPPING = "free_shipping"


class VoucherStatus(str, Enum):
    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


class PointsEntryType(str, Enum):
    EARNED = "earned"
    REDEEMED = "redeemed"


class Clearance(str, Enum):
    """
    Admin permission tiers.

    GENERAL_MANAGER opens every back-office route; every other tier opens
    only the routes that require exactly that tier.
    """

    INVENTORY_MANAGER = "INVENTORY_MANAGER"
    PRODUCT_EXPERT = "PRODUCT_EXPERT"
    ORDER_MANAGER = "ORDER_MANAGER"
    PROMO_MANAGER = "PROMO_MANAGER"
    ANALYTICS = "ANALYTICS"
    GENERAL_MANAGER = "GENERAL_MANAGER"

    def permits(self, required: "Clearance") -> bool:
        return self is Clearance.GENERAL_MANAGER or self is required
