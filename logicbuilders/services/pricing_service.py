# logicbuilders/services/pricing_service.py
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from logicbuilders.domain.enums import PromotionType
from logicbuilders.repos.promotion_repo import PromotionRepo
from logicbuilders.utils import settings
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceLine:
    unit_price: Decimal
    quantity: int

    @property
    def total(self) -> Decimal:
        return money(Decimal(str(self.unit_price)) * self.quantity)


@dataclass(frozen=True)
class AppliedDiscount:
    """A resolved discount code; the default instance means "no code applied"."""

    amount: Decimal = ZERO
    free_shipping: bool = False
    voucher_id: Optional[int] = None
    promotion_id: Optional[int] = None
    promo_id: Optional[int] = None
    code: Optional[str] = None


NO_DISCOUNT = AppliedDiscount()


@dataclass(frozen=True)
class Quote:
    subtotal: Decimal
    discount: Decimal
    delivery_charge: Decimal
    total: Decimal
    applied: AppliedDiscount = NO_DISCOUNT


def subtotal_of(lines: Iterable[PriceLine]) -> Decimal:
    return money(sum((line.total for line in lines), ZERO))


def quote(
    lines: Iterable[PriceLine],
    applied: AppliedDiscount = NO_DISCOUNT,
    delivery_charge: Decimal | None = None,
) -> Quote:
    """total = subtotal - discount + delivery charge (waived for free shipping)."""
    subtotal = subtotal_of(lines)
    delivery = money(settings.DELIVERY_CHARGE if delivery_charge is None else delivery_charge)
    if applied.free_shipping:
        delivery = ZERO

    discount = min(money(applied.amount), subtotal)
    return Quote(
        subtotal=subtotal,
        discount=discount,
        delivery_charge=delivery,
        total=money(subtotal - discount + delivery),
        applied=applied,
    )


class PricingService:
    """
    Prices a cart and resolves discount codes.

    Code lookup order: the customer's own vouchers, then admin promotions, then
    legacy promo codes. A code that matches nothing usable is ignored, the order
    is simply priced without a discount.
    """

    def __init__(self, db: Session):
        self.repo = PromotionRepo(db)

    def resolve_code(
        self,
        customer_id: int,
        code: str | None,
        subtotal: Decimal,
        today: date | None = None,
        now: datetime | None = None,
        lock: bool = False,
    ) -> AppliedDiscount:
        code = (code or "").strip()
        if not code:
            return NO_DISCOUNT

        now = now or datetime.now(timezone.utc)
        today = today or now.date()

        voucher = self.repo.find_active_voucher(customer_id, code, now)
        if voucher:
            amount = min(money(subtotal * voucher.discount_percent / 100), money(voucher.max_discount))
            return AppliedDiscount(amount=amount, voucher_id=voucher.id, code=voucher.code)

        promotion = self.repo.find_active_promotion(code, today, for_update=lock)
        if promotion:
            return self._apply_promotion(promotion, subtotal)

        promo = self.repo.find_active_promo(code, today)
        if promo:
            amount = money(subtotal * promo.discount_percent / 100)
            return AppliedDiscount(amount=amount, promo_id=promo.id, code=promo.name)

        logger.info(f"Code {code!r} matched no active voucher or promotion, ignoring")
        return NO_DISCOUNT

    def _apply_promotion(self, promotion, subtotal: Decimal) -> AppliedDiscount:
        if promotion.max_uses and self.repo.usage_count(promotion.id) >= promotion.max_uses:
            logger.info(f"Promotion {promotion.code} exhausted ({promotion.max_uses} uses), ignoring")
            return NO_DISCOUNT

        if promotion.min_order_value is not None and subtotal < promotion.min_order_value:
            logger.info(f"Subtotal {subtotal} below minimum {promotion.min_order_value} for {promotion.code}")
            return NO_DISCOUNT

        kind = PromotionType(promotion.type)
        if kind is PromotionType.PERCENTAGE:
            amount = money(subtotal * promotion.discount_value / 100)
        elif kind is PromotionType.FIXED_AMOUNT:
            amount = min(money(promotion.discount_value), subtotal)
        else:
            amount = ZERO

        return AppliedDiscount(
            amount=amount,
            free_shipping=kind is PromotionType.FREE_SHIPPING,
            promotion_id=promotion.id,
            code=promotion.code,
        )

    def price_cart(self, customer_id: int, lines: list[PriceLine], code: str | None = None) -> Quote:
        """Price a cart inside the checkout transaction; a matched promotion row stays locked until commit."""
        applied = self.resolve_code(customer_id, code, subtotal_of(lines), lock=True)
        return quote(lines, applied)
