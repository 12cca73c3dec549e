# logicbuilders/services/points_service.py
import secrets
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from logicbuilders.data.models.points import PointsTransactionModel
from logicbuilders.data.models.voucher import VoucherModel
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.enums import PointsEntryType, VoucherStatus
from logicbuilders.domain.errors import BusinessRuleViolation, ValidationFailed
from logicbuilders.repos.points_repo import PointsRepo
from logicbuilders.utils import settings
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


def points_for(total_price: Decimal) -> int:
    """1 point per whole currency unit spent."""
    return max(int(Decimal(str(total_price)).to_integral_value(rounding=ROUND_FLOOR)), 0)


class PointsService:
    """
    Loyalty points ledger.

    credit() runs inside the caller's transaction (checkout) and never commits;
    redeem() is its own unit of work.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = PointsRepo(db)

    def credit(self, customer_id: int, total_price: Decimal, order_id: int | None = None) -> int:
        earned = points_for(total_price)
        if earned == 0:
            return 0

        account = self.repo.get_or_create_account(customer_id, for_update=True)
        account.balance += earned
        account.total_earned += earned
        self.repo.add_entry(
            PointsTransactionModel(
                customer_id=customer_id,
                type=PointsEntryType.EARNED.value,
                points=earned,
                order_id=order_id,
                description=f"Order #{order_id}" if order_id else None,
            )
        )
        logger.info(f"Credited {earned} points to customer {customer_id} (order {order_id})")
        return earned

    def redeem(self, ctx: CustomerContext, points: int) -> Dict[str, Any]:
        step = settings.POINTS_PER_VOUCHER
        if points is None or points < step or points % step != 0:
            raise ValidationFailed(f"Points must be a positive multiple of {step}")

        try:
            account = self.repo.get_or_create_account(ctx.customer_id, for_update=True)
            if points > account.balance:
                raise BusinessRuleViolation(
                    "Insufficient points",
                    available=account.balance,
                    requested=points,
                )

            account.balance -= points
            account.total_redeemed += points
            self.repo.add_entry(
                PointsTransactionModel(
                    customer_id=ctx.customer_id,
                    type=PointsEntryType.REDEEMED.value,
                    points=-points,
                    description=f"Redeemed for {points // step} voucher(s)",
                )
            )

            expires_at = datetime.now(timezone.utc) + timedelta(days=settings.VOUCHER_TTL_DAYS)
            codes = []
            for _ in range(points // step):
                voucher = self.repo.add_voucher(
                    VoucherModel(
                        customer_id=ctx.customer_id,
                        code=self._new_code(),
                        discount_percent=settings.VOUCHER_DISCOUNT_PERCENT,
                        max_discount=settings.VOUCHER_MAX_DISCOUNT,
                        points_cost=step,
                        status=VoucherStatus.ACTIVE.value,
                        is_redeemed=False,
                        expires_at=expires_at,
                    )
                )
                codes.append(voucher.code)

            remaining = account.balance
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Customer {ctx.customer_id} redeemed {points} points for {len(codes)} voucher(s)")

        return {
            "message": f"Redeemed {points} points for {len(codes)} voucher(s)",
            "points_redeemed": points,
            "remaining_points": remaining,
            "vouchers": codes,
        }

    def summary(self, ctx: CustomerContext) -> Dict[str, Any]:
        account = self.repo.get_or_create_account(ctx.customer_id)
        vouchers: List[VoucherModel] = self.repo.list_vouchers(ctx.customer_id)
        self.db.commit()
        return {
            "points": account.balance,
            "total_redeemed": account.total_redeemed,
            "vouchers": vouchers,
        }

    def _new_code(self) -> str:
        while True:
            code = f"LBV-{secrets.token_hex(4).upper()}"
            if not self.repo.voucher_code_exists(code):
                return code
