# logicbuilders/repos/promotion_repo.py
from datetime import date, datetime
from typing import List

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from logicbuilders.data.models.promotion import PromoModel, PromotionModel, PromotionUsageModel
from logicbuilders.data.models.voucher import VoucherModel


class PromotionRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_active_voucher(self, customer_id: int, code: str, now: datetime) -> VoucherModel | None:
        return self.db.execute(
            select(VoucherModel).where(
                func.upper(VoucherModel.code) == code.upper(),
                VoucherModel.customer_id == customer_id,
                VoucherModel.status == "active",
                VoucherModel.is_redeemed.is_(False),
                VoucherModel.expires_at > now,
            )
        ).scalar_one_or_none()

    def find_active_promotion(self, code: str, today: date, for_update: bool = False) -> PromotionModel | None:
        stmt = select(PromotionModel).where(
            func.upper(PromotionModel.code) == code.upper(),
            PromotionModel.is_active.is_(True),
            or_(PromotionModel.start_date.is_(None), PromotionModel.start_date <= today),
            or_(PromotionModel.end_date.is_(None), PromotionModel.end_date >= today),
        )
        if for_update:
            #serialises max_uses checks of concurrent checkouts
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def find_active_promo(self, name: str, today: date) -> PromoModel | None:
        #legacy codes match their name exactly
        return self.db.execute(
            select(PromoModel).where(
                PromoModel.name == name,
                PromoModel.status == "active",
                PromoModel.start_date <= today,
                PromoModel.end_date >= today,
            )
        ).scalar_one_or_none()

    def usage_count(self, promotion_id: int) -> int:
        return self.db.execute(
            select(func.count(PromotionUsageModel.id)).where(PromotionUsageModel.promotion_id == promotion_id)
        ).scalar_one()

    def get_promotion(self, promotion_id: int) -> PromotionModel | None:
        return self.db.get(PromotionModel, promotion_id)

    def code_exists(self, code: str) -> bool:
        return self.db.execute(
            select(PromotionModel.id).where(func.upper(PromotionModel.code) == code.upper())
        ).first() is not None

    def list_with_usage(self) -> List[tuple[PromotionModel, int]]:
        used = (
            select(func.count(PromotionUsageModel.id))
            .where(PromotionUsageModel.promotion_id == PromotionModel.id)
            .correlate(PromotionModel)
            .scalar_subquery()
        )
        rows = self.db.execute(
            select(PromotionModel, used).order_by(PromotionModel.created_at.desc(), PromotionModel.id.desc())
        ).all()
        return [(promotion, count) for promotion, count in rows]

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def list_usage(self, promotion_id: int) -> List[PromotionUsageModel]:
        return list(
            self.db.execute(
                select(PromotionUsageModel)
                .where(PromotionUsageModel.promotion_id == promotion_id)
                .order_by(PromotionUsageModel.used_at.desc(), PromotionUsageModel.id.desc())
            ).scalars()
        )

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.flush()
