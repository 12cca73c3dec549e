# logicbuilders/services/promotion_service.py
import secrets
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from logicbuilders.data.models.promotion import PromotionModel, PromotionUsageModel
from logicbuilders.domain.context import AdminContext
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.domain.schemas import CouponBatchIn, PromotionIn, PromotionUpdateIn
from logicbuilders.repos.promotion_repo import PromotionRepo
from logicbuilders.services.audit_service import AuditService
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


def promotion_status(promotion: PromotionModel, today: date | None = None) -> str:
    today = today or date.today()
    if promotion.end_date is not None and promotion.end_date < today:
        return "Expired"
    if not promotion.is_active:
        return "Inactive"
    return "Active"


class PromotionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PromotionRepo(db)
        self.audit = AuditService(db)

    def list_promotions(self) -> List[Dict[str, Any]]:
        return [self._row(promotion, used) for promotion, used in self.repo.list_with_usage()]

    def create_promotion(self, admin: AdminContext, payload: PromotionIn) -> Dict[str, Any]:
        self._check_dates(payload.start_date, payload.end_date)
        if self.repo.code_exists(payload.code):
            raise BusinessRuleViolation("Promotion code already exists")

        promotion = self.repo.add(
            PromotionModel(
                **payload.model_dump(exclude={"type"}),
                type=payload.type.value,
                is_active=True,
                created_by=admin.admin_id,
            )
        )
        self.audit.record(admin, "CREATE_PROMOTION", "PROMOTION", promotion.id, code=promotion.code, type=promotion.type)
        self.db.commit()

        logger.info(f"Admin {admin.admin_id} created promotion {promotion.code} ({promotion.type})")
        return self._row(promotion, 0)

    def update_promotion(self, admin: AdminContext, promotion_id: int, payload: PromotionUpdateIn) -> Dict[str, Any]:
        promotion = self.repo.get_promotion(promotion_id)
        if not promotion:
            raise NotFound("Promotion not found")

        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationFailed("No fields to update")
        if "type" in changes and changes["type"] is not None:
            changes["type"] = changes["type"].value

        for field, value in changes.items():
            setattr(promotion, field, value)
        self._check_dates(promotion.start_date, promotion.end_date)
        self.audit.record(admin, "UPDATE_PROMOTION", "PROMOTION", promotion.id, changes=changes)
        self.db.commit()

        logger.info(f"Admin {admin.admin_id} updated promotion {promotion.code}: {sorted(changes)}")
        return self._row(promotion, self.repo.usage_count(promotion.id))

    def delete_promotion(self, admin: AdminContext, promotion_id: int) -> None:
        promotion = self.repo.get_promotion(promotion_id)
        if not promotion:
            raise NotFound("Promotion not found")

        #orders reference used promotions
        used = self.repo.usage_count(promotion.id)
        if used:
            raise BusinessRuleViolation(
                "Promotion has already been used; deactivate it instead",
                total_used=used,
            )

        code = promotion.code
        self.repo.delete(promotion)
        self.audit.record(admin, "DELETE_PROMOTION", "PROMOTION", promotion_id, code=code)
        self.db.commit()

        logger.info(f"Admin {admin.admin_id} deleted promotion {code}")

    def list_usage(self, promotion_id: int) -> List[PromotionUsageModel]:
        if not self.repo.get_promotion(promotion_id):
            raise NotFound("Promotion not found")
        return self.repo.list_usage(promotion_id)

    def generate_coupons(self, admin: AdminContext, payload: CouponBatchIn) -> Dict[str, Any]:
        """Mint `count` unique codes that share one discount rule."""
        self._check_dates(payload.start_date, payload.end_date)

        prefix = payload.prefix.upper()
        codes = []
        try:
            while len(codes) < payload.count:
                code = f"{prefix}-{secrets.token_hex(3).upper()}"
                if code in codes or self.repo.code_exists(code):
                    continue
                self.repo.add(
                    PromotionModel(
                        name=payload.name,
                        code=code,
                        type=payload.type.value,
                        discount_value=payload.discount_value,
                        max_uses=payload.max_uses,
                        min_order_value=payload.min_order_value,
                        start_date=payload.start_date,
                        end_date=payload.end_date,
                        description=payload.description,
                        is_active=True,
                        created_by=admin.admin_id,
                    )
                )
                codes.append(code)
            self.audit.record(admin, "GENERATE_COUPONS", "PROMOTION", None, prefix=prefix, codes=codes)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Admin {admin.admin_id} generated {len(codes)} coupons with prefix {prefix}")
        return {"message": f"Generated {len(codes)} coupons", "codes": codes}

    def _check_dates(self, start: date | None, end: date | None) -> None:
        if start and end and end < start:
            raise ValidationFailed("end_date must not be before start_date")

    def _row(self, promotion: PromotionModel, used: int) -> Dict[str, Any]:
        return {
            "id": promotion.id,
            "name": promotion.name,
            "code": promotion.code,
            "type": promotion.type,
            "discount_value": promotion.discount_value,
            "max_uses": promotion.max_uses,
            "min_order_value": promotion.min_order_value,
            "start_date": promotion.start_date,
            "end_date": promotion.end_date,
            "description": promotion.description,
            "is_active": promotion.is_active,
            "total_used": used,
            "status": promotion_status(promotion),
        }
