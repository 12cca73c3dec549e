# logicbuilders/api/routers/admin.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from logicbuilders.api.deps import require_clearance
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import AdminContext
from logicbuilders.domain.enums import Clearance, OrderStatus
from logicbuilders.domain.schemas import (
    AdminLogOut,
    AdminOrderDetailOut,
    AdminOrderUpdateIn,
    AdminOrderUpdateOut,
    AdminOut,
    BulkOrderUpdateIn,
    BulkOrderUpdateOut,
    ClearanceUpdateIn,
    CouponBatchIn,
    CouponBatchOut,
    MessageOut,
    OrderOut,
    ProductSpecsIn,
    ProductSpecsOut,
    PromotionIn,
    PromotionOut,
    PromotionUpdateIn,
    PromotionUsageOut,
    StockOut,
    StockUpdateIn,
)
from logicbuilders.services.admin_order_service import AdminOrderService
from logicbuilders.services.admin_service import AdminService
from logicbuilders.services.inventory_service import InventoryService
from logicbuilders.services.promotion_service import PromotionService

router = APIRouter(prefix="/admin", tags=["admin"])


# =====================================================
# orders / inventory
# =====================================================

@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    admin: AdminContext = Depends(require_clearance(Clearance.INVENTORY_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminOrderService(db).list_orders(status)


#declared before /orders/{order_id}/status so "bulk" is not taken for an id
@router.put("/orders/bulk/status", response_model=BulkOrderUpdateOut)
def bulk_update_orders(
    payload: BulkOrderUpdateIn,
    admin: AdminContext = Depends(require_clearance(Clearance.INVENTORY_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminOrderService(db).bulk_update(admin, payload)


@router.get("/orders/{order_id}", response_model=AdminOrderDetailOut)
def get_order(
    order_id: int,
    admin: AdminContext = Depends(require_clearance(Clearance.INVENTORY_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminOrderService(db).get_order(order_id)


@router.put("/orders/{order_id}/status", response_model=AdminOrderUpdateOut)
def update_order(
    order_id: int,
    payload: AdminOrderUpdateIn,
    admin: AdminContext = Depends(require_clearance(Clearance.INVENTORY_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminOrderService(db).update_order(admin, order_id, payload)


@router.put("/inventory/{product_id}/stock", response_model=StockOut)
def update_stock(
    product_id: int,
    payload: StockUpdateIn,
    admin: AdminContext = Depends(require_clearance(Clearance.INVENTORY_MANAGER)),
    db: Session = Depends(get_db),
):
    return InventoryService(db).set_stock(admin, product_id, payload.stock)


@router.post("/products/{product_id}/specs", response_model=ProductSpecsOut)
def update_specs(
    product_id: int,
    payload: ProductSpecsIn,
    admin: AdminContext = Depends(require_clearance(Clearance.PRODUCT_EXPERT)),
    db: Session = Depends(get_db),
):
    return InventoryService(db).set_specs(admin, product_id, payload.specs)


# =====================================================
# promotions
# =====================================================

@router.get("/promotions", response_model=List[PromotionOut])
def list_promotions(
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    return PromotionService(db).list_promotions()


@router.post("/promotions", response_model=PromotionOut, status_code=201)
def create_promotion(
    payload: PromotionIn,
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    return PromotionService(db).create_promotion(admin, payload)


@router.post("/promotions/generate-coupons", response_model=CouponBatchOut, status_code=201)
def generate_coupons(
    payload: CouponBatchIn,
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    return PromotionService(db).generate_coupons(admin, payload)


@router.put("/promotions/{promotion_id}", response_model=PromotionOut)
def update_promotion(
    promotion_id: int,
    payload: PromotionUpdateIn,
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    return PromotionService(db).update_promotion(admin, promotion_id, payload)


@router.delete("/promotions/{promotion_id}", response_model=MessageOut)
def delete_promotion(
    promotion_id: int,
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    PromotionService(db).delete_promotion(admin, promotion_id)
    return {"message": "Promotion deleted successfully"}


@router.get("/promotions/{promotion_id}/usage", response_model=List[PromotionUsageOut])
def promotion_usage(
    promotion_id: int,
    admin: AdminContext = Depends(require_clearance(Clearance.PROMO_MANAGER)),
    db: Session = Depends(get_db),
):
    return PromotionService(db).list_usage(promotion_id)


# =====================================================
# admins
# =====================================================

@router.put("/admins/{admin_id}/clearance", response_model=AdminOut)
def update_clearance(
    admin_id: int,
    payload: ClearanceUpdateIn,
    admin: AdminContext = Depends(require_clearance(Clearance.GENERAL_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminService(db).set_clearance(admin, admin_id, payload.clearance_level)


@router.get("/logs", response_model=List[AdminLogOut])
def list_logs(
    admin_id: Optional[int] = Query(None),
    action: Optional[str] = Query(None),
    target_type: Optional[str] = Query(None),
    target_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AdminContext = Depends(require_clearance(Clearance.GENERAL_MANAGER)),
    db: Session = Depends(get_db),
):
    return AdminService(db).list_logs(
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        limit=limit,
        offset=offset,
    )
