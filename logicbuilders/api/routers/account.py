# logicbuilders/api/routers/account.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from logicbuilders.api.deps import get_customer
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.schemas import RedeemPointsIn, RedeemPointsOut, VouchersOut
from logicbuilders.services.points_service import PointsService

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/vouchers", response_model=VouchersOut)
def get_vouchers(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return PointsService(db).summary(ctx)


@router.post("/redeem-points", response_model=RedeemPointsOut)
def redeem_points(
    payload: RedeemPointsIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return PointsService(db).redeem(ctx, payload.points)
