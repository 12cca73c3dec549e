# logicbuilders/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from logicbuilders.api.deps import get_customer
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.schemas import AddressCreateIn, AddressOut
from logicbuilders.services.address_service import AddressService

router = APIRouter(prefix="/user", tags=["addresses"])


@router.get("/addresses", response_model=List[AddressOut])
def list_addresses(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return AddressService(db).list_addresses(ctx)


@router.post("/addresses", response_model=AddressOut, status_code=201)
def add_address(
    payload: AddressCreateIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return AddressService(db).add_address(ctx, payload)
