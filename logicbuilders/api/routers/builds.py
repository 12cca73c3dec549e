# logicbuilders/api/routers/builds.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from logicbuilders.api.deps import get_customer
from logicbuilders.data.database import get_db
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.schemas import (
    BuildAddProductIn,
    BuildCreateIn,
    BuildDetailOut,
    BuildOut,
    BuildUpdateIn,
    BuildValidationOut,
    MessageOut,
)
from logicbuilders.services.build_service import BuildService

router = APIRouter(prefix="/builds", tags=["builds"])


def get_service(db: Session):
    return BuildService(db)


@router.get("", response_model=List[BuildOut])
def list_builds(
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).list_builds(ctx)


@router.post("", response_model=BuildOut, status_code=201)
def create_build(
    payload: BuildCreateIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).create_build(ctx, payload.name)


@router.get("/{build_id}", response_model=BuildDetailOut)
def get_build(
    build_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).get_build(ctx, build_id)


@router.get("/{build_id}/validate", response_model=BuildValidationOut)
def validate_build(
    build_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    result = get_service(db).validate(ctx, build_id)
    return {"is_valid": result.is_valid, "missing": result.missing}


@router.put("/{build_id}", response_model=BuildOut)
def update_build(
    build_id: int,
    payload: BuildUpdateIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    return get_service(db).rename_build(ctx, build_id, payload.name)


@router.post("/{build_id}/add-product", response_model=MessageOut)
def add_product(
    build_id: int,
    payload: BuildAddProductIn,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).add_product(ctx, build_id, payload.product_id, payload.quantity)
    return {"message": "Product added to build successfully"}


@router.delete("/{build_id}/product/{product_id}", response_model=MessageOut)
def remove_product(
    build_id: int,
    product_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).remove_product(ctx, build_id, product_id)
    return {"message": "Product removed from build successfully"}


@router.delete("/{build_id}", response_model=MessageOut)
def delete_build(
    build_id: int,
    ctx: CustomerContext = Depends(get_customer),
    db: Session = Depends(get_db),
):
    get_service(db).delete_build(ctx, build_id)
    return {"message": "Build deleted successfully"}
