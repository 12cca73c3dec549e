# logicbuilders/services/address_service.py
from typing import List

from sqlalchemy.orm import Session

from logicbuilders.data.models.shipping_address import ShippingAddressModel
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.errors import ValidationFailed
from logicbuilders.domain.schemas import AddressIn
from logicbuilders.repos.address_repo import AddressRepo


class AddressService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepo(db)

    def list_addresses(self, ctx: CustomerContext) -> List[ShippingAddressModel]:
        return self.repo.list_for_customer(ctx.customer_id)

    def add_address(self, ctx: CustomerContext, payload: AddressIn) -> ShippingAddressModel:
        if not all((payload.address, payload.city, payload.zip_code, payload.country)):
            raise ValidationFailed("All address fields are required")

        address = self.repo.add(
            ShippingAddressModel(
                customer_id=ctx.customer_id,
                address=payload.address,
                city=payload.city,
                zip_code=payload.zip_code,
                country=payload.country,
            )
        )
        self.db.commit()
        return address
