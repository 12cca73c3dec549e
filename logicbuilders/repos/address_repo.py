# logicbuilders/repos/address_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from logicbuilders.data.models.shipping_address import ShippingAddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_exact(self, customer_id: int, address: str, city: str, zip_code: str, country: str) -> ShippingAddressModel | None:
        return self.db.execute(
            select(ShippingAddressModel).where(
                ShippingAddressModel.customer_id == customer_id,
                ShippingAddressModel.address == address,
                ShippingAddressModel.city == city,
                ShippingAddressModel.zip_code == zip_code,
                ShippingAddressModel.country == country,
            )
        ).scalars().first()

    def get_owned(self, address_id: int, customer_id: int) -> ShippingAddressModel | None:
        return self.db.execute(
            select(ShippingAddressModel).where(
                ShippingAddressModel.id == address_id,
                ShippingAddressModel.customer_id == customer_id,
            )
        ).scalar_one_or_none()

    def list_for_customer(self, customer_id: int) -> List[ShippingAddressModel]:
        return list(
            self.db.execute(
                select(ShippingAddressModel)
                .where(ShippingAddressModel.customer_id == customer_id)
                .order_by(ShippingAddressModel.created_at.desc(), ShippingAddressModel.id.desc())
            ).scalars()
        )

    def add(self, address: ShippingAddressModel) -> ShippingAddressModel:
        self.db.add(address)
        self.db.flush()
        return address
