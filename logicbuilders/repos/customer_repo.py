# logicbuilders/repos/customer_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from logicbuilders.data.models.customer import CustomerModel
from logicbuilders.data.models.admin_user import AdminUserModel


class CustomerRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: int) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.user_id == user_id)
        ).scalar_one_or_none()

    def create(self, customer: CustomerModel) -> CustomerModel:
        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)
        return customer

    def get_admin(self, admin_id: int) -> AdminUserModel | None:
        return self.db.get(AdminUserModel, admin_id)
