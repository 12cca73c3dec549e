# logicbuilders/repos/points_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from logicbuilders.data.models.points import CustomerPointsModel, PointsTransactionModel
from logicbuilders.data.models.voucher import VoucherModel


class PointsRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create_account(self, customer_id: int, for_update: bool = False) -> CustomerPointsModel:
        stmt = select(CustomerPointsModel).where(CustomerPointsModel.customer_id == customer_id)
        if for_update:
            stmt = stmt.with_for_update()
        account = self.db.execute(stmt).scalar_one_or_none()
        if account is None:
            account = CustomerPointsModel(customer_id=customer_id, balance=0, total_earned=0, total_redeemed=0)
            self.db.add(account)
            self.db.flush()
        return account

    def add_entry(self, entry: PointsTransactionModel) -> PointsTransactionModel:
        self.db.add(entry)
        self.db.flush()
        return entry

    def add_voucher(self, voucher: VoucherModel) -> VoucherModel:
        self.db.add(voucher)
        self.db.flush()
        return voucher

    def voucher_code_exists(self, code: str) -> bool:
        return self.db.execute(select(VoucherModel.id).where(VoucherModel.code == code)).first() is not None

    def list_vouchers(self, customer_id: int) -> List[VoucherModel]:
        return list(
            self.db.execute(
                select(VoucherModel)
                .where(VoucherModel.customer_id == customer_id)
                .order_by(VoucherModel.created_at.desc(), VoucherModel.id.desc())
            ).scalars()
        )
