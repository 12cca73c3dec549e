# logicbuilders/repos/admin_log_repo.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from logicbuilders.data.models.admin_log import AdminLogModel


class AdminLogRepo:
    def __init__(self, db: Session):
        self.db = db

    def add(self, entry: AdminLogModel) -> AdminLogModel:
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_logs(
        self,
        admin_id: Optional[int] = None,
        action: Optional[str] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[AdminLogModel]:
        stmt = select(AdminLogModel)
        if admin_id is not None:
            stmt = stmt.where(AdminLogModel.admin_id == admin_id)
        if action:
            stmt = stmt.where(AdminLogModel.action.ilike(f"%{action}%"))
        if target_type:
            stmt = stmt.where(AdminLogModel.target_type == target_type)
        if target_id is not None:
            stmt = stmt.where(AdminLogModel.target_id == str(target_id))

        stmt = stmt.order_by(AdminLogModel.created_at.desc(), AdminLogModel.id.desc()).limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars())
