# logicbuilders/services/audit_service.py
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from logicbuilders.data.models.admin_log import AdminLogModel
from logicbuilders.domain.context import AdminContext
from logicbuilders.repos.admin_log_repo import AdminLogRepo
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class AuditService:
    """
    Records back-office writes in admin_logs.
    Runs inside the caller's transaction, so an entry exists only if the write commits.
    """

    def __init__(self, db: Session):
        self.repo = AdminLogRepo(db)

    def record(self, admin: AdminContext, action: str, target_type: str, target_id=None, **details) -> AdminLogModel:
        entry = self.repo.add(
            AdminLogModel(
                admin_id=admin.admin_id,
                action=action,
                target_type=target_type,
                target_id=str(target_id) if target_id is not None else None,
                details=jsonable_encoder(details),
            )
        )
        logger.info(f"Admin {admin.admin_id} {action} {target_type} {target_id}")
        return entry
