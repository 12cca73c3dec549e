# logicbuilders/services/admin_service.py
from sqlalchemy.orm import Session

from logicbuilders.domain.context import AdminContext
from logicbuilders.domain.enums import Clearance
from logicbuilders.domain.errors import NotFound
from logicbuilders.repos.admin_log_repo import AdminLogRepo
from logicbuilders.repos.customer_repo import CustomerRepo
from logicbuilders.services.audit_service import AuditService
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepo(db)
        self.audit = AuditService(db)
        self.logs = AdminLogRepo(db)

    def set_clearance(self, admin: AdminContext, admin_id: int, clearance: Clearance):
        target = self.repo.get_admin(admin_id)
        if not target:
            raise NotFound("Admin not found")

        old = target.clearance_level
        target.clearance_level = clearance.value
        self.audit.record(admin, "UPDATE_CLEARANCE", "ADMIN", admin_id, old_clearance=old, new_clearance=clearance.value)
        self.db.commit()

        logger.info(f"Admin {admin.admin_id} changed clearance of admin {admin_id}: {old} -> {clearance.value}")
        return target

    def list_logs(self, **filters):
        return self.logs.list_logs(**filters)
