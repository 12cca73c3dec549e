from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON

from logicbuilders.data.database import Base


class AdminLogModel(Base):
    """Audit trail of back-office writes."""

    __tablename__ = "admin_logs"

    id = Column(Integer, primary_key=True)
    admin_id = Column(Integer, ForeignKey("admin_users.admin_id"), nullable=False, index=True)
    action = Column(String(100), nullable=False)
    # ORDER, PRODUCT, PROMOTION, ADMIN
    target_type = Column(String(50), nullable=True)
    target_id = Column(String(100), nullable=True)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
