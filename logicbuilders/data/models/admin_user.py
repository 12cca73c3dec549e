from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from logicbuilders.data.database import Base


class AdminUserModel(Base):
    __tablename__ = "admin_users"

    admin_id = Column(Integer, primary_key=True)
    employee_id = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    clearance_level = Column(String(30), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
