from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON

from logicbuilders.data.database import Base


class NotificationModel(Base):
    __tablename__ = "notification"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    notification_text = Column(String, nullable=False)
    notification_type = Column(String(40), nullable=False)
    category = Column(String(40), nullable=False)
    link = Column(String, nullable=True)
    priority = Column(String(20), nullable=False, default="normal")
    data = Column(JSON, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
