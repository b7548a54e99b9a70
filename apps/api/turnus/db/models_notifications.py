# apps/api/turnus/db/models_notifications.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import enum

from turnus.core.dates import utcnow
from turnus.db.base import Base

class NotificationType(str, enum.Enum):
    SHIFT_CREATED = "SHIFT_CREATED"
    SHIFT_UPDATED = "SHIFT_UPDATED"
    SHIFT_DELETED = "SHIFT_DELETED"
    SWAP_REQUESTED = "SWAP_REQUESTED"
    SWAP_APPROVED = "SWAP_APPROVED"
    SWAP_REJECTED = "SWAP_REJECTED"
    SWAP_EXECUTED = "SWAP_EXECUTED"
    NOTE_CREATED = "NOTE_CREATED"
    NOTE_STATUS_CHANGED = "NOTE_STATUS_CHANGED"


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)  # None => tüm takım
    type = Column(String(32), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User")


class NotificationSettings(Base):
    __tablename__ = "notification_settings"
    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), unique=True, nullable=False)
    email_enabled = Column(Boolean, nullable=False, default=True)
    sms_endpoint = Column(String(500), nullable=True)
