# apps/api/turnus/db/models_notes.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
import enum

from turnus.core.dates import utcnow
from turnus.db.base import Base

class NoteType(str, enum.Enum):
    GENERAL = "GENERAL"
    ABSENCE = "ABSENCE"
    SICKNESS = "SICKNESS"


class NoteStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Note(Base):
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(NoteType), nullable=False)
    status = Column(Enum(NoteStatus), default=NoteStatus.PENDING, nullable=False)
    title = Column(String(200), nullable=True)
    body = Column(Text, nullable=False)
    date_from = Column(Date, nullable=False)
    date_to = Column(Date, nullable=False)
    visibility = Column(String(16), nullable=False, default="ALL")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    created_by = relationship("User")
