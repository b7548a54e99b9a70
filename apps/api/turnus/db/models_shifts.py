# apps/api/turnus/db/models_shifts.py
from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from turnus.db.base import Base

class ShiftType(Base):
    __tablename__ = "shift_types"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(32), unique=True, nullable=False)
    label = Column(String(120), nullable=False)
    color = Column(String(16), nullable=False)
    default_start_time = Column(String(5), nullable=False)   # "HH:MM"
    default_end_time = Column(String(5), nullable=False)     # "HH:MM"
    crosses_midnight = Column(Boolean, nullable=False, default=False)


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)          # iş anahtarı (user_id ile)
    start_datetime = Column(DateTime, nullable=False)        # yerel saat (naive)
    end_datetime = Column(DateTime, nullable=False)
    shift_type_id = Column(Integer, ForeignKey("shift_types.id"), nullable=False)
    comment = Column(Text, nullable=True)

    shift_type = relationship("ShiftType")
    user = relationship("User")
    swap_requests = relationship("SwapRequest", back_populates="shift", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", "date", name="uq_shift_team_user_date"),
    )
