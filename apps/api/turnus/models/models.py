# apps/api/turnus/models/models.py
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from turnus.core.dates import utcnow
from turnus.core.permissions import Role
from turnus.db.base import Base

class Team(Base):
    __tablename__ = "teams"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Takım silinince bağlı her şey silinir (ORM seviyesinde açıkça)
    users = relationship("User", back_populates="team", cascade="all, delete-orphan")
    shifts = relationship("Shift", cascade="all, delete-orphan")
    notes = relationship("Note", cascade="all, delete-orphan")
    swap_requests = relationship("SwapRequest", cascade="all, delete-orphan")
    notifications = relationship("Notification", cascade="all, delete-orphan")
    notification_settings = relationship("NotificationSettings", uselist=False, cascade="all, delete-orphan")

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), default=Role.EMPLOYEE, nullable=False)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    team = relationship("Team", back_populates="users")

# Team ilişkileri string ile çözülür; mapper'lar kullanılmadan önce kayıtlı olmalı
import turnus.db.models_shifts  # noqa: E402,F401
import turnus.db.models_swap_requests  # noqa: E402,F401
import turnus.db.models_notes  # noqa: E402,F401
import turnus.db.models_notifications  # noqa: E402,F401
