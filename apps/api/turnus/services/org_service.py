# apps/api/turnus/services/org_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turnus.core.exceptions import ConflictError, NotFoundError, ValidationError
from turnus.core.permissions import Role
from turnus.db.models_notifications import NotificationSettings
from turnus.models.models import Team, User


# ---------------- Teams ----------------

def list_teams(db: Session):
    return db.query(Team).order_by(Team.name.asc()).all()


def get_team(db: Session, team_id: int) -> Team:
    t = db.get(Team, team_id)
    if not t:
        raise NotFoundError("Team not found")
    return t


def create_team(db: Session, name: str) -> Team:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    team = Team(name=name)
    # bildirim ayarları takımla birlikte oluşur
    team.notification_settings = NotificationSettings(email_enabled=True, sms_endpoint=None)
    db.add(team)
    db.commit()
    return team


def delete_team(db: Session, team_id: int) -> None:
    """Delete a team and, explicitly, everything it owns."""
    team = get_team(db, team_id)
    db.delete(team)
    db.commit()


# ---------------- Users ----------------

def list_users(db: Session, team_id: Optional[int] = None):
    q = db.query(User)
    if team_id:
        q = q.filter(User.team_id == team_id)
    return q.order_by(User.name.asc()).all()


def get_user(db: Session, user_id: int) -> User:
    u = db.get(User, user_id)
    if not u:
        raise NotFoundError("User not found")
    return u


def _role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def create_user(db: Session, name: str, email: str, team_id: int, role: str = Role.EMPLOYEE) -> User:
    get_team(db, team_id)
    u = User(name=name.strip(), email=email.strip().lower(), team_id=team_id, role=_role(role))
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    return u


def update_user_role(db: Session, user_id: int, role: str) -> User:
    u = get_user(db, user_id)
    u.role = _role(role)
    db.commit()
    return u
