# apps/api/turnus/services/shifts_service.py
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turnus.core.exceptions import ConflictError, NotFoundError, ValidationError
from turnus.core.permissions import Action, Caller, authorize, authorize_team
from turnus.db.models_notifications import NotificationType
from turnus.db.models_shifts import Shift, ShiftType
from turnus.models.models import User
from turnus.services.notifications_service import notify
from turnus.services.shift_time import parse_date, resolve_shift_times

SHIFT_EXISTS = "Shift already exists"


# ---------------- Queries ----------------

def get_shift(db: Session, shift_id: int) -> Shift:
    s = db.get(Shift, shift_id)
    if not s:
        raise NotFoundError("Shift not found")
    return s


def find_shift(db: Session, team_id: int, user_id: int, d: date) -> Optional[Shift]:
    return db.query(Shift).filter(
        Shift.team_id == team_id,
        Shift.user_id == user_id,
        Shift.date == d,
    ).first()


def list_shifts(
    db: Session,
    team_id: int,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    user_id: Optional[int] = None,
):
    q = db.query(Shift).filter(Shift.team_id == team_id)
    if date_from and date_to:
        q = q.filter(Shift.date >= parse_date(date_from), Shift.date <= parse_date(date_to))
    if user_id:
        q = q.filter(Shift.user_id == user_id)
    return q.order_by(Shift.date.asc(), Shift.start_datetime.asc()).all()


# ---------------- Helpers (bulk ile ortak) ----------------

def apply_times(shift: Shift, d: date, start_time: str, end_time: str, shift_type_id: int, crosses_midnight: bool) -> Shift:
    shift.start_datetime, shift.end_datetime = resolve_shift_times(d, start_time, end_time, crosses_midnight)
    shift.shift_type_id = shift_type_id
    return shift


def commit_shift(db: Session) -> None:
    """Commit a shift write; the (team, user, date) unique key turns a lost race into a conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(SHIFT_EXISTS)


def _get_user(db: Session, user_id: int) -> User:
    u = db.get(User, user_id)
    if not u:
        raise NotFoundError("User not found")
    return u


def _get_shift_type(db: Session, shift_type_id: int) -> ShiftType:
    st = db.get(ShiftType, shift_type_id)
    if not st:
        raise NotFoundError("Shift type not found")
    return st


# ---------------- Mutations ----------------

def create_shift(
    db: Session,
    caller: Caller,
    *,
    date: str,
    user_id: int,
    shift_type_id: int,
    start_time: str,
    end_time: str,
    comment: Optional[str] = None,
    team_id: Optional[int] = None,
) -> Shift:
    authorize(caller, Action.EDIT_SHIFTS)
    if not date or not user_id or not shift_type_id or not start_time or not end_time:
        raise ValidationError("Missing required fields")

    user = _get_user(db, user_id)
    final_team_id = team_id or user.team_id
    authorize_team(caller, final_team_id)
    if user.team_id != final_team_id:
        raise ValidationError("User must belong to team")
    shift_type = _get_shift_type(db, shift_type_id)

    d = parse_date(date)
    shift = Shift(team_id=final_team_id, user_id=user.id, date=d, comment=comment or None)
    apply_times(shift, d, start_time, end_time, shift_type.id, shift_type.crosses_midnight)
    db.add(shift)
    commit_shift(db)

    notify(
        db,
        team_id=final_team_id,
        user_id=user.id,
        type=NotificationType.SHIFT_CREATED,
        title="Shift created",
        message=f"New shift created for {user.name} on {d.isoformat()}",
    )
    return shift


def update_shift(
    db: Session,
    caller: Caller,
    shift_id: int,
    *,
    shift_type_id: int,
    start_time: str,
    end_time: str,
    date: Optional[str] = None,
    user_id: Optional[int] = None,
    comment: Optional[str] = None,
) -> Shift:
    authorize(caller, Action.EDIT_SHIFTS)
    shift = get_shift(db, shift_id)
    authorize_team(caller, shift.team_id)
    previous_owner = shift.user_id
    if not shift_type_id or not start_time or not end_time:
        raise ValidationError("Missing required fields")
    shift_type = _get_shift_type(db, shift_type_id)

    d = parse_date(date) if date else shift.date
    owner = shift.user
    if user_id and user_id != shift.user_id:
        owner = _get_user(db, user_id)
        if owner.team_id != shift.team_id:
            raise ValidationError("User must belong to team")

    apply_times(shift, d, start_time, end_time, shift_type.id, shift_type.crosses_midnight)
    shift.date = d
    shift.user = owner
    shift.comment = comment or None
    commit_shift(db)

    notify(
        db,
        team_id=shift.team_id,
        user_id=previous_owner,
        type=NotificationType.SHIFT_UPDATED,
        title="Shift updated",
        message=f"Shift updated for {owner.name} on {d.isoformat()}",
    )
    return shift


def delete_shift(db: Session, caller: Caller, shift_id: int) -> Shift:
    authorize(caller, Action.EDIT_SHIFTS)
    shift = get_shift(db, shift_id)
    authorize_team(caller, shift.team_id)
    owner = shift.user
    team_id, user_id, d = shift.team_id, shift.user_id, shift.date

    db.delete(shift)
    db.commit()

    notify(
        db,
        team_id=team_id,
        user_id=user_id,
        type=NotificationType.SHIFT_DELETED,
        title="Shift deleted",
        message=f"Shift deleted for {owner.name} on {d.isoformat()}",
    )
    return shift
