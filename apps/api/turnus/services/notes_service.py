# apps/api/turnus/services/notes_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from turnus.core.exceptions import NotFoundError, ValidationError
from turnus.core.permissions import Action, Caller, authorize, authorize_team
from turnus.db.models_notes import Note, NoteStatus, NoteType
from turnus.db.models_notifications import NotificationType
from turnus.models.models import User
from turnus.services.notifications_service import notify
from turnus.services.shift_time import parse_date


def list_notes(
    db: Session,
    team_id: int,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    note_type: Optional[NoteType] = None,
):
    q = db.query(Note).filter(Note.team_id == team_id)
    if date_from and date_to:
        # aralıkla kesişen notlar
        q = q.filter(Note.date_from <= parse_date(date_to), Note.date_to >= parse_date(date_from))
    if note_type:
        q = q.filter(Note.type == note_type)
    return q.order_by(Note.created_at.desc(), Note.id.desc()).all()


def get_note(db: Session, note_id: int) -> Note:
    n = db.get(Note, note_id)
    if not n:
        raise NotFoundError("Note not found")
    return n


def create_note(
    db: Session,
    caller: Caller,
    *,
    type: NoteType,
    body: str,
    date_from: str,
    date_to: str,
    title: Optional[str] = None,
    team_id: Optional[int] = None,
    status: Optional[NoteStatus] = None,
) -> Note:
    authorize(caller, Action.CREATE_NOTE)
    final_team_id = team_id or caller.team_id
    if not final_team_id or not type or not (body or "").strip() or not date_from or not date_to:
        raise ValidationError("Missing required fields")
    d_from, d_to = parse_date(date_from), parse_date(date_to)
    if d_to < d_from:
        raise ValidationError("date_to must not be before date_from")
    author = db.get(User, caller.user_id)
    if not author or author.team_id != final_team_id:
        raise NotFoundError("User not found")

    note = Note(
        team_id=final_team_id,
        created_by_user_id=author.id,
        type=NoteType(type),
        status=NoteStatus(status) if status else NoteStatus.PENDING,
        title=(title or "").strip() or None,
        body=body.strip(),
        date_from=d_from,
        date_to=d_to,
        visibility="ALL",
    )
    db.add(note)
    db.commit()

    notify(
        db,
        team_id=final_team_id,
        user_id=author.id,
        type=NotificationType.NOTE_CREATED,
        title="Note created",
        message=f"New note created: {note.title or note.type.value}",
    )
    return note


def set_note_status(db: Session, caller: Caller, note_id: int, status: NoteStatus | str) -> Note:
    authorize(caller, Action.APPROVE_NOTES)
    try:
        status = NoteStatus(status)
    except ValueError:
        raise ValidationError("Invalid status")
    note = get_note(db, note_id)
    authorize_team(caller, note.team_id)
    note.status = status
    db.commit()

    verdict = "approved" if status == NoteStatus.APPROVED else ("rejected" if status == NoteStatus.REJECTED else "pending")
    notify(
        db,
        team_id=note.team_id,
        user_id=note.created_by_user_id,
        type=NotificationType.NOTE_STATUS_CHANGED,
        title=f"Note {verdict}",
        message=f'Your note "{note.title or note.type.value}" is {verdict}',
    )
    return note
