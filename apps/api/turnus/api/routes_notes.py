# apps/api/turnus/api/routes_notes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from turnus.core.permissions import Caller
from turnus.db.models_notes import NoteType
from turnus.deps import get_db, get_caller, team_scope
from turnus.schemas.notes import AgendaOut, NoteIn, NoteOut, NoteStatusIn
from turnus.schemas.shifts import to_shift_out
from turnus.services import notes_service
from turnus.services.agenda_service import build_agenda

router = APIRouter(tags=["notes"])

@router.get("/notes", response_model=List[NoteOut])
def list_notes(
    team_id: Optional[int] = None,
    date_from: Optional[str] = Query(None, description="YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, description="YYYY-MM-DD"),
    type: Optional[NoteType] = None,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    rows = notes_service.list_notes(db, team_scope(caller, team_id), date_from, date_to, type)
    return [NoteOut.model_validate(n) for n in rows]

@router.post("/notes", response_model=NoteOut)
def create_note(body: NoteIn, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return NoteOut.model_validate(notes_service.create_note(db, caller, **body.model_dump()))

@router.post("/notes/{note_id}/approve", response_model=NoteOut)
def set_note_status(note_id: int, body: NoteStatusIn, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    # body.status: APPROVED | REJECTED
    return NoteOut.model_validate(notes_service.set_note_status(db, caller, note_id, body.status))

# --------- AGENDA ---------
@router.get("/agenda", response_model=AgendaOut)
def agenda(
    team_id: Optional[int] = None,
    date_from: Optional[str] = Query(None, description="YYYY-MM-DD (default: today)"),
    date_to: Optional[str] = Query(None, description="YYYY-MM-DD"),
    user_id: Optional[int] = None,
    type: Optional[NoteType] = None,
    week: Optional[str] = Query(None, description="YYYY-MM-DD, any day of the week"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    a = build_agenda(db, team_scope(caller, team_id), date_from, date_to, user_id, type, week=week)
    return AgendaOut(
        date_from=a["date_from"],
        date_to=a["date_to"],
        shifts=[to_shift_out(s) for s in a["shifts"]],
        notes=[NoteOut.model_validate(n) for n in a["notes"]],
    )
