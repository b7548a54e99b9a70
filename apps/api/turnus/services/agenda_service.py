# apps/api/turnus/services/agenda_service.py
from __future__ import annotations

from datetime import timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from turnus.core.config import settings
from turnus.core.dates import today_local, week_bounds
from turnus.db.models_notes import NoteType
from turnus.services.notes_service import list_notes
from turnus.services.shift_time import parse_date
from turnus.services.shifts_service import list_shifts


def build_agenda(
    db: Session,
    team_id: int,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    user_id: Optional[int] = None,
    note_type: Optional[NoteType] = None,
    week: Optional[str] = None,
) -> Dict:
    """
    Upcoming shifts and notes of a team.

    ``week`` (any day of it) selects Monday..Sunday; otherwise the window is
    date_from..date_to, defaulting to today .. today + AGENDA_DEFAULT_DAYS.
    """
    if week:
        start, end = week_bounds(parse_date(week))
    else:
        start = parse_date(date_from) if date_from else today_local()
        end = parse_date(date_to) if date_to else start + timedelta(days=settings.AGENDA_DEFAULT_DAYS)
    shifts = list_shifts(db, team_id, start.isoformat(), end.isoformat(), user_id=user_id)
    notes = list_notes(db, team_id, start.isoformat(), end.isoformat(), note_type=note_type)
    return {"date_from": start, "date_to": end, "shifts": shifts, "notes": notes}
