# apps/api/turnus/schemas/notes.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from turnus.db.models_notes import NoteStatus, NoteType
from turnus.schemas.org import UserBrief
from turnus.schemas.shifts import ShiftOut

class NoteIn(BaseModel):
    type: NoteType
    body: str
    date_from: str
    date_to: str
    title: Optional[str] = None
    team_id: Optional[int] = None
    status: Optional[NoteStatus] = None

class NoteStatusIn(BaseModel):
    status: str

class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    team_id: int
    created_by_user_id: int
    type: NoteType
    status: NoteStatus
    title: Optional[str] = None
    body: str
    date_from: date
    date_to: date
    visibility: str
    created_at: datetime
    created_by: Optional[UserBrief] = None

class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    team_id: int
    user_id: Optional[int] = None
    type: str
    title: str
    message: str
    read: bool
    created_at: datetime

class AgendaOut(BaseModel):
    date_from: date
    date_to: date
    shifts: List[ShiftOut]
    notes: List[NoteOut]
