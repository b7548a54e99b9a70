# apps/api/turnus/schemas/shifts.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from turnus.core.dates import shift_hours
from turnus.schemas.org import UserBrief

# --------- Shift types ----------
class ShiftTypeIn(BaseModel):
    code: str
    label: str
    color: str
    default_start_time: str  # "HH:MM"
    default_end_time: str    # "HH:MM"
    crosses_midnight: Optional[bool] = False

class ShiftTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    code: str
    label: str
    color: str
    default_start_time: str
    default_end_time: str
    crosses_midnight: bool

# --------- Shifts ----------
class ShiftCreateIn(BaseModel):
    date: str                # "YYYY-MM-DD"
    user_id: int
    shift_type_id: int
    start_time: str          # "HH:MM"
    end_time: str            # "HH:MM"
    comment: Optional[str] = None
    team_id: Optional[int] = None

class ShiftUpdateIn(BaseModel):
    shift_type_id: int
    start_time: str
    end_time: str
    date: Optional[str] = None
    user_id: Optional[int] = None
    comment: Optional[str] = None

class ShiftOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    team_id: int
    user_id: int
    date: date
    start_datetime: datetime
    end_datetime: datetime
    shift_type_id: int
    comment: Optional[str] = None
    hours: float
    shift_type: Optional[ShiftTypeOut] = None
    user: Optional[UserBrief] = None

def to_shift_out(s) -> ShiftOut:
    return ShiftOut(
        id=s.id,
        team_id=s.team_id,
        user_id=s.user_id,
        date=s.date,
        start_datetime=s.start_datetime,
        end_datetime=s.end_datetime,
        shift_type_id=s.shift_type_id,
        comment=s.comment,
        hours=shift_hours(s.start_datetime, s.end_datetime),
        shift_type=ShiftTypeOut.model_validate(s.shift_type) if s.shift_type else None,
        user=UserBrief.model_validate(s.user) if s.user else None,
    )

# --------- Bulk ----------
class BulkShiftItemIn(BaseModel):
    # her alan opsiyonel: eksikler item bazında hata olarak döner
    shift_id: Optional[int] = None
    user_id: Optional[int] = None
    date: Optional[str] = None
    shift_type_id: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    comment: Optional[str] = None

class BulkShiftIn(BaseModel):
    action: str              # create | update | delete
    team_id: Optional[int] = None
    items: List[BulkShiftItemIn] = []

class BulkSuccessOut(BaseModel):
    user_id: Optional[int] = None
    date: Optional[str] = None
    shift_id: Optional[int] = None

class BulkFailureOut(BaseModel):
    user_id: Optional[int] = None
    date: Optional[str] = None
    error: str

class BulkShiftOut(BaseModel):
    successes: List[BulkSuccessOut]
    failures: List[BulkFailureOut]
