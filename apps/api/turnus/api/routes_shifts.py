# apps/api/turnus/api/routes_shifts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, sessionmaker

from turnus.core.permissions import Caller
from turnus.deps import get_db, get_caller, get_session_factory, team_scope
from turnus.schemas.shifts import (
    BulkShiftIn, BulkShiftOut, ShiftCreateIn, ShiftOut, ShiftUpdateIn, to_shift_out,
)
from turnus.services import shifts_service
from turnus.services.bulk_shifts_service import BulkItem, process_bulk

router = APIRouter(prefix="/shifts", tags=["shifts"])

@router.get("", response_model=List[ShiftOut])
def list_shifts(
    team_id: Optional[int] = Query(None, description="default: caller's team"),
    date_from: Optional[str] = Query(None, description="YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, description="YYYY-MM-DD"),
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    rows = shifts_service.list_shifts(db, team_scope(caller, team_id), date_from, date_to, user_id)
    return [to_shift_out(s) for s in rows]

@router.get("/{shift_id}", response_model=ShiftOut)
def get_shift(shift_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    s = shifts_service.get_shift(db, shift_id)
    team_scope(caller, s.team_id)
    return to_shift_out(s)

@router.post("", response_model=ShiftOut)
def create_shift(body: ShiftCreateIn, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    s = shifts_service.create_shift(db, caller, **body.model_dump())
    return to_shift_out(s)

@router.put("/{shift_id}", response_model=ShiftOut)
def update_shift(shift_id: int, body: ShiftUpdateIn, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    s = shifts_service.update_shift(db, caller, shift_id, **body.model_dump())
    return to_shift_out(s)

@router.delete("/{shift_id}")
def delete_shift(shift_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    shifts_service.delete_shift(db, caller, shift_id)
    return {"ok": True}

# --------- BULK ---------
@router.post("/bulk", response_model=BulkShiftOut)
def bulk_shifts(
    body: BulkShiftIn,
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    caller: Caller = Depends(get_caller),
):
    # kısmi başarı da 200 döner; çağıran failures listesine bakar
    items = [BulkItem(**i.model_dump()) for i in body.items]
    result = process_bulk(db, session_factory, caller, body.action, items, team_id=body.team_id)
    return {"successes": result.successes, "failures": result.failures}
