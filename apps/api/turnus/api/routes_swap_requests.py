# apps/api/turnus/api/routes_swap_requests.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from turnus.core.permissions import Caller
from turnus.db.models_swap_requests import SwapStatus
from turnus.deps import get_db, get_caller, team_scope
from turnus.schemas.swaps import SwapRequestIn, SwapRequestOut
from turnus.services import swap_requests_service as svc

router = APIRouter(prefix="/swap-requests", tags=["swap-requests"])

def _out(sr) -> SwapRequestOut:
    return SwapRequestOut.model_validate(sr)

@router.get("", response_model=List[SwapRequestOut])
def list_swap_requests(
    team_id: Optional[int] = None,
    status: Optional[SwapStatus] = None,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return [_out(sr) for sr in svc.list_swap_requests(db, team_scope(caller, team_id), status)]

@router.get("/{request_id}", response_model=SwapRequestOut)
def get_swap_request(request_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    sr = svc.get_swap_request(db, request_id)
    team_scope(caller, sr.team_id)
    return _out(sr)

@router.post("", response_model=SwapRequestOut)
def create_swap_request(body: SwapRequestIn, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return _out(svc.create_swap_request(db, caller, **body.model_dump()))

@router.post("/{request_id}/approve", response_model=SwapRequestOut)
def approve(request_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return _out(svc.approve_swap_request(db, caller, request_id))

@router.post("/{request_id}/reject", response_model=SwapRequestOut)
def reject(request_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return _out(svc.reject_swap_request(db, caller, request_id))

@router.post("/{request_id}/execute", response_model=SwapRequestOut)
def execute(request_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return _out(svc.execute_swap_request(db, caller, request_id))
