# apps/api/turnus/api/routes_shift_types.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from turnus.core.permissions import Action
from turnus.deps import get_db, get_caller, RolesAllowed
from turnus.schemas.shifts import ShiftTypeIn, ShiftTypeOut
from turnus.services import shift_types_service as svc

router = APIRouter(prefix="/shift-types", tags=["shift-types"])

# --------- CRUD ----------
@router.get("", response_model=List[ShiftTypeOut], dependencies=[Depends(get_caller)])
def list_shift_types(db: Session = Depends(get_db)):
    return [ShiftTypeOut.model_validate(st) for st in svc.list_shift_types(db)]

@router.get("/{shift_type_id}", response_model=ShiftTypeOut, dependencies=[Depends(get_caller)])
def get_shift_type(shift_type_id: int, db: Session = Depends(get_db)):
    return ShiftTypeOut.model_validate(svc.get_shift_type(db, shift_type_id))

@router.post("", response_model=ShiftTypeOut, dependencies=[Depends(RolesAllowed(Action.MANAGE_SHIFT_TYPES))])
def create_shift_type(body: ShiftTypeIn, db: Session = Depends(get_db)):
    return ShiftTypeOut.model_validate(svc.create_shift_type(db, body.model_dump()))

@router.put("/{shift_type_id}", response_model=ShiftTypeOut, dependencies=[Depends(RolesAllowed(Action.MANAGE_SHIFT_TYPES))])
def update_shift_type(shift_type_id: int, body: ShiftTypeIn, db: Session = Depends(get_db)):
    return ShiftTypeOut.model_validate(svc.update_shift_type(db, shift_type_id, body.model_dump()))

@router.delete("/{shift_type_id}", dependencies=[Depends(RolesAllowed(Action.MANAGE_SHIFT_TYPES))])
def delete_shift_type(shift_type_id: int, db: Session = Depends(get_db)):
    svc.delete_shift_type(db, shift_type_id)
    return {"ok": True}

# --------- SEED ---------
@router.post("/seed-defaults", dependencies=[Depends(RolesAllowed(Action.MANAGE_SHIFT_TYPES))])
def seed_defaults(db: Session = Depends(get_db)):
    # Fri, Dag, Dag2, N1, N2, K1, D2 -> idempotent
    return {"ok": True, "created": svc.seed_default_shift_types(db)}
