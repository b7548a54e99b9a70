# apps/api/turnus/services/shift_types_service.py
from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turnus.core.exceptions import ConflictError, NotFoundError, ValidationError
from turnus.db.models_shifts import Shift, ShiftType
from turnus.services.shift_time import parse_time

# Varsayılan vardiya tipleri (code, label, color, start, end, crosses_midnight)
DEFAULT_SHIFT_TYPES = [
    ("Fri", "Fri", "#90EE90", "00:00", "00:00", False),
    ("Dag", "Dag 08-16.00", "#9ACD32", "08:00", "16:00", False),
    ("Dag2", "Dag 08.00-17.10", "#9ACD32", "08:00", "17:10", False),
    ("N1", "N1 22.45-08.15", "#CD853F", "22:45", "08:15", True),
    ("N2", "N2 20.00-08.15", "#CD853F", "20:00", "08:15", True),
    ("K1", "K1 15.00-23.00", "#191970", "15:00", "23:00", False),
    ("D2", "D2 08.00-20.15", "#808080", "08:00", "20:15", False),
]

_REQUIRED = ("code", "label", "color", "default_start_time", "default_end_time")


def list_shift_types(db: Session):
    return db.query(ShiftType).order_by(ShiftType.code.asc()).all()


def get_shift_type(db: Session, shift_type_id: int) -> ShiftType:
    st = db.get(ShiftType, shift_type_id)
    if not st:
        raise NotFoundError("Shift type not found")
    return st


def _clean(payload: Dict) -> Dict:
    missing = [k for k in _REQUIRED if not (payload.get(k) or "").strip()]
    if missing:
        raise ValidationError("Missing required fields: " + ", ".join(missing))
    parse_time(payload["default_start_time"])
    parse_time(payload["default_end_time"])
    return {
        "code": payload["code"].strip(),
        "label": payload["label"].strip(),
        "color": payload["color"].strip(),
        "default_start_time": payload["default_start_time"],
        "default_end_time": payload["default_end_time"],
        "crosses_midnight": bool(payload.get("crosses_midnight") or False),
    }


def create_shift_type(db: Session, payload: Dict) -> ShiftType:
    st = ShiftType(**_clean(payload))
    db.add(st)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Shift type code already exists")
    return st


def update_shift_type(db: Session, shift_type_id: int, payload: Dict) -> ShiftType:
    st = get_shift_type(db, shift_type_id)
    for k, v in _clean(payload).items():
        setattr(st, k, v)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Shift type code already exists")
    return st


def delete_shift_type(db: Session, shift_type_id: int) -> None:
    st = get_shift_type(db, shift_type_id)
    # güvenli: vardiyada kullanılıyorsa silme
    used = db.query(Shift.id).filter(Shift.shift_type_id == shift_type_id).first()
    if used:
        raise ConflictError("Shift type in use by shifts")
    db.delete(st)
    db.commit()


def seed_default_shift_types(db: Session) -> int:
    """Create the default registry entries that are missing; existing codes are left alone."""
    created = 0
    for code, label, color, start, end, crosses in DEFAULT_SHIFT_TYPES:
        exists = db.query(ShiftType).filter(ShiftType.code == code).first()
        if exists:
            continue
        db.add(ShiftType(
            code=code,
            label=label,
            color=color,
            default_start_time=start,
            default_end_time=end,
            crosses_midnight=crosses,
        ))
        created += 1
    db.commit()
    return created


def find_by_code(db: Session, code: str) -> Optional[ShiftType]:
    return db.query(ShiftType).filter(ShiftType.code == code).first()
