# apps/api/turnus/services/swap_requests_service.py
"""
Swap request lifecycle: PENDING -> APPROVED | REJECTED, APPROVED -> EXECUTED.

Each transition is a conditional UPDATE on the expected current status, so
of two concurrent decisions on the same request only one can win; the other
gets a ConflictError. Executing is the only step that touches the shift.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turnus.core.dates import utcnow
from turnus.core.exceptions import ConflictError, NotFoundError, PermissionDenied, ValidationError
from turnus.core.permissions import Action, Caller, authorize, authorize_team
from turnus.db.models_notifications import NotificationType
from turnus.db.models_shifts import Shift
from turnus.db.models_swap_requests import SwapRequest, SwapStatus
from turnus.models.models import User
from turnus.services.notifications_service import notify


def list_swap_requests(db: Session, team_id: int, status: Optional[SwapStatus] = None):
    q = db.query(SwapRequest).filter(SwapRequest.team_id == team_id)
    if status:
        q = q.filter(SwapRequest.status == status)
    return q.order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc()).all()


def get_swap_request(db: Session, request_id: int) -> SwapRequest:
    sr = db.get(SwapRequest, request_id)
    if not sr:
        raise NotFoundError("Swap request not found")
    return sr


def create_swap_request(
    db: Session,
    caller: Caller,
    *,
    shift_id: int,
    to_user_id: int,
    team_id: Optional[int] = None,
    requested_by_user_id: Optional[int] = None,
    message: Optional[str] = None,
) -> SwapRequest:
    authorize(caller, Action.REQUEST_SWAP)
    # istek sahibi her zaman kimliği doğrulanmış kullanıcıdır
    if requested_by_user_id and requested_by_user_id != caller.user_id:
        raise PermissionDenied("Swap requests can only be made on your own behalf")
    final_team_id = team_id or caller.team_id
    if final_team_id != caller.team_id:
        raise PermissionDenied("Swap requests can only be made within your own team")
    if not final_team_id or not shift_id or not to_user_id:
        raise ValidationError("Missing required fields")

    shift = db.get(Shift, shift_id)
    if not shift or shift.team_id != final_team_id:
        raise NotFoundError("Shift not found")
    to_user = db.get(User, to_user_id)
    if not to_user or to_user.team_id != final_team_id:
        raise NotFoundError("User not found")
    if to_user.id == shift.user_id:
        raise ValidationError("Shift already belongs to this user")

    requester = db.get(User, caller.user_id)
    sr = SwapRequest(
        team_id=final_team_id,
        requested_by_user_id=caller.user_id,
        from_user_id=shift.user_id,
        to_user_id=to_user.id,
        shift_id=shift.id,
        status=SwapStatus.PENDING,
        message=message or None,
    )
    db.add(sr)
    db.commit()

    notify(
        db,
        team_id=final_team_id,
        type=NotificationType.SWAP_REQUESTED,
        title="New swap request",
        message=f"{requester.name if requester else 'Someone'} has requested a shift swap",
    )
    return sr


def _transition(db: Session, sr: SwapRequest, expected: SwapStatus, new: SwapStatus) -> bool:
    n = (
        db.query(SwapRequest)
        .filter(SwapRequest.id == sr.id, SwapRequest.status == expected)
        .update({SwapRequest.status: new, SwapRequest.decided_at: utcnow()}, synchronize_session=False)
    )
    return n == 1


def approve_swap_request(db: Session, caller: Caller, request_id: int) -> SwapRequest:
    authorize(caller, Action.APPROVE_SWAPS)
    sr = get_swap_request(db, request_id)
    authorize_team(caller, sr.team_id)
    if sr.status != SwapStatus.PENDING or not _transition(db, sr, SwapStatus.PENDING, SwapStatus.APPROVED):
        db.rollback()
        raise ConflictError("Swap request is not pending")
    db.commit()
    db.refresh(sr)

    notify(
        db,
        team_id=sr.team_id,
        user_id=sr.requested_by_user_id,
        type=NotificationType.SWAP_APPROVED,
        title="Swap request approved",
        message="Your shift swap request has been approved",
    )
    return sr


def reject_swap_request(db: Session, caller: Caller, request_id: int) -> SwapRequest:
    authorize(caller, Action.APPROVE_SWAPS)
    sr = get_swap_request(db, request_id)
    authorize_team(caller, sr.team_id)
    if sr.status != SwapStatus.PENDING or not _transition(db, sr, SwapStatus.PENDING, SwapStatus.REJECTED):
        db.rollback()
        raise ConflictError("Swap request is not pending")
    db.commit()
    db.refresh(sr)

    notify(
        db,
        team_id=sr.team_id,
        user_id=sr.requested_by_user_id,
        type=NotificationType.SWAP_REJECTED,
        title="Swap request rejected",
        message="Your shift swap request has been rejected",
    )
    return sr


def execute_swap_request(db: Session, caller: Caller, request_id: int) -> SwapRequest:
    authorize(caller, Action.APPROVE_SWAPS)
    sr = get_swap_request(db, request_id)
    authorize_team(caller, sr.team_id)
    if sr.status != SwapStatus.APPROVED:
        raise ConflictError("Swap request must be approved before execution")

    # durum geçişi ve sahiplik değişimi aynı transaction'da
    if not _transition(db, sr, SwapStatus.APPROVED, SwapStatus.EXECUTED):
        db.rollback()
        raise ConflictError("Swap request must be approved before execution")
    try:
        moved = (
            db.query(Shift)
            .filter(Shift.id == sr.shift_id)
            .update({Shift.user_id: sr.to_user_id}, synchronize_session=False)
        )
        if moved != 1:
            db.rollback()
            raise NotFoundError("Shift not found")
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Target user already has a shift on that date")
    db.refresh(sr)
    db.refresh(sr.shift)

    from_user = db.get(User, sr.from_user_id)
    to_user = db.get(User, sr.to_user_id)
    notify(
        db,
        team_id=sr.team_id,
        user_id=sr.from_user_id,
        type=NotificationType.SWAP_EXECUTED,
        title="Shift swap executed",
        message=f"Shift swap executed: {to_user.name} has taken over the shift",
    )
    notify(
        db,
        team_id=sr.team_id,
        user_id=sr.to_user_id,
        type=NotificationType.SWAP_EXECUTED,
        title="Shift swap executed",
        message=f"You have taken over the shift from {from_user.name}",
    )
    return sr
