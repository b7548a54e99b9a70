# apps/api/turnus/services/bulk_shifts_service.py
"""
Bulk create / update / delete of shifts.

Batch-level problems (caller, action, item count, team) reject the whole
request before any item is touched. After that every item stands alone: it
runs in its own session, and its failure is reported next to the other
items' results instead of aborting them.

Items are processed in sub-batches of ``BULK_BATCH_SIZE``. Sub-batches run in
submission order; the items of one sub-batch run concurrently. Results are
written back by input index so both output lists keep the input order.

Each item has a time budget of ``BULK_ITEM_TIMEOUT_SEC`` counted from the
start of its sub-batch. An item that runs past it is rolled back instead of
committed and reported as ``"Timed out"``, so the failures list always
matches what is stored. Store waits are bounded by the connection lock
timeout (``DB_LOCK_TIMEOUT_SEC``), and the next sub-batch only starts once
every item of the current one has finished.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from turnus.core.config import settings
from turnus.core.exceptions import DomainError, ValidationError
from turnus.core.permissions import Action, Caller, authorize, authorize_team
from turnus.db.models_notifications import NotificationType
from turnus.db.models_shifts import Shift, ShiftType
from turnus.models.models import User
from turnus.services.notifications_service import notify
from turnus.services.shift_time import parse_date, parse_time
from turnus.services.shifts_service import SHIFT_EXISTS, apply_times, commit_shift, find_shift

log = logging.getLogger(__name__)

ACTIONS = ("create", "update", "delete")
TIMED_OUT = "Timed out"


@dataclass
class BulkItem:
    shift_id: Optional[int] = None
    user_id: Optional[int] = None
    date: Optional[str] = None
    shift_type_id: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class BulkOutcome:
    ok: bool
    user_id: Optional[int]
    date: Optional[str]
    shift_id: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BulkResult:
    successes: List[Dict] = field(default_factory=list)
    failures: List[Dict] = field(default_factory=list)


@dataclass(frozen=True)
class _UserRef:
    id: int
    team_id: int


@dataclass(frozen=True)
class _TypeRef:
    id: int
    crosses_midnight: bool


@dataclass
class _Context:
    action: str
    team_id: int
    users: Dict[int, _UserRef]
    shift_types: Dict[int, _TypeRef]
    session_factory: Callable[[], Session]


class _ItemTimedOut(DomainError):
    kind = "timeout"


def _fail(user_id, day, error: str) -> BulkOutcome:
    return BulkOutcome(ok=False, user_id=user_id, date=day, error=error)


def _ok(user_id, day, shift_id) -> BulkOutcome:
    return BulkOutcome(ok=True, user_id=user_id, date=day, shift_id=shift_id)


def process_bulk(
    db: Session,
    session_factory: Callable[[], Session],
    caller: Optional[Caller],
    action: str,
    items: Sequence[BulkItem],
    team_id: Optional[int] = None,
) -> BulkResult:
    authorize(caller, Action.EDIT_SHIFTS)

    effective_team = team_id or caller.team_id
    if not effective_team:
        raise ValidationError("team_id is required")
    authorize_team(caller, effective_team)
    if action not in ACTIONS:
        raise ValidationError("Invalid action")
    if not items:
        raise ValidationError("items is required")
    if len(items) > settings.BULK_MAX_ITEMS:
        raise ValidationError(f"Too many items (max {settings.BULK_MAX_ITEMS})")

    # Tekil kullanıcı ve vardiya tiplerini tek seferde çek
    user_ids = {i.user_id for i in items if i.user_id}
    type_ids = {i.shift_type_id for i in items if i.shift_type_id}
    users = {
        u.id: _UserRef(u.id, u.team_id)
        for u in (db.query(User).filter(User.id.in_(user_ids)).all() if user_ids else [])
    }
    shift_types = {
        st.id: _TypeRef(st.id, bool(st.crosses_midnight))
        for st in (db.query(ShiftType).filter(ShiftType.id.in_(type_ids)).all() if type_ids else [])
    }
    ctx = _Context(action, effective_team, users, shift_types, session_factory)

    outcomes: List[Optional[BulkOutcome]] = [None] * len(items)
    batch_size = max(1, settings.BULK_BATCH_SIZE)
    # Her sub-batch tamamen bitmeden sonraki başlamaz; süresi dolan item
    # commit etmeden rollback yapar, rapor veritabanıyla tutarlı kalır.
    with ThreadPoolExecutor(max_workers=batch_size, thread_name_prefix="bulk-shift") as pool:
        for offset in range(0, len(items), batch_size):
            chunk = items[offset:offset + batch_size]
            deadline = time.monotonic() + settings.BULK_ITEM_TIMEOUT_SEC
            futures = [(offset + i, pool.submit(_process_item, ctx, item, deadline)) for i, item in enumerate(chunk)]
            for idx, fut in futures:
                outcomes[idx] = fut.result()

    result = BulkResult()
    for o in outcomes:
        if o.ok:
            result.successes.append({"user_id": o.user_id, "date": o.date, "shift_id": o.shift_id})
        else:
            result.failures.append({"user_id": o.user_id, "date": o.date, "error": o.error})
    log.info(
        "[bulk] action=%s team=%s items=%d ok=%d failed=%d",
        action, effective_team, len(items), len(result.successes), len(result.failures),
    )
    return result


def _process_item(ctx: _Context, item: BulkItem, deadline: float) -> BulkOutcome:
    with ctx.session_factory() as db:
        try:
            return _apply_item(db, ctx, item, deadline)
        except DomainError as e:
            db.rollback()
            return _fail(item.user_id, item.date, e.detail)
        except Exception:
            db.rollback()
            log.exception("[bulk] unexpected failure for user=%s date=%s", item.user_id, item.date)
            return _fail(item.user_id, item.date, "Internal error")


def _commit(db: Session, deadline: float) -> None:
    """Commit the item unless its time budget is spent; a late item is rolled back, never half-reported."""
    if time.monotonic() >= deadline:
        db.rollback()
        log.warning("[bulk] item over %ss budget, rolled back", settings.BULK_ITEM_TIMEOUT_SEC)
        raise _ItemTimedOut(TIMED_OUT)
    commit_shift(db)


def _apply_item(db: Session, ctx: _Context, item: BulkItem, deadline: float) -> BulkOutcome:
    action = ctx.action
    user_id, day = item.user_id, item.date
    existing: Optional[Shift] = None

    # 1) hedef vardiya
    if item.shift_id:
        s = db.get(Shift, item.shift_id)
        if not s or s.team_id != ctx.team_id:
            return _fail(user_id, day, "Shift not found")
        existing = s
        user_id, day = s.user_id, s.date.isoformat()

    if action == "create" and (not user_id or not day):
        return _fail(user_id, day, "user_id and date are required")
    if not user_id or not day:
        return _fail(user_id, day, "Shift is required")

    # 2) format
    try:
        d = parse_date(day)
    except ValidationError as e:
        return _fail(user_id, day, e.detail)
    if action != "delete":
        if not item.shift_type_id or not item.start_time or not item.end_time:
            return _fail(user_id, day, "shift_type_id, start_time, and end_time are required")
        try:
            parse_time(item.start_time)
            parse_time(item.end_time)
        except ValidationError as e:
            return _fail(user_id, day, e.detail)

    # 3) kullanıcı
    user = ctx.users.get(user_id)
    if user is None:
        row = db.get(User, user_id)
        user = _UserRef(row.id, row.team_id) if row else None
    if user is None:
        return _fail(user_id, day, "User not found")
    if user.team_id != ctx.team_id:
        return _fail(user_id, day, "User must belong to team")

    # 4) vardiya tipi
    shift_type: Optional[_TypeRef] = None
    if action != "delete":
        shift_type = ctx.shift_types.get(item.shift_type_id)
        if shift_type is None:
            return _fail(user_id, day, "Shift type not found")

    if existing is None:
        existing = find_shift(db, ctx.team_id, user_id, d)

    # 5) uygula
    if action == "create":
        if existing:
            return _fail(user_id, day, SHIFT_EXISTS)
        shift = Shift(team_id=ctx.team_id, user_id=user_id, date=d, comment=item.comment or None)
        apply_times(shift, d, item.start_time, item.end_time, shift_type.id, shift_type.crosses_midnight)
        db.add(shift)
        _commit(db, deadline)
        notify(db, team_id=ctx.team_id, user_id=user_id, type=NotificationType.SHIFT_CREATED,
               title="Shift created", message=f"New shift created for {day}")
        return _ok(user_id, day, shift.id)

    if existing is None:
        return _fail(user_id, day, "Shift not found")

    if action == "update":
        apply_times(existing, d, item.start_time, item.end_time, shift_type.id, shift_type.crosses_midnight)
        existing.comment = item.comment or None
        _commit(db, deadline)
        notify(db, team_id=ctx.team_id, user_id=user_id, type=NotificationType.SHIFT_UPDATED,
               title="Shift updated", message=f"Shift updated for {day}")
        return _ok(user_id, day, existing.id)

    shift_id = existing.id
    db.delete(existing)
    _commit(db, deadline)
    notify(db, team_id=ctx.team_id, user_id=user_id, type=NotificationType.SHIFT_DELETED,
           title="Shift deleted", message=f"Shift deleted for {day}")
    return _ok(user_id, day, shift_id)
