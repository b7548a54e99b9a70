# apps/api/turnus/api/routes_notifications.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from turnus.core.permissions import Action, Caller
from turnus.deps import get_db, get_caller, RolesAllowed, team_scope
from turnus.schemas.notes import NotificationOut
from turnus.schemas.org import NotificationSettingsIn, NotificationSettingsOut
from turnus.services import notifications_service as svc
from turnus.services.org_service import get_team

router = APIRouter(tags=["notifications"])

@router.get("/notifications", response_model=List[NotificationOut])
def list_notifications(
    user_id: Optional[int] = Query(None, description="default: caller"),
    team_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    rows = svc.list_for_caller(db, caller, user_id, team_id, limit)
    return [NotificationOut.model_validate(n) for n in rows]

@router.post("/notifications/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: int, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return NotificationOut.model_validate(svc.mark_read(db, notification_id, caller))

@router.post("/notifications/read-all")
def mark_all_read(db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    return {"ok": True, "updated": svc.mark_all_read(db, caller.user_id)}

# ---- Settings ----
@router.get("/notification-settings", response_model=NotificationSettingsOut)
def get_settings(team_id: Optional[int] = None, db: Session = Depends(get_db), caller: Caller = Depends(get_caller)):
    team_id = team_scope(caller, team_id)
    get_team(db, team_id)
    return NotificationSettingsOut.model_validate(svc.get_settings_row(db, team_id))

@router.put(
    "/notification-settings",
    response_model=NotificationSettingsOut,
    dependencies=[Depends(RolesAllowed(Action.MANAGE_NOTIFICATION_SETTINGS))],
)
def put_settings(body: NotificationSettingsIn, db: Session = Depends(get_db)):
    get_team(db, body.team_id)
    row = svc.upsert_settings(db, body.team_id, body.email_enabled, body.sms_endpoint)
    return NotificationSettingsOut.model_validate(row)
