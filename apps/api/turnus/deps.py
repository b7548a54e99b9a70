# apps/api/turnus/deps.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from turnus.core.exceptions import PermissionDenied
from turnus.core.permissions import Action, Caller, authorize_team, can
from turnus.db.session import get_db, get_session_factory  # noqa: F401

def get_caller(request: Request, db: Session = Depends(get_db)) -> Caller:
    provider = request.app.state.identity_provider
    caller = provider(request, db)
    if caller is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return caller

def RolesAllowed(action: Action):
    def dep(caller: Caller = Depends(get_caller)) -> Caller:
        if not can(caller.role, action):
            raise PermissionDenied("Not authorized")
        return caller
    return dep

def team_scope(caller: Caller, team_id: Optional[int] = None) -> int:
    # team_id verilmezse çağıranın takımı; başka takım sadece ADMIN'e açık
    team_id = team_id or caller.team_id
    authorize_team(caller, team_id)
    return team_id
