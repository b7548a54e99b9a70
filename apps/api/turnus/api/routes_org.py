# apps/api/turnus/api/routes_org.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from turnus.core.permissions import Action
from turnus.deps import get_db, get_caller, RolesAllowed
from turnus.schemas.org import TeamIn, TeamOut, UserCreateIn, UserOut, UserRoleIn
from turnus.services import org_service

router = APIRouter(tags=["org"])

# --------- Teams ----------
@router.get("/teams", response_model=List[TeamOut], dependencies=[Depends(get_caller)])
def list_teams(db: Session = Depends(get_db)):
    return [TeamOut.model_validate(t) for t in org_service.list_teams(db)]

@router.post("/teams", response_model=TeamOut, dependencies=[Depends(RolesAllowed(Action.MANAGE_TEAMS))])
def create_team(body: TeamIn, db: Session = Depends(get_db)):
    return TeamOut.model_validate(org_service.create_team(db, body.name))

@router.delete("/teams/{team_id}", dependencies=[Depends(RolesAllowed(Action.MANAGE_TEAMS))])
def delete_team(team_id: int, db: Session = Depends(get_db)):
    org_service.delete_team(db, team_id)
    return {"ok": True}

# --------- Users ----------
@router.get("/users", response_model=List[UserOut], dependencies=[Depends(get_caller)])
def list_users(team_id: Optional[int] = None, db: Session = Depends(get_db)):
    return [UserOut.model_validate(u) for u in org_service.list_users(db, team_id)]

@router.get("/users/{user_id}", response_model=UserOut, dependencies=[Depends(get_caller)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserOut.model_validate(org_service.get_user(db, user_id))

@router.post("/users", response_model=UserOut, dependencies=[Depends(RolesAllowed(Action.MANAGE_USERS))])
def create_user(body: UserCreateIn, db: Session = Depends(get_db)):
    u = org_service.create_user(db, body.name, body.email, body.team_id, body.role)
    return UserOut.model_validate(u)

@router.put("/users/{user_id}", response_model=UserOut, dependencies=[Depends(RolesAllowed(Action.MANAGE_USERS))])
def update_user_role(user_id: int, body: UserRoleIn, db: Session = Depends(get_db)):
    return UserOut.model_validate(org_service.update_user_role(db, user_id, body.role))
