# apps/api/turnus/schemas/org.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr

from turnus.core.permissions import Role

class TeamIn(BaseModel):
    name: str

class TeamOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    created_at: datetime

class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str

class UserCreateIn(BaseModel):
    name: str
    email: EmailStr
    team_id: int
    role: str = Role.EMPLOYEE.value

class UserRoleIn(BaseModel):
    role: str

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: str
    role: Role
    team_id: int

class NotificationSettingsIn(BaseModel):
    team_id: int
    email_enabled: Optional[bool] = None
    sms_endpoint: Optional[str] = None

class NotificationSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    team_id: int
    email_enabled: bool
    sms_endpoint: Optional[str] = None
