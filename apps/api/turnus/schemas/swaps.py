# apps/api/turnus/schemas/swaps.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from turnus.db.models_swap_requests import SwapStatus
from turnus.schemas.org import UserBrief

class SwapRequestIn(BaseModel):
    shift_id: int
    to_user_id: int
    team_id: Optional[int] = None
    requested_by_user_id: Optional[int] = None
    message: Optional[str] = None

class SwapRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    team_id: int
    requested_by_user_id: int
    from_user_id: int
    to_user_id: int
    shift_id: int
    status: SwapStatus
    message: Optional[str] = None
    decided_at: Optional[datetime] = None
    created_at: datetime
    requested_by: Optional[UserBrief] = None
    from_user: Optional[UserBrief] = None
    to_user: Optional[UserBrief] = None
