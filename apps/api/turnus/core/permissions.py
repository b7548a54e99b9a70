# apps/api/turnus/core/permissions.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from turnus.core.exceptions import PermissionDenied


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    LEADER = "LEADER"
    EMPLOYEE = "EMPLOYEE"


class Action(str, enum.Enum):
    EDIT_SHIFTS = "edit_shifts"
    APPROVE_SWAPS = "approve_swaps"
    REQUEST_SWAP = "request_swap"
    APPROVE_NOTES = "approve_notes"
    CREATE_NOTE = "create_note"
    MANAGE_TEAMS = "manage_teams"
    MANAGE_USERS = "manage_users"
    MANAGE_SHIFT_TYPES = "manage_shift_types"
    MANAGE_NOTIFICATION_SETTINGS = "manage_notification_settings"
    VIEW_MEMBER_NOTIFICATIONS = "view_member_notifications"


_MANAGERS = frozenset({Role.ADMIN, Role.LEADER})
_ADMINS = frozenset({Role.ADMIN})
_EVERYONE = frozenset(Role)

# Tek politika tablosu: action -> izinli roller
POLICY: dict[Action, frozenset[Role]] = {
    Action.EDIT_SHIFTS: _MANAGERS,
    Action.APPROVE_SWAPS: _MANAGERS,
    Action.APPROVE_NOTES: _MANAGERS,
    Action.REQUEST_SWAP: _EVERYONE,
    Action.CREATE_NOTE: _EVERYONE,
    Action.MANAGE_TEAMS: _ADMINS,
    Action.MANAGE_USERS: _ADMINS,
    Action.MANAGE_SHIFT_TYPES: _ADMINS,
    Action.MANAGE_NOTIFICATION_SETTINGS: _ADMINS,
    Action.VIEW_MEMBER_NOTIFICATIONS: _MANAGERS,
}


@dataclass(frozen=True)
class Caller:
    """Already-resolved identity of whoever is calling the core."""

    user_id: int
    role: Role
    team_id: Optional[int]


def can(role: Role | str | None, action: Action) -> bool:
    if role is None:
        return False
    try:
        role = Role(role)
    except ValueError:
        return False
    return role in POLICY.get(action, frozenset())


def authorize(caller: Optional[Caller], action: Action) -> Caller:
    if caller is None:
        raise PermissionDenied("Not authenticated")
    if not can(caller.role, action):
        raise PermissionDenied("Not authorized")
    return caller


def authorize_team(caller: Optional[Caller], team_id: Optional[int]) -> Caller:
    """Everyone but ADMIN is confined to records of their own team."""
    if caller is None:
        raise PermissionDenied("Not authenticated")
    if caller.role != Role.ADMIN and caller.team_id != team_id:
        raise PermissionDenied("Not a member of this team")
    return caller
