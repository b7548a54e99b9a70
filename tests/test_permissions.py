import pytest

from turnus.core.exceptions import PermissionDenied
from turnus.core.permissions import Action, Caller, Role, authorize, authorize_team, can


@pytest.mark.parametrize("role", [Role.ADMIN, Role.LEADER])
def test_managers_edit_shifts_and_approve_swaps(role):
    assert can(role, Action.EDIT_SHIFTS)
    assert can(role, Action.APPROVE_SWAPS)
    assert can(role.value, Action.APPROVE_NOTES)


def test_employee_can_only_request():
    assert not can(Role.EMPLOYEE, Action.EDIT_SHIFTS)
    assert not can(Role.EMPLOYEE, Action.APPROVE_SWAPS)
    assert can(Role.EMPLOYEE, Action.REQUEST_SWAP)
    assert can(Role.EMPLOYEE, Action.CREATE_NOTE)


def test_admin_only_actions():
    assert can(Role.ADMIN, Action.MANAGE_SHIFT_TYPES)
    assert not can(Role.LEADER, Action.MANAGE_SHIFT_TYPES)
    assert not can(Role.LEADER, Action.MANAGE_TEAMS)


@pytest.mark.parametrize("role", [None, "", "SUPERUSER", "admin"])
def test_unknown_roles_have_no_capabilities(role):
    assert not can(role, Action.REQUEST_SWAP)


def test_authorize_raises_for_missing_or_weak_caller():
    with pytest.raises(PermissionDenied):
        authorize(None, Action.REQUEST_SWAP)
    with pytest.raises(PermissionDenied):
        authorize(Caller(user_id=1, role=Role.EMPLOYEE, team_id=1), Action.EDIT_SHIFTS)
    c = Caller(user_id=1, role=Role.LEADER, team_id=1)
    assert authorize(c, Action.EDIT_SHIFTS) is c


def test_authorize_team_confines_everyone_but_admin():
    leader = Caller(user_id=2, role=Role.LEADER, team_id=1)
    assert authorize_team(leader, 1) is leader
    with pytest.raises(PermissionDenied):
        authorize_team(leader, 2)
    with pytest.raises(PermissionDenied):
        authorize_team(None, 1)
    admin = Caller(user_id=1, role=Role.ADMIN, team_id=1)
    assert authorize_team(admin, 2) is admin
