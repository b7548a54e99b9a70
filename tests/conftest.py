from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from turnus.core.config import Settings, settings
from turnus.core.permissions import Caller
from turnus.db.session import Database
from turnus.main import create_app
from turnus.services import org_service
from turnus.services.shift_types_service import list_shift_types, seed_default_shift_types


def caller_of(user) -> Caller:
    return Caller(user_id=user.id, role=user.role, team_id=user.team_id)


def as_user(user) -> dict:
    return {"X-User-Id": str(user.id)}


@pytest.fixture
def database(tmp_path):
    d = Database(f"sqlite:///{tmp_path / 'turnus.db'}")
    d.open()
    yield d
    d.close()


@pytest.fixture
def db(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def world(db):
    team = org_service.create_team(db, "HDO - Turnus")
    other = org_service.create_team(db, "Other team")
    w = SimpleNamespace(
        team=team,
        other=other,
        admin=org_service.create_user(db, "Admin User", "admin@hdo.no", team.id, "ADMIN"),
        leader=org_service.create_user(db, "Lena Leader", "leader@hdo.no", team.id, "LEADER"),
        anna=org_service.create_user(db, "Anna Ansatt", "anna@hdo.no", team.id, "EMPLOYEE"),
        bjorn=org_service.create_user(db, "Bjorn Ansatt", "bjorn@hdo.no", team.id, "EMPLOYEE"),
        carl=org_service.create_user(db, "Carl Ansatt", "carl@hdo.no", team.id, "EMPLOYEE"),
        outsider=org_service.create_user(db, "Olav Other", "olav@other.no", other.id, "EMPLOYEE"),
    )
    seed_default_shift_types(db)
    w.types = {st.code: st for st in list_shift_types(db)}
    return w


@pytest.fixture
def foreign_leader(db, world):
    """A LEADER of the other team."""
    return org_service.create_user(db, "Frida Fremmed", "frida@other.no", world.other.id, "LEADER")


@pytest.fixture
def bulk_settings(monkeypatch):
    """Restore bulk limits after a test tweaks them."""
    monkeypatch.setattr(settings, "BULK_MAX_ITEMS", settings.BULK_MAX_ITEMS)
    monkeypatch.setattr(settings, "BULK_BATCH_SIZE", settings.BULK_BATCH_SIZE)
    monkeypatch.setattr(settings, "BULK_ITEM_TIMEOUT_SEC", settings.BULK_ITEM_TIMEOUT_SEC)
    return settings


@pytest.fixture
def client(database, world):
    app = create_app(Settings(DATABASE_URL=database.url))
    with TestClient(app) as c:
        yield c
