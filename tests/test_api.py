from jose import jwt

from fastapi.testclient import TestClient

from turnus.core.config import Settings
from turnus.main import create_app

from conftest import as_user


def _shift_body(w, user, day="2026-01-05", code="N1"):
    st = w.types[code]
    return {
        "date": day,
        "user_id": user.id,
        "shift_type_id": st.id,
        "start_time": st.default_start_time,
        "end_time": st.default_end_time,
    }


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_unknown_caller_is_unauthenticated(client, world):
    assert client.get("/shifts").status_code == 401
    assert client.get("/shifts", headers={"X-User-Id": "9999"}).status_code == 401
    assert client.get("/shifts", headers={"X-User-Id": "abc"}).status_code == 401


def test_create_shift_over_http(client, world):
    r = client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["team_id"] == world.team.id
    assert body["start_datetime"] == "2026-01-05T22:45:00"
    assert body["end_datetime"] == "2026-01-06T08:15:00"
    assert body["hours"] == 9.5
    assert body["shift_type"]["code"] == "N1"
    assert body["user"]["name"] == "Anna Ansatt"

    again = client.post("/shifts", json=_shift_body(world, world.anna, code="Dag"), headers=as_user(world.leader))
    assert again.status_code == 409
    assert again.json() == {"detail": "Shift already exists", "error": "conflict"}


def test_error_format(client, world):
    r = client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.bjorn))
    assert r.status_code == 403
    assert r.json()["error"] == "permission_denied"

    r = client.get("/shifts/4242", headers=as_user(world.anna))
    assert r.status_code == 404
    assert r.json() == {"detail": "Shift not found", "error": "not_found"}

    body = _shift_body(world, world.anna)
    body["start_time"] = "25:00"
    r = client.post("/shifts", json=body, headers=as_user(world.leader))
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"


def test_list_shifts_defaults_to_caller_team(client, world):
    client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader))
    client.post("/shifts", json=_shift_body(world, world.outsider), headers=as_user(world.admin))
    rows = client.get("/shifts", headers=as_user(world.bjorn)).json()
    assert [r["user_id"] for r in rows] == [world.anna.id]


def test_bulk_over_http(client, world):
    dag = world.types["Dag"]
    items = [
        {"user_id": world.anna.id, "date": "2026-01-05", "shift_type_id": dag.id, "start_time": "08:00", "end_time": "16:00"},
        {"user_id": world.anna.id, "date": "2026-01-06", "shift_type_id": 9999, "start_time": "08:00", "end_time": "16:00"},
        {"user_id": world.anna.id, "date": "2026-01-07", "shift_type_id": dag.id, "start_time": "08:00", "end_time": "16:00"},
    ]
    r = client.post("/shifts/bulk", json={"action": "create", "items": items}, headers=as_user(world.leader))
    assert r.status_code == 200, r.text
    body = r.json()
    assert [s["date"] for s in body["successes"]] == ["2026-01-05", "2026-01-07"]
    assert body["failures"] == [{"user_id": world.anna.id, "date": "2026-01-06", "error": "Shift type not found"}]

    r = client.post("/shifts/bulk", json={"action": "create", "items": items[:1] * 201}, headers=as_user(world.leader))
    assert r.status_code == 400
    r = client.post("/shifts/bulk", json={"action": "nuke", "items": items}, headers=as_user(world.leader))
    assert r.status_code == 400
    r = client.post("/shifts/bulk", json={"action": "create", "items": items}, headers=as_user(world.anna))
    assert r.status_code == 403


def test_swap_flow_over_http(client, world):
    shift = client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader)).json()

    r = client.post("/swap-requests", json={"shift_id": shift["id"], "to_user_id": world.bjorn.id}, headers=as_user(world.anna))
    assert r.status_code == 200, r.text
    sr = r.json()
    assert sr["status"] == "PENDING" and sr["from_user_id"] == world.anna.id

    assert client.post(f"/swap-requests/{sr['id']}/execute", headers=as_user(world.leader)).status_code == 409
    assert client.post(f"/swap-requests/{sr['id']}/approve", headers=as_user(world.bjorn)).status_code == 403
    assert client.post(f"/swap-requests/{sr['id']}/approve", headers=as_user(world.leader)).json()["status"] == "APPROVED"
    assert client.post(f"/swap-requests/{sr['id']}/execute", headers=as_user(world.leader)).json()["status"] == "EXECUTED"
    assert client.post(f"/swap-requests/{sr['id']}/execute", headers=as_user(world.leader)).status_code == 409

    moved = client.get(f"/shifts/{shift['id']}", headers=as_user(world.anna)).json()
    assert moved["user_id"] == world.bjorn.id

    listed = client.get("/swap-requests", params={"status": "EXECUTED"}, headers=as_user(world.anna)).json()
    assert [x["id"] for x in listed] == [sr["id"]]


def test_swap_on_behalf_of_someone_else_is_denied(client, world):
    shift = client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader)).json()
    r = client.post(
        "/swap-requests",
        json={"shift_id": shift["id"], "to_user_id": world.bjorn.id, "requested_by_user_id": world.anna.id},
        headers=as_user(world.carl),
    )
    assert r.status_code == 403


def test_notifications_over_http(client, world):
    client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader))
    rows = client.get("/notifications", params={"user_id": world.anna.id}, headers=as_user(world.anna)).json()
    assert len(rows) == 1 and rows[0]["type"] == "SHIFT_CREATED" and rows[0]["read"] is False

    r = client.post(f"/notifications/{rows[0]['id']}/read", headers=as_user(world.anna))
    assert r.json()["read"] is True
    assert client.post("/notifications/read-all", headers=as_user(world.anna)).json() == {"ok": True, "updated": 0}
    own = client.get("/notifications", headers=as_user(world.anna)).json()
    assert [n["id"] for n in own] == [rows[0]["id"]]


def test_notification_settings_are_admin_only(client, world):
    r = client.get("/notification-settings", params={"team_id": world.team.id}, headers=as_user(world.anna))
    assert r.json() == {"team_id": world.team.id, "email_enabled": True, "sms_endpoint": None}

    body = {"team_id": world.team.id, "email_enabled": False, "sms_endpoint": "  "}
    assert client.put("/notification-settings", json=body, headers=as_user(world.leader)).status_code == 403
    r = client.put("/notification-settings", json=body, headers=as_user(world.admin))
    assert r.json() == {"team_id": world.team.id, "email_enabled": False, "sms_endpoint": None}


def test_notes_and_agenda_over_http(client, world):
    client.post("/shifts", json=_shift_body(world, world.anna, day="2026-01-05", code="Dag"), headers=as_user(world.leader))
    r = client.post(
        "/notes",
        json={"type": "ABSENCE", "body": "Legetime", "date_from": "2026-01-05", "date_to": "2026-01-05"},
        headers=as_user(world.anna),
    )
    assert r.status_code == 200, r.text
    note = r.json()
    assert note["status"] == "PENDING" and note["created_by"]["id"] == world.anna.id

    assert client.post(f"/notes/{note['id']}/approve", json={"status": "APPROVED"}, headers=as_user(world.anna)).status_code == 403
    r = client.post(f"/notes/{note['id']}/approve", json={"status": "APPROVED"}, headers=as_user(world.leader))
    assert r.json()["status"] == "APPROVED"

    agenda = client.get(
        "/agenda", params={"date_from": "2026-01-01", "date_to": "2026-01-31"}, headers=as_user(world.bjorn),
    ).json()
    assert agenda["date_from"] == "2026-01-01"
    assert len(agenda["shifts"]) == 1 and len(agenda["notes"]) == 1


def test_org_admin_routes(client, world):
    r = client.post("/teams", json={"name": "Night desk"}, headers=as_user(world.admin))
    assert r.status_code == 200
    team_id = r.json()["id"]
    assert client.post("/teams", json={"name": "x"}, headers=as_user(world.leader)).status_code == 403

    r = client.post(
        "/users", json={"name": "New Person", "email": "new@hdo.no", "team_id": team_id, "role": "LEADER"},
        headers=as_user(world.admin),
    )
    assert r.status_code == 200 and r.json()["role"] == "LEADER"
    user_id = r.json()["id"]
    assert client.post(
        "/users", json={"name": "Dup", "email": "new@hdo.no", "team_id": team_id}, headers=as_user(world.admin),
    ).status_code == 409

    assert client.delete(f"/teams/{team_id}", headers=as_user(world.admin)).json() == {"ok": True}
    assert client.get(f"/users/{user_id}", headers=as_user(world.admin)).status_code == 404


def test_shift_type_routes(client, world):
    assert client.post("/shift-types/seed-defaults", headers=as_user(world.admin)).json() == {"ok": True, "created": 0}
    client.post("/shifts", json=_shift_body(world, world.anna, code="K1"), headers=as_user(world.leader))
    r = client.delete(f"/shift-types/{world.types['K1'].id}", headers=as_user(world.admin))
    assert r.status_code == 409
    codes = [st["code"] for st in client.get("/shift-types", headers=as_user(world.anna)).json()]
    assert set(codes) == {"Fri", "Dag", "Dag2", "N1", "N2", "K1", "D2"}


def test_jwt_identity(database, world):
    app = create_app(Settings(DATABASE_URL=database.url, AUTH_MODE="jwt", JWT_SECRET="s3cret"))
    token = jwt.encode({"sub": str(world.leader.id)}, "s3cret", algorithm="HS256")
    with TestClient(app) as c:
        assert c.get("/shifts", headers={"Authorization": f"Bearer {token}"}).status_code == 200
        assert c.get("/shifts", headers=as_user(world.leader)).status_code == 401
        bad = jwt.encode({"sub": str(world.leader.id)}, "other", algorithm="HS256")
        assert c.get("/shifts", headers={"Authorization": f"Bearer {bad}"}).status_code == 401


def test_reads_are_scoped_to_the_callers_team(client, world):
    client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader))
    anna_inbox = client.get("/notifications", headers=as_user(world.anna)).json()

    assert client.get("/notifications", params={"user_id": world.anna.id}, headers=as_user(world.bjorn)).status_code == 403
    assert client.get("/notifications", params={"team_id": world.other.id}, headers=as_user(world.anna)).status_code == 403
    assert client.get("/notifications", params={"user_id": world.anna.id}, headers=as_user(world.outsider)).status_code == 403
    r = client.get("/notifications", params={"user_id": world.anna.id}, headers=as_user(world.leader))
    assert [n["id"] for n in r.json()] == [n["id"] for n in anna_inbox]

    r = client.post(f"/notifications/{anna_inbox[0]['id']}/read", headers=as_user(world.bjorn))
    assert r.status_code == 404

    assert client.get("/shifts", params={"team_id": world.other.id}, headers=as_user(world.anna)).status_code == 403
    assert client.get("/notification-settings", params={"team_id": world.other.id}, headers=as_user(world.anna)).status_code == 403
    shift_id = client.get("/shifts", headers=as_user(world.anna)).json()[0]["id"]
    assert client.get(f"/shifts/{shift_id}", headers=as_user(world.outsider)).status_code == 403
    assert client.get("/shifts", params={"team_id": world.other.id}, headers=as_user(world.admin)).status_code == 200


def test_foreign_leader_gets_403_on_swap_decisions(client, world, foreign_leader):
    shift = client.post("/shifts", json=_shift_body(world, world.anna), headers=as_user(world.leader)).json()
    sr = client.post("/swap-requests", json={"shift_id": shift["id"], "to_user_id": world.bjorn.id}, headers=as_user(world.anna)).json()

    r = client.post(f"/swap-requests/{sr['id']}/approve", headers=as_user(foreign_leader))
    assert r.status_code == 403
    assert r.json()["error"] == "permission_denied"
    assert client.delete(f"/shifts/{shift['id']}", headers=as_user(foreign_leader)).status_code == 403
    assert client.get(f"/swap-requests/{sr['id']}", headers=as_user(world.anna)).json()["status"] == "PENDING"
