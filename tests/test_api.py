from __future__ import annotations

import pytest

from attendify.core.enums import Role
from conftest import PASSWORD, add_student


def _json(resp):
    return resp.get_json()


def test_routes_require_login(client):
    for path in ("/api/me", "/api/dashboard", "/api/timetable", "/api/students", "/api/attendance/history"):
        resp = client.get(path)
        assert resp.status_code == 401
        assert _json(resp)["success"] is False


def test_login_logout(client, users_repo):
    users_repo.add(name="Admin", email="admin@example.com", role=Role.ADMIN)

    bad = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})
    assert bad.status_code == 401
    assert _json(bad)["message"] == "Invalid email or password"

    ok = client.post("/api/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert _json(ok)["user"]["role"] == "admin"
    assert _json(client.get("/api/me"))["user"]["email"] == "admin@example.com"

    client.post("/api/auth/logout")
    assert client.get("/api/me").status_code == 401


def test_signup_logs_in(client):
    resp = client.post(
        "/api/auth/signup",
        json={"name": "Fay", "email": "fay@example.com", "password": "secret1", "role": "faculty"},
    )
    assert resp.status_code == 201
    assert _json(client.get("/api/me"))["user"]["role"] == "faculty"


def test_signup_missing_student_details(client):
    resp = client.post(
        "/api/auth/signup",
        json={"name": "S", "email": "s@example.com", "password": "secret1", "role": "student"},
    )
    body = _json(resp)
    assert resp.status_code == 400
    assert body["message"] == "Please fill in all student details"
    assert set(body["fields"]) == {"registration_number", "semester", "branch", "section"}


def test_add_class_conflict_returns_form(client, login):
    login(Role.FACULTY)
    slot = {"day": "Monday", "section": "CS-301", "subject": "Math", "room": "A-1"}

    first = client.post("/api/timetable", json={**slot, "start_time": "09:00", "end_time": "10:00"})
    assert first.status_code == 201
    assert _json(first)["form"] == {
        "day": "Monday",
        "section": "CS-301",
        "start_time": "",
        "end_time": "",
        "subject": "",
        "room": "",
        "state": "idle",
        "error": None,
    }

    clash = client.post("/api/timetable", json={**slot, "start_time": "09:30 AM", "end_time": "10:30 AM"})
    body = _json(clash)
    assert clash.status_code == 400
    assert body["conflicting"]["display"] == "09:00 AM - 10:00 AM"
    assert body["form"]["state"] == "rejected"
    assert body["form"]["start_time"] == "09:30 AM"

    week = _json(client.get("/api/timetable?section=CS-301"))
    assert [d["day"] for d in week["days"]] == ["Monday"]
    assert week["sections"] == ["CS-301", "IT-501", "EC-101"]


def test_student_cannot_add_class(client, login):
    login(Role.STUDENT, section="CS-301")
    resp = client.post(
        "/api/timetable",
        json={"day": "Monday", "section": "CS-301", "subject": "M", "room": "R", "start_time": "09:00", "end_time": "10:00"},
    )
    assert resp.status_code == 403


def test_timetable_store_failure_is_bad_gateway(client, login, timetable_repo):
    login(Role.ADMIN)
    timetable_repo.fail_writes = True
    resp = client.post(
        "/api/timetable",
        json={"day": "Monday", "section": "CS-301", "subject": "M", "room": "R", "start_time": "09:00", "end_time": "10:00"},
    )
    assert resp.status_code == 502
    assert _json(resp)["form"]["subject"] == "M"


@pytest.fixture
def cs_roster(students_repo):
    return [add_student(students_repo, n, f"EN{i}") for i, n in enumerate(("Ana", "Ben", "Cy"), 1)]


def test_marking_flow(client, login, cs_roster, attendance_repo):
    login(Role.FACULTY)
    started = _json(client.post("/api/attendance/session", json={"section": "CS-301", "date": "2026-10-19", "subject": "Math"}))
    token = started["session"]["token"]
    ids = [s["student_id"] for s in started["session"]["students"]]
    assert {s["status"] for s in started["session"]["students"]} == {"pending"}
    assert started["existing"] == {}

    client.post(f"/api/attendance/session/toggle/{ids[0]}", json={"token": token})
    client.post(f"/api/attendance/session/toggle/{ids[1]}", json={"token": token})

    blocked = client.post("/api/attendance/session/submit", json={"token": token})
    assert blocked.status_code == 400
    assert _json(blocked)["pending"] == [ids[2]]

    toggled = _json(client.post(f"/api/attendance/session/toggle/{ids[2]}", json={"token": token}))
    assert toggled["status"] == "present"
    assert toggled["pending"] == 0

    done = client.post("/api/attendance/session/submit", json={"token": token})
    assert done.status_code == 200
    assert _json(done)["stats"] == {"total": 3, "present": 3, "absent": 0, "percentage": 100}
    assert len(attendance_repo.records) == 3

    current = _json(client.get("/api/attendance/session"))["session"]
    assert {s["status"] for s in current["students"]} == {"pending"}

    history = _json(client.get("/api/attendance/history?section=CS-301&start=2026-10-01&end=2026-10-31"))
    assert history["stats"]["percentage"] == 100
    assert len(history["records"]) == 3


def test_submit_with_stale_token_is_ignored(client, login, cs_roster, attendance_repo):
    login(Role.FACULTY)
    old = _json(client.post("/api/attendance/session", json={"section": "CS-301", "date": "2026-10-19"}))
    new = _json(client.post("/api/attendance/session", json={"section": "CS-301", "date": "2026-10-20"}))
    client.post("/api/attendance/session/mark-all", json={"token": new["session"]["token"]})

    resp = client.post("/api/attendance/session/submit", json={"token": old["session"]["token"]})
    assert resp.status_code == 400
    assert attendance_repo.write_calls == 0

    late_toggle = client.post(
        f"/api/attendance/session/toggle/{cs_roster[0].student_id}", json={"token": old["session"]["token"]}
    )
    assert late_toggle.status_code == 400
    current = _json(client.get("/api/attendance/session"))["session"]
    assert current["date"] == "2026-10-20"
    assert {s["status"] for s in current["students"]} == {"present"}


def test_changes_without_token_are_rejected(client, login, cs_roster, attendance_repo):
    login(Role.FACULTY)
    client.post("/api/attendance/session", json={"section": "CS-301", "date": "2026-10-19"})

    assert client.post("/api/attendance/session/mark-all").status_code == 400
    assert client.post(f"/api/attendance/session/toggle/{cs_roster[0].student_id}", json={}).status_code == 400

    resp = client.post("/api/attendance/session/submit")
    assert resp.status_code == 400
    assert _json(resp)["message"] == "Marking session token is required"
    assert attendance_repo.write_calls == 0

    current = _json(client.get("/api/attendance/session"))["session"]
    assert {s["status"] for s in current["students"]} == {"pending"}


def test_submit_empty_class(client, login):
    login(Role.ADMIN)
    started = _json(client.post("/api/attendance/session", json={"section": "EC-101", "date": "2026-10-19"}))
    resp = client.post("/api/attendance/session/submit", json={"token": started["session"]["token"]})
    assert resp.status_code == 400
    assert _json(resp)["message"] == "No students found in this class"


def test_student_sees_only_own_history(client, users_repo, students_repo, attendance_repo, cs_roster):
    from datetime import date

    from attendify.attendance.model import AttendanceRecord

    user = users_repo.add(name="Ana", email="ana@example.com", role=Role.STUDENT, section="CS-301")
    me = add_student(students_repo, "Ana Two", "EN99", user_id=user.user_id)
    for sid in (me.student_id, cs_roster[0].student_id):
        attendance_repo.upsert_many(
            [AttendanceRecord(student_id=sid, attend_date=date(2026, 10, 19), present=True, marked_by=1, section="CS-301")]
        )

    client.post("/api/auth/login", json={"email": "ana@example.com", "password": PASSWORD})
    body = _json(client.get("/api/attendance/history?section=CS-301"))
    assert [r["student_id"] for r in body["records"]] == [me.student_id]

    assert client.post("/api/attendance/session", json={"section": "CS-301"}).status_code == 403
    assert _json(client.get("/api/dashboard"))["dashboard"]["role"] == "student"


def test_students_api(client, login, cs_roster):
    login(Role.ADMIN)
    listed = _json(client.get("/api/students?q=ben"))
    assert [s["name"] for s in listed["students"]] == ["Ben"]

    added = client.post(
        "/api/students",
        json={
            "name": "Dee",
            "email": "dee@example.com",
            "registration_number": "EN50",
            "semester": "1st",
            "branch": "Civil",
            "section": "IT-501",
        },
    )
    assert added.status_code == 201

    deleted = _json(client.post("/api/students/delete", json={"ids": [cs_roster[0].student_id]}))
    assert deleted["deleted"] == 1
    assert _json(client.get("/api/students"))["count"] == 3


def test_faculty_api_admin_only(client, login):
    login(Role.FACULTY)
    assert client.get("/api/faculty").status_code == 403


def test_faculty_api(client, login):
    login(Role.ADMIN)
    resp = client.post(
        "/api/faculty",
        json={"name": "Dr. F", "department": "Electronics", "subjects": "Circuits, Signals, circuits"},
    )
    assert resp.status_code == 201
    assert _json(resp)["faculty"]["subjects"] == ["Circuits", "Signals"]

    listed = _json(client.get("/api/faculty?q=electro"))
    assert listed["count"] == 1
    fid = listed["faculty"][0]["id"]
    assert _json(client.post("/api/faculty/delete", json={"ids": [fid]}))["deleted"] == 1


def test_admin_dashboard_api(client, login):
    login(Role.ADMIN)
    body = _json(client.get("/api/dashboard"))
    assert body["dashboard"]["role"] == "admin"
    assert body["dashboard"]["greeting"] in {"Good Morning", "Good Afternoon", "Good Evening"}
