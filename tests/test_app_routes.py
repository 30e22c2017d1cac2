from __future__ import annotations

from datetime import datetime

import pytest

from lab_hours.auth.model import AuthUser
from lab_hours.database.schema import LabSessionRow, MentorRow, StudentRow, TagRow
from lab_hours.extensions import db
from lab_hours.main import create_app


def _seed():
    db.session.add_all(
        [
            StudentRow(id=1001, first_name="Ada", last_name="Lovelace"),
            StudentRow(id=1002, first_name="Alan", last_name="Turing"),
            MentorRow(id=1, first_name="Pat", last_name="Fairbank", phone_number="5551234567"),
        ]
    )
    db.session.flush()
    db.session.add_all(
        [
            TagRow(tag_id="A1", student_id=1001),
            TagRow(tag_id="M1", mentor_id=1),
            TagRow(tag_id="X9"),
        ]
    )
    db.session.commit()


@pytest.fixture
def make_client(members):
    def _make(user=None, directory=()):
        app = create_app("lab_hours.config.testing", members_client=members(user, directory))
        with app.app_context():
            _seed()
        return app, app.test_client()

    return _make


def _open_sessions(app):
    with app.app_context():
        return db.session.execute(db.select(LabSessionRow).where(LabSessionRow.time_out.is_(None))).scalars().all()


def test_private_page_redirects_to_members_sign_in(make_client):
    _, client = make_client()

    response = client.get("/leader_board")

    assert response.status_code == 302
    assert response.headers["Location"] == "http://members.test?site=hours&path=/leader_board"


def test_public_pages_render_for_anonymous(make_client):
    _, client = make_client()

    assert client.get("/").status_code == 200
    assert client.get("/tag/live").status_code == 200


def test_signin_form(make_client):
    app, client = make_client()

    response = client.post("/signin", data={"student_id": "1001"})
    assert response.status_code == 302
    assert response.headers["Location"] == "/"
    assert [s.student_id for s in _open_sessions(app)] == [1001]

    again = client.post("/signin", data={"student_id": "1001"})
    assert again.status_code == 400
    assert again.get_data(as_text=True) == "An open lab session already exists for student 1001."


def test_signin_uses_forwarded_ip(make_client, monkeypatch):
    monkeypatch.setattr("lab_hours.config.testing.SIGNIN_IP_WHITELIST", ["10.1."])
    _, client = make_client()

    rejected = client.post("/signin", data={"student_id": "1001"}, headers={"X-Real-IP": "8.8.8.8"})
    accepted = client.post("/signin", data={"student_id": "1001"}, headers={"X-Real-IP": "10.1.0.20"})

    assert rejected.status_code == 400
    assert accepted.status_code == 302


def test_admin_pages_need_permission(make_client, plain_user):
    _, client = make_client(plain_user)

    assert client.get("/leader_board").status_code == 200
    response = client.get("/csv_report")
    assert response.status_code == 403
    assert client.get("/mentors").status_code == 403


def test_csv_report(make_client, admin_user):
    app, client = make_client(admin_user)
    with app.app_context():
        db.session.add(
            LabSessionRow(student_id=1002, time_in=datetime(2026, 3, 2, 16, 0), time_out=datetime(2026, 3, 2, 17, 30))
        )
        db.session.commit()

    response = client.get("/csv_report")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.get_data(as_text=True).split("\n") == [
        "Last Name,First Name,Student ID,Project Hours",
        "Lovelace,Ada,1001,0.0",
        "Turing,Alan,1002,1.5",
    ]


def test_strike_report_renders(make_client, admin_user):
    _, client = make_client(admin_user)

    response = client.get("/strike_report")

    assert response.status_code == 200
    assert "Lovelace" in response.get_data(as_text=True)


def test_admin_edits_lab_session(make_client, admin_user):
    app, client = make_client(admin_user)

    created = client.post(
        "/students/1001/new_lab_session",
        data={"time_in": "2026-03-02 16:00", "time_out": "2026-03-02 18:00", "notes": "", "referrer": "/students/1001"},
    )
    assert created.status_code == 302
    assert created.headers["Location"] == "/students/1001"

    with app.app_context():
        row = db.session.execute(db.select(LabSessionRow)).scalar_one()
        assert row.mentor_name == "Grace Hopper"
        session_id = row.id

    assert client.get("/students/1001").status_code == 200
    assert client.get(f"/lab_sessions/{session_id}/edit").status_code == 200
    deleted = client.post(f"/lab_sessions/{session_id}/delete")
    assert deleted.headers["Location"] == "/leader_board"


def test_mentor_management(make_client, admin_user):
    _, client = make_client(admin_user)

    bad = client.post("/mentors", data={"first_name": "Jess", "last_name": "Boucher", "phone_number": "123"})
    assert bad.status_code == 400
    assert bad.get_data(as_text=True) == "Invalid phone number."

    ok = client.post("/mentors", data={"first_name": "Jess", "last_name": "Boucher", "phone_number": "555-987-6543"})
    assert ok.status_code == 302
    assert "5559876543" in client.get("/mentors").get_data(as_text=True)


def test_sms_signs_out_and_replies_in_xml(make_client):
    app, client = make_client()
    client.post("/signin", data={"student_id": "1001"})

    response = client.post("/sms", data={"From": "+15551234567", "Body": "1001 1002"})

    assert response.status_code == 200
    assert response.headers["Content-Type"].startswith("text/xml")
    body = response.get_data(as_text=True)
    assert body.startswith("<Response><Sms>Ada Lovelace signed out after ")
    assert body.endswith("<Sms>Error: Alan Turing is not signed in.</Sms></Response>")
    assert _open_sessions(app) == []


def test_sms_from_stranger(make_client):
    _, client = make_client()

    response = client.post("/sms", data={"From": "+15550000000", "Body": "gtfo"})

    assert response.status_code == 200
    assert response.get_data(as_text=True) == (
        "<Response><Sms>Error: Don't recognize sender's phone number.</Sms></Response>"
    )


def test_reindex_students(make_client, admin_user):
    directory = [
        AuthUser(id=1001, name=("Lovelace", "Ada"), permissions=frozenset({"HOURS_SIGN_IN"})),
        AuthUser(id=1003, name=("Hopper", "Grace"), permissions=frozenset({"HOURS_SIGN_IN"})),
    ]
    app, client = make_client(admin_user, directory)

    response = client.get("/reindex_students")

    # Turing has no history and is not in the directory any more
    assert response.get_data(as_text=True) == "Successfully imported 2 students."
    with app.app_context():
        assert sorted(db.session.execute(db.select(StudentRow.id)).scalars()) == [1001, 1003]


def test_tag_events_reach_live_view(make_client):
    app, client = make_client()
    live = app.extensions["socketio"].test_client(app, namespace="/tag_ws")
    assert live.get_received("/tag_ws")[0]["args"] == {"status": "Connection Opened"}

    response = client.get("/tag/events/in/A1")

    assert response.get_json() == {"type": "student", "tag_id": "A1", "id": 1001, "name": "Ada Lovelace"}
    received = [m["args"] for m in live.get_received("/tag_ws")]
    assert received[0] == {"signin": "Signed in Ada Lovelace!"}
    assert received[-1]["state"] == "in"
    assert [s.student_id for s in _open_sessions(app)] == [1001]

    assert client.get("/tag/events/out/A1").status_code == 200
    assert live.get_received("/tag_ws")[-1]["args"]["state"] == "out"
    live.disconnect(namespace="/tag_ws")


def test_tag_out_error_after_broadcast(make_client):
    app, client = make_client()
    live = app.extensions["socketio"].test_client(app, namespace="/tag_ws")
    live.get_received("/tag_ws")

    response = client.get("/tag/events/out/X9")

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Tag does not reference a student or mentor."
    assert live.get_received("/tag_ws")[-1]["args"]["tag"] == "X9"


def test_tag_assign(make_client, admin_user):
    app, client = make_client(admin_user)

    missing = client.get("/tag/manage/assign?tag=NEW&id=1001")
    assert missing.status_code == 400
    assert missing.get_data(as_text=True) == "Parameter 'mode' is missing."

    response = client.get("/tag/manage/assign?tag=NEW&id=1001&mode=student")
    assert response.get_data(as_text=True) == "Assigned tag NEW."
    assert client.get("/tag/events/in/NEW").get_json()["name"] == "Ada Lovelace"


def test_logout_goes_to_members_site(make_client, admin_user):
    _, client = make_client(admin_user)

    response = client.get("/logout")

    assert response.status_code == 302
    assert response.headers["Location"] == "http://members.test/logout"


def test_tag_manage_wizard_lists_students(make_client, admin_user):
    _, client = make_client(admin_user)

    response = client.get("/tag/manage")

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Lovelace, Ada" in page
    assert "Turing, Alan" in page
