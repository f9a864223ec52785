"""Tests for the feedback module (public form + admin summary)."""
import pytest
from werkzeug.security import generate_password_hash

from app.aimarketer import create_app
from app.aimarketer.db import session_scope
from app.aimarketer.models import Base, User
from app.aimarketer.modules.feedback.models import Feedback
from app.aimarketer.modules.feedback.service import validate_feedback_payload

VALID = {"name": "Jane", "email": "j@x.com", "phone": "1234567890", "query": "Hi"}


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add_all(
            [
                User(username="admin", password_hash=generate_password_hash("admin123"), role="admin"),
                User(username="jane", password_hash=generate_password_hash("pw"), role="user"),
            ]
        )
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username, password):
    client.post("/login", data={"username": username, "password": password})


def _feedback_rows(app) -> list[Feedback]:
    with session_scope(app) as s:
        return s.query(Feedback).order_by(Feedback.id).all()


# ---------- Submission ----------
def test_submit_feedback_creates_one_row(app, client):
    r = client.post("/feedback", data=VALID)
    assert r.status_code == 200
    assert b"Thank you for your feedback!" in r.data
    assert b'href="/"' in r.data

    rows = _feedback_rows(app)
    assert len(rows) == 1
    assert (rows[0].name, rows[0].email, rows[0].phone, rows[0].query) == ("Jane", "j@x.com", "1234567890", "Hi")


def test_submit_feedback_stores_values_verbatim(app, client):
    data = dict(VALID, email="not-an-email", phone="call me", query="  padded  ")
    r = client.post("/feedback", data=data)
    assert b"Thank you for your feedback!" in r.data
    row = _feedback_rows(app)[0]
    assert row.email == "not-an-email"
    assert row.phone == "call me"
    assert row.query == "  padded  "


@pytest.mark.parametrize("field", ["name", "email", "phone", "query"])
@pytest.mark.parametrize("blank", ["", "   ", None])
def test_blank_field_is_rejected(app, client, field, blank):
    data = dict(VALID)
    if blank is None:
        data.pop(field)
    else:
        data[field] = blank
    r = client.post("/feedback", data=data)
    assert r.status_code == 200
    assert b"All fields are required." in r.data
    assert b'href="/feedback"' in r.data
    assert _feedback_rows(app) == []


def test_submit_store_error_gives_generic_message(app, client):
    Feedback.__table__.drop(bind=app.extensions["sqlalchemy_engine"])
    r = client.post("/feedback", data=VALID)
    assert r.status_code == 200
    assert b"An error occurred while saving your feedback." in r.data


def test_validate_feedback_payload_lists_missing_fields():
    assert validate_feedback_payload(VALID) == []
    assert validate_feedback_payload({"name": "Jane", "email": " "}) == ["email", "phone", "query"]


# ---------- Summary ----------
def test_summary_forbidden_for_anonymous(client):
    r = client.get("/feedback-summary")
    assert r.status_code == 403
    assert r.data == b"Access denied"
    assert r.mimetype == "text/plain"


def test_summary_forbidden_for_user_role(client):
    _login(client, "jane", "pw")
    r = client.get("/feedback-summary")
    assert r.status_code == 403
    assert b"Access denied" in r.data


def test_summary_forbidden_with_spoofed_role_casing(client):
    with client.session_transaction() as sess:
        sess["username"] = "jane"
        sess["role"] = "Admin"
    r = client.get("/feedback-summary")
    assert r.status_code == 403


def test_summary_empty_for_admin(client):
    _login(client, "admin", "admin123")
    r = client.get("/feedback-summary")
    assert r.status_code == 200
    assert b"No feedback submitted yet." in r.data


def test_summary_lists_rows_for_admin(client):
    client.post("/feedback", data=VALID)
    client.post("/feedback", data=dict(VALID, name="Bob", query="Pricing?"))
    _login(client, "admin", "admin123")

    r = client.get("/feedback-summary")
    assert r.status_code == 200
    assert b"<table" in r.data
    assert b"Jane" in r.data
    assert b"Pricing?" in r.data
    assert r.data.index(b"Jane") < r.data.index(b"Bob")


def test_summary_escapes_stored_input(client):
    client.post("/feedback", data=dict(VALID, query="<img src=x onerror=alert(1)>"))
    _login(client, "admin", "admin123")
    r = client.get("/feedback-summary")
    assert b"<img src=x" not in r.data
    assert b"&lt;img src=x onerror=alert(1)&gt;" in r.data


def test_summary_store_error(app, client):
    _login(client, "admin", "admin123")
    Feedback.__table__.drop(bind=app.extensions["sqlalchemy_engine"])
    r = client.get("/feedback-summary")
    assert r.status_code == 200
    assert b"Error retrieving feedback" in r.data
