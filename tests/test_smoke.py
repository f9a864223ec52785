import pytest
from werkzeug.security import generate_password_hash

from app.aimarketer import create_app
from app.aimarketer.db import session_scope
from app.aimarketer.models import Base, User


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()

    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add(User(username="admin", password_hash=generate_password_hash("admin123"), role="admin"))

    return app.test_client()


def test_healthz_ok(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert b"ok" in r.data


def test_healthz_ok_when_store_unreachable(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "test")
    app = create_app(
        {
            "SECRET_KEY": "test-secret",
            "DATABASE_URL": f"sqlite:///{tmp_path/'missing'/'dir'/'test.db'}",
        }
    )
    r = app.test_client().get("/healthz")
    assert r.status_code == 200
    assert r.data == b"ok"


@pytest.mark.parametrize("path", ["/", "/products", "/feedback", "/register", "/login"])
def test_public_pages_render_anonymous_nav(client, path):
    r = client.get(path)
    assert r.status_code == 200
    assert b'href="/login"' in r.data
    assert b'href="/register"' in r.data
    assert b"Logout" not in r.data


def test_anonymous_visit_does_not_issue_session_cookie(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Set-Cookie" not in r.headers


def test_unknown_path_404(client):
    r = client.get("/no-such-page")
    assert r.status_code == 404
    assert b"Page not found" in r.data


def test_production_refuses_default_secret(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "change-me")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'prod.db'}")
    with pytest.raises(RuntimeError):
        create_app()


def test_overrides_win_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("ENV", "test")
    app = create_app({"SECRET_KEY": "explicit", "DATABASE_URL": f"sqlite:///{tmp_path/'o.db'}"})
    assert app.config["SECRET_KEY"] == "explicit"
    assert app.config["DATABASE_URL"].endswith("o.db")
    assert app.config["TEMPLATES_AUTO_RELOAD"] is True


def test_startup_creates_tables(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "test")
    app = create_app({"SECRET_KEY": "t", "DATABASE_URL": f"sqlite:///{tmp_path/'auto.db'}"})
    from sqlalchemy import inspect

    insp = inspect(app.extensions["sqlalchemy_engine"])
    assert insp.has_table("users")
    assert insp.has_table("feedback")
