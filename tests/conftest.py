# tests/conftest.py
import os
import sys
from types import SimpleNamespace

import pytest

# so that `from app import create_app` works when pytest runs from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app  # noqa: E402
from config import TestingConfig  # noqa: E402
from extensions import db  # noqa: E402
from models import User  # noqa: E402
from security import hash_password  # noqa: E402

PASSWORD = "correct-horse-battery"


# Requests get their own app context (Flask-Login caches the user on `g`),
# so fixtures and tests open a context only around direct DB work.
@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def anon(app):
    """A second browser with no cookies."""
    return app.test_client()


def make_user(app, username, role, password=PASSWORD):
    with app.app_context():
        user = User(
            username=username,
            email=f"{username}@fullsco.org",
            full_name=username.title(),
            password=hash_password(password),
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        return SimpleNamespace(id=user.id, username=username, password=password, role=role)


@pytest.fixture()
def admin_user(app):
    return make_user(app, "admin", "admin")


@pytest.fixture()
def editor_user(app):
    return make_user(app, "editor", "editor")


@pytest.fixture()
def login(client):
    def _login(user, on=None):
        target = on or client
        resp = target.post("/api/auth/login", json={"username": user.username, "password": user.password})
        assert resp.status_code == 200, resp.get_json()
        return resp
    return _login


@pytest.fixture()
def as_admin(client, admin_user, login):
    login(admin_user)
    return client


@pytest.fixture()
def as_editor(client, editor_user, login):
    login(editor_user)
    return client


def add_rows(app, *rows):
    """Insert model instances directly; returns their ids."""
    with app.app_context():
        db.session.add_all(rows)
        db.session.commit()
        return [row.id for row in rows]


@pytest.fixture()
def add(app):
    return lambda *rows: add_rows(app, *rows)


@pytest.fixture()
def user_factory(app):
    return lambda username, role="editor", password=PASSWORD: make_user(app, username, role, password)
