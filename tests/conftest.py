# File: tests/conftest.py

"""
Shared fixtures: a fresh app on an in-memory SQLite database per test.

To run:
    pytest -q
"""

import pytest
from fastapi.testclient import TestClient

from user_api.core.config import Settings
from user_api.db.init_db import drop_db, init_db
from user_api.main import create_application
from user_api.schemas.user import CurrentUser, UserCreate
from user_api.services.user_service import UserService


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_host="localhost",
        database_port=5432,
        database_name="users_test",
        database_user="test",
        database_password="test",
        database_url="sqlite+pysqlite:///:memory:",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    application = create_application(settings)
    init_db(application.state.engine)
    yield application
    drop_db(application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(app, db):
    return UserService(
        db=db,
        hasher=app.state.hasher,
        tokens=app.state.tokens,
        translator=app.state.translator,
    )


@pytest.fixture
def alice(service):
    return service.create(UserCreate(name="Alice", email="a@x.com", password="secret1"))


@pytest.fixture
def admin(service):
    return service.create(
        UserCreate(name="Root", email="root@x.com", password="rootpass", role="admin")
    )


@pytest.fixture
def as_admin(admin):
    return CurrentUser(id=admin.id, email=admin.email, role=admin.role)


@pytest.fixture
def as_user(alice):
    return CurrentUser(id=alice.id, email=alice.email, role=alice.role)


def login(client, email, password):
    resp = client.post("/users/login", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["access_token"]


@pytest.fixture
def user_headers(client, alice):
    return {"Authorization": f"Bearer {login(client, 'a@x.com', 'secret1')}"}


@pytest.fixture
def admin_headers(client, admin):
    return {"Authorization": f"Bearer {login(client, 'root@x.com', 'rootpass')}"}
