"""
Shared fixtures. The database is an in-memory SQLite shared by the whole
process; every test starts from empty tables and an empty response cache.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient

from politiquensemble import models  # noqa: F401
from politiquensemble.core.cache import response_cache
from politiquensemble.core.database import Base, SessionLocal, engine
from politiquensemble.core.security import get_password_hash
from politiquensemble.main import app
from politiquensemble.migrations import seed_roles
from politiquensemble.models import CustomRole, User

PASSWORD = "motdepasse"


@pytest.fixture(autouse=True)
def reset_state():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    response_cache.clear()
    yield
    response_cache.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def roles(db):
    """Default permissions and roles, keyed by role name."""
    seed_roles(db)
    return {role.name: role for role in db.query(CustomRole).all()}


@pytest.fixture
def make_user(db):
    def _make_user(username, role="editor", custom_role=None, **kwargs):
        user = User(
            username=username,
            hashed_password=get_password_hash(PASSWORD),
            display_name=kwargs.pop("display_name", username.capitalize()),
            role=role,
            custom_role_id=custom_role.id if custom_role is not None else None,
            **kwargs
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


def _login(client, username):
    response = client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def login_as():
    """Return a fresh client logged in as ``username``."""
    return lambda username: _login(TestClient(app), username)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", role="admin")


@pytest.fixture
def admin_client(admin_user):
    return _login(TestClient(app), admin_user.username)


@pytest.fixture
def content_manager(make_user, roles):
    """Custom-role user who may manage articles but not videos."""
    return make_user("redacteur", role="none", custom_role=roles["content_manager"])


@pytest.fixture
def editor_client(content_manager):
    return _login(TestClient(app), content_manager.username)
