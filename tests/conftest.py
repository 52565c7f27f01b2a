import os
import shutil
import tempfile

# Configure an isolated file database before the app is imported; a file
# (not :memory:) gives each request its own connection, as in production
_DB_DIR = tempfile.mkdtemp(prefix="wishlist-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.pop("REDIS_URL", None)
os.environ.pop("SEED_ADMIN_EMAIL", None)
os.environ.pop("SEED_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

from wishlist_api.database import Base, SessionLocal, engine
from wishlist_api.main import app
from wishlist_api.models import ROLE_ADMIN, ROLE_USER, User
from wishlist_api.security_utils import hash_password

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "user@example.com"
OTHER_EMAIL = "other@example.com"
PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="session", autouse=True)
def database_file():
    yield
    engine.dispose()
    shutil.rmtree(_DB_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def tables():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(tables):
    with TestClient(app) as test_client:
        yield test_client


def create_user(db, email, roles, status="active", password=PASSWORD):
    user = User(
        email=email,
        full_name=email.split("@")[0].title(),
        password_hash=hash_password(password),
        roles=roles,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(client, email, password=PASSWORD):
    response = client.post("/auth/token", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin(db):
    return create_user(db, ADMIN_EMAIL, [ROLE_ADMIN, ROLE_USER])


@pytest.fixture
def user(db):
    return create_user(db, USER_EMAIL, [ROLE_USER])


@pytest.fixture
def other_user(db):
    return create_user(db, OTHER_EMAIL, [ROLE_USER])


@pytest.fixture
def admin_headers(client, admin):
    return auth_headers(client, ADMIN_EMAIL)


@pytest.fixture
def user_headers(client, user):
    return auth_headers(client, USER_EMAIL)


@pytest.fixture
def other_headers(client, other_user):
    return auth_headers(client, OTHER_EMAIL)


@pytest.fixture
def make_wishlist(client):
    """Create a wishlist (optionally with items, appended in order) and return its JSON"""

    def _make(headers, name="Birthday", items=(), privacy="Private"):
        response = client.post(
            "/api/wishlist", json={"name": name, "privacy": privacy}, headers=headers
        )
        assert response.status_code == 200, response.text
        wishlist = response.json()
        for item_name in items:
            created = client.post(
                f"/api/wishlist/{wishlist['id']}/item", json={"name": item_name}, headers=headers
            )
            assert created.status_code == 200, created.text
        return wishlist

    return _make


@pytest.fixture
def item_names(client):
    """Names of a wishlist's items in their current order"""

    def _names(wishlist_id, headers):
        response = client.get(f"/api/wishlist/{wishlist_id}/item", headers=headers)
        assert response.status_code == 200, response.text
        return [item["name"] for item in response.json()]

    return _names
