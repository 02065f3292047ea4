"""
Shared fixtures: in-memory SQLite database, API client and accounts.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="portfolio-uploads-"))
os.environ.setdefault("SERVER_URL", "http://testserver")
os.environ.setdefault("LIKE_RATE_LIMIT_MAX", "50")
os.environ.setdefault("LIKE_RATE_LIMIT_WINDOW_SECONDS", "3600")
# Requests carry X-Forwarded-For as if a trusted proxy sat in front
os.environ.setdefault("TRUST_FORWARDED_FOR", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.models.user import User, UserRole
from app.core.security import get_password_hash
from app.core.rate_limit import limiter

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def db_setup():
    """Fresh tables and rate limiter state for every test."""
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def _create_user(db, username: str, role: UserRole, password: str = "secret123") -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _login(client, username: str, password: str = "secret123") -> dict:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_user(db):
    return _create_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def admin_headers(client, admin_user):
    return _login(client, "admin")


@pytest.fixture
def client_user(db):
    return _create_user(db, "alice", UserRole.CLIENT)


@pytest.fixture
def client_headers(client, client_user):
    return _login(client, "alice")
