"""
Pytest configuration and fixtures for BornToMe API tests.
"""
import os
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.limiter import limiter
from app.main import app
from app.models.article import Article
from app.models.user import User
from app.auth import get_password_hash, create_access_token

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


def make_user(db, email, password="testpassword123", fullname="Test User"):
    user = User(
        fullname=fullname,
        email=email,
        datebirthday=date(1990, 1, 1),
        gender="female",
        role="user",
        password=get_password_hash(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def registration_payload(**overrides):
    payload = {
        "fullname": "Jane Doe",
        "email": "jane@example.com",
        "datebirthday": "1990-01-01",
        "gender": "female",
        "linkphoto": None,
        "role": "user",
        "password": "password1",
        "password_confirmation": "password1",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def test_user(db):
    return make_user(db, "test@example.com")


@pytest.fixture(scope="function")
def other_user(db):
    return make_user(db, "other@example.com", password="otherpassword123", fullname="Other User")


@pytest.fixture(scope="function")
def auth_token(db, test_user):
    return create_access_token(db, test_user)


@pytest.fixture(scope="function")
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture(scope="function")
def other_headers(db, other_user):
    return {"Authorization": f"Bearer {create_access_token(db, other_user)}"}


@pytest.fixture(scope="function")
def article(db, test_user):
    """An article authored by test_user."""
    article = Article(
        user_id=test_user.id,
        title="Hello",
        category="Tech",
        content="First body",
        status="draft",
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


@pytest.fixture(scope="function")
def registration_data():
    """Factory for a valid registration body; keyword overrides replace fields."""
    return registration_payload
