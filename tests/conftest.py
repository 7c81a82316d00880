"""Shared fixtures: in-memory database, API client and seeded accounts."""

import os

# Configure before any hr_portal import reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "testing"
os.environ["PRIMARY_ADMIN_EMAIL"] = "admin@hrportal.test"
os.environ["PRIMARY_ADMIN_PASSWORD"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from hr_portal.application.services.auth_service import create_access_token, create_user
from hr_portal.core.rate_limit import reset_rate_limiters
from hr_portal.domain.models.user import ROLE_ADMIN, ROLE_HR, User
from hr_portal.infrastructure.database import Base, SessionLocal, engine
from hr_portal.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from hr_portal.main import app

PRIMARY_ADMIN_EMAIL = "admin@hrportal.test"
PASSWORD = "password123"


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limiters()
    yield
    reset_rate_limiters()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repo(db):
    return SQLAlchemyUserRepository(db, User)


@pytest.fixture
def client():
    """Test client fixture."""
    return TestClient(app)


@pytest.fixture
def primary_admin(user_repo):
    return create_user(user_repo, email=PRIMARY_ADMIN_EMAIL, password=PASSWORD, role=ROLE_ADMIN)


@pytest.fixture
def second_admin(user_repo):
    return create_user(user_repo, email="second.admin@hrportal.test", password=PASSWORD, role=ROLE_ADMIN)


@pytest.fixture
def hr_user(user_repo):
    return create_user(user_repo, email="hr@hrportal.test", password=PASSWORD, role=ROLE_HR)


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(primary_admin):
    return bearer(primary_admin)


@pytest.fixture
def second_admin_headers(second_admin):
    return bearer(second_admin)


@pytest.fixture
def hr_headers(hr_user):
    return bearer(hr_user)
