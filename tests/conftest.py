"""
Departmental Portal - Test Configuration and Fixtures
"""
import os
from typing import Generator

# Set testing environment before the app reads its settings
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["RATE_LIMIT_PER_MINUTE"] = "5"
os.environ["RESEND_API_KEY"] = ""
os.environ["ONESIGNAL_APP_ID"] = ""
os.environ["ONESIGNAL_REST_API_KEY"] = ""
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_S3_BUCKET_NAME"] = "portal-test-bucket"

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.models.user_models import User, UserRole
from app.services.authorization import Caller
from app.services.dependencies import create_user_access_token
from app.utils.hashing import get_password_hash

fake = Faker()

TEST_PASSWORD = "password123"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session")
def password_hash() -> str:
    # hashing is slow; every fixture user shares one hash
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client bound to the per-test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: Session, password_hash: str):
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.STUDENT, email: str | None = None, **kwargs) -> User:
        counter["n"] += 1
        if role == UserRole.STUDENT and "roll_number" not in kwargs:
            kwargs["roll_number"] = f"CS-{counter['n']:03d}"
        user = User(
            email=email or f"user{counter['n']}.{fake.user_name()}@example.com",
            name=fake.name(),
            password=password_hash,
            role=role,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def student(make_user) -> User:
    return make_user(UserRole.STUDENT)


@pytest.fixture
def other_student(make_user) -> User:
    return make_user(UserRole.STUDENT)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(UserRole.ADMIN)


@pytest.fixture
def other_admin(make_user) -> User:
    return make_user(UserRole.ADMIN)


@pytest.fixture
def super_admin(make_user) -> User:
    return make_user(UserRole.SUPER_ADMIN)


@pytest.fixture
def teacher(make_user) -> User:
    return make_user(UserRole.TEACHER)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_access_token(user)}"}


def caller_for(user: User) -> Caller:
    return Caller(id=user.id, role=user.role, email=user.email)
