import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.modules.auth.models.session import Session as SessionModel
from app.modules.user_management.models.user import User

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "Password123"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db_session, name: str, email: str = None) -> User:
    user = User(
        name=name,
        email=email or f"{name.lower()}@example.com",
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session) -> User:
    """Create a test user."""
    return _make_user(db_session, "alice")


@pytest.fixture
def other_user(db_session) -> User:
    return _make_user(db_session, "bob")


@pytest.fixture
def make_user(db_session):
    """Create additional users by name."""

    def _make(name: str, email: str = None) -> User:
        return _make_user(db_session, name, email)

    return _make


def _login(client, user: User) -> str:
    """Log the client in as user and return the CSRF token of the new session"""
    response = client.post(
        "/login",
        data={"username": user.name, "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303
    token = client.cookies.get("session")
    assert token
    return _csrf_token_for(token)


def _csrf_token_for(session_token: str) -> str:
    db = TestingSessionLocal()
    try:
        return db.query(SessionModel).filter(SessionModel.id == session_token).one().csrf_token
    finally:
        db.close()


@pytest.fixture
def authenticated_client(client, test_user):
    """Client logged in as test_user; the CSRF token is on client.csrf_token"""
    client.csrf_token = _login(client, test_user)
    return client


@pytest.fixture
def login_as(client):
    """Log the client in as the given user, returning the session's CSRF token"""

    def _login_as(user: User) -> str:
        return _login(client, user)

    return _login_as


@pytest.fixture
def make_post(db_session):
    """Create a post directly through the post service."""
    from app.modules.posts.schemas.post import PostCreate
    from app.modules.posts.services.post import create_post

    def _make_post(author: User, title: str = "Hello", categories=None, content: str = "First post"):
        post_in = PostCreate(title=title, content=content, categories=categories or ["Technology"])
        return create_post(db_session, post_in, author.id)

    return _make_post
