"""Shared pytest fixtures and test helpers for handover tests."""

import os

os.environ["HANDOVER_ENV"] = "testing"

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from config.base import DatabaseConfig  # noqa: E402
from core.db import Base, make_engine  # noqa: E402
from core.models import HandoverNote, HandoverRecipient, User  # noqa: E402


USER_NAMES = {
    1: "Hong Gildong",
    2: "Kim Cheolsu",
    3: "Lee Younghee",
    4: "Park Minsu",
    5: "Choi Jiyoung",
}


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = make_engine(DatabaseConfig(url="sqlite://"))
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    """Create a session for direct repository tests."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def users(session_factory):
    """Seed the user directory with users 1..5."""
    session = session_factory()
    seeded = {}
    for user_id, name in USER_NAMES.items():
        seeded[user_id] = create_test_user(session, user_id, name)
    session.commit()
    session.close()
    return seeded


@pytest.fixture
def modify_service(session_factory):
    from services.application import HandoverModifyService
    return HandoverModifyService(session_factory)


@pytest.fixture
def query_service(session_factory):
    from services.application import HandoverQueryService
    return HandoverQueryService(session_factory, max_page_size=50)


@pytest.fixture
def client(session_factory):
    """FastAPI test client wired to the per-test database."""
    from fastapi.testclient import TestClient

    from app import create_app
    from routes.handover import get_modify_service, get_query_service
    from services.application import HandoverModifyService, HandoverQueryService

    app = create_app()
    app.dependency_overrides[get_modify_service] = lambda: HandoverModifyService(session_factory)
    app.dependency_overrides[get_query_service] = lambda: HandoverQueryService(
        session_factory, max_page_size=50
    )
    return TestClient(app)


# Test helper functions (not fixtures, but available for import)


def create_test_user(session, user_id, username, email=None):
    """
    Helper to add a directory user with a fixed id.

    Args:
        session: SQLAlchemy session
        user_id: Primary key to assign
        username: Display name
        email: Optional email, derived from the id when omitted

    Returns:
        The flushed User

    """
    user = User.create(
        email=email or f"user{user_id}@example.com",
        username=username,
        employee_no=f"EMP{user_id:03d}",
    )
    user.id = user_id
    session.add(user)
    session.flush()
    return user


def create_test_note(session, author, recipients=(), title="Title", content="Content"):
    """
    Helper to insert a note and its links directly, bypassing the services.

    Returns:
        The flushed HandoverNote

    """
    note = HandoverNote.create(author, title, content)
    session.add(note)
    session.flush()
    for recipient in recipients:
        session.add(HandoverRecipient.create(note, recipient))
    session.flush()
    return note
