import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from openplay.database import build_engine, get_session, init_db
from openplay.main import app
from openplay.models.session import RotationMode
from tests.helpers import make_session

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup
# ============================================================================
# 1. build_engine() pins sqlite:///:memory: to one connection (StaticPool)
#    so ALL sessions share the same DB, with check_same_thread=False
# 2. init_db(test_engine) registers SessionRecord and creates the table
# 3. App dependency overridden to use test_engine (see client_fixture)
test_engine = build_engine(TEST_DATABASE_URL)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session; tables are dropped after each test."""
    init_db(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place for the
    entire duration, so the app never touches its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def full_rotation_session():
    """Session with Alice, Bob, Cara, Dee queued in that order."""
    return make_session(RotationMode.full_rotation, names=["Alice", "Bob", "Cara", "Dee"])
