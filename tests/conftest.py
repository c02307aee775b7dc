# tests/conftest.py
import os

# The app's own engine must not touch a file on disk during tests
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# Make sure models are imported so Base has all tables
from league_iq import models  # noqa: F401,E402
from league_iq.db import Base, get_db  # noqa: E402
from league_iq.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+pysqlite://"


@pytest.fixture()
def engine():
    # Fresh in-memory DB per test: the current-gameweek flag is global state
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # share the same memory DB across sessions
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session):
    # Override app DB dependency to use our in-memory session
    def _get_db_override():
        yield db_session

    app.dependency_overrides[get_db] = _get_db_override

    from starlette.testclient import TestClient

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
