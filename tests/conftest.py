"""Shared fixtures: an in-memory database per test and a TestClient bound to it"""
import os

# Must be set before config/database are imported
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_COLORS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database shared by every request of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.app_config = None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.state.app_config = None


# ============================================================================
# Data Builders
# ============================================================================

@pytest.fixture
def person(client):
    """A person with the default tracker created alongside it"""
    res = client.post("/people", json={"name": "Alex"})
    assert res.status_code == 201
    person = res.json()

    trackers = client.get("/trackers", params={"personId": person["id"]}).json()
    assert len(trackers) == 1
    return {
        "id": person["id"],
        "tracker_id": trackers[0]["id"],
        "tracker_type_id": trackers[0]["trackerTypeId"],
    }


@pytest.fixture
def add_category(client):
    def _add(tracker_type_id, name, **options):
        payload = {"trackerTypeId": tracker_type_id, "name": name}
        payload.update(options)
        return client.post("/categories", json=payload)
    return _add


@pytest.fixture
def start_round(client):
    def _start(person, start_date="2026-01-05", length_weeks=4, **extra):
        payload = {
            "personId": person["id"],
            "trackerId": person["tracker_id"],
            "startDate": start_date,
            "lengthWeeks": length_weeks,
        }
        payload.update(extra)
        return client.post("/rounds/start", json=payload)
    return _start


@pytest.fixture
def cycle(client):
    def _cycle(round_id, category_id, day, times=1):
        res = None
        for _ in range(times):
            res = client.post("/entries", json={
                "roundId": round_id,
                "categoryId": category_id,
                "date": day,
            })
            assert res.status_code == 200, res.text
        return res.json()
    return _cycle
