import os

# Keep the module-level engine off PostgreSQL; each test binds its own database below.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from app import app
from database import Base, get_db
import models


def _sqlite_sessions(path):
    engine = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _override(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()
    return _get_db


@pytest.fixture
def session_factory(tmp_path):
    engine, factory = _sqlite_sessions(tmp_path / "readings.db")
    Base.metadata.create_all(bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def client(session_factory):
    app.dependency_overrides[get_db] = _override(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(tmp_path):
    """Client whose store has no readings table, so every statement fails."""
    engine, factory = _sqlite_sessions(tmp_path / "empty.db")
    app.dependency_overrides[get_db] = _override(factory)
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def post_reading(client):
    def _post(pot_id, raw_value=512, moisture_percent=40.5, location=None):
        body = {"pot_id": pot_id, "raw_value": raw_value, "moisture_percent": moisture_percent}
        if location is not None:
            body["location"] = location
        resp = client.post("/api/moisture", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _post


@pytest.fixture
def count_rows(session_factory):
    def _count():
        with session_factory() as db:
            return db.scalar(select(func.count()).select_from(models.Reading))
    return _count
