from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
os.environ["MESSAGE_CONSUMER_ENABLED"] = "false"

import intake.db.session as db_session
from intake.main import app


@pytest.fixture()
def session_factory(tmp_path):
    database_path = tmp_path / "test.db"
    db_session.configure_engine(f"sqlite:///{database_path}")
    db_session.init_db()
    assert db_session.SessionLocal is not None
    return db_session.SessionLocal


@pytest.fixture()
def client(session_factory):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
