"""Shared pytest fixtures

Environment overrides must be set before config is first imported.
"""

import os

os.environ.setdefault("SECUREVOTE_COOKIE_SECURE", "false")
os.environ.setdefault("SECUREVOTE_JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("SECUREVOTE_LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from config import config
from database.db import ElectionDatabase
from server.main import create_app
from userland.auth.jwt import init_jwt, is_initialized


@pytest.fixture(scope="session", autouse=True)
def jwt_secret():
    if not is_initialized():
        init_jwt(config.JWT_SECRET)
    return config.JWT_SECRET


@pytest.fixture
def db(tmp_path):
    database = ElectionDatabase(db_path=str(tmp_path / "securevote.db"))
    yield database
    database.close()


@pytest.fixture
def client(db):
    app = create_app(database=db)
    with TestClient(app) as test_client:
        yield test_client
