"""
Point the app at a throwaway SQLite database before anything imports liftlog.db,
and build the schema from the model metadata once per run.
"""
import os
import tempfile
import uuid

_tmpdir = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ.setdefault("DB_URL", f"sqlite:///{os.path.join(_tmpdir, 'liftlog.db')}")

import pytest

from liftlog.db import Base, SessionLocal, engine
from liftlog import models  # noqa: F401
from liftlog.security import create_access_token


@pytest.fixture(scope="session", autouse=True)
def schema():
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


class RecordingRevalidator:
    def __init__(self):
        self.paths = []

    def revalidate(self, path):
        self.paths.append(path)


@pytest.fixture
def revalidator():
    return RecordingRevalidator()


def new_user_id():
    return f"user_{uuid.uuid4().hex[:12]}"


def auth_headers(user_id=None):
    return {"Authorization": f"Bearer {create_access_token(user_id or new_user_id())}"}
