import os
import tempfile

# must be set before chatlog.ledger.db builds its engine
_TMP = tempfile.mkdtemp(prefix="chatlog-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "test.sqlite3")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient

from chatlog.ledger.db import SessionLocal, engine
from chatlog.ledger.models import Base, ChatEvent


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        session.query(ChatEvent).delete()
        session.commit()
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    from chatlog.main import app

    return TestClient(app)
