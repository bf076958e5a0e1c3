import os
import sys
import tempfile
from pathlib import Path


# Ensure `lawoffice` package is importable when running pytest from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read at import time; point them at throwaway stores first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="lawoffice-tests-")
os.environ.pop("DEV_USER_ID", None)

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from lawoffice.core.auth import CurrentUser  # noqa: E402
from lawoffice.core.database import make_engine  # noqa: E402
from lawoffice.db.base import Base  # noqa: E402
from lawoffice.db.init_db import seed_courts  # noqa: E402
from lawoffice.services.storage_service import ObjectStore  # noqa: E402


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    seed_courts(s)
    yield s
    s.close()


@pytest.fixture
def user():
    return CurrentUser(id="lawyer-1", email="lawyer@example.com")


@pytest.fixture
def store(tmp_path):
    return ObjectStore(tmp_path / "storage")


@pytest.fixture
def make_case(db, user):
    from lawoffice.services.case_service import create_case

    def _make(title="قضية اختبار", **extra):
        res = create_case(db, user, {"title": title, **extra})
        assert res.success, res.error
        return res.id

    return _make


@pytest.fixture
def http(session_factory, store):
    from fastapi.testclient import TestClient

    from lawoffice.api.deps import get_db, get_store
    from lawoffice.main import create_app

    app = create_app()

    def _db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_store] = lambda: store

    s = session_factory()
    seed_courts(s)
    s.close()

    with TestClient(app) as c:
        yield c
