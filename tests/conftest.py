import pytest

from quizstore.db import Store
from quizstore.samples import load_bundle
from quizstore.sidechannel import MemoryStore
from quizstore.state import AppState


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_quizstore.db")
    return db_path


@pytest.fixture
def store(tmp_db):
    """A Store handle on a fresh temporary database."""
    s = Store(tmp_db)
    yield s
    s.close()


@pytest.fixture
def bundle():
    return load_bundle()


@pytest.fixture
def local_storage():
    return MemoryStore()


@pytest.fixture
def session_storage():
    return MemoryStore()


@pytest.fixture
def app_state():
    return AppState()
