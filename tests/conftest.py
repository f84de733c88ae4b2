import pytest
from fastapi.testclient import TestClient

from csvedit.main import app
from csvedit.routes import get_store
from csvedit.store import FileStore


@pytest.fixture
def store(tmp_path):
    return FileStore(tmp_path / "uploads")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def people(store):
    store.write("people.csv", b"name,age\nA,1\nB,2\nC,3\n")
    return "people.csv"
