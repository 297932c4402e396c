import os
import tempfile

# Point everything at throwaway locations before the app is imported.
_scratch = tempfile.mkdtemp(prefix="chatapi-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_scratch}/default.db"
os.environ["DATA_DIR"] = os.path.join(_scratch, "json")
os.environ["UPLOAD_DIR"] = os.path.join(_scratch, "uploads")
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["AUTH_MODE"] = "token"
os.environ["ENFORCE_CHAT_MEMBERSHIP"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from main import app
from chatapi.api.deps import get_store
from chatapi.core.config import get_upload_dir
from chatapi.db.session import Base, make_engine
from chatapi.store import JsonStore, SqlStore


@pytest.fixture
def sql_sessions(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path}/chat.db")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def sql_store(sql_sessions):
    store = SqlStore(sql_sessions())
    yield store
    store.close()


@pytest.fixture
def json_store(tmp_path):
    return JsonStore(tmp_path / "json")


@pytest.fixture(params=["sql", "json"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    def override_get_store():
        yield store

    app.dependency_overrides[get_store] = override_get_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir():
    return get_upload_dir()


def register(client, username, password="password"):
    response = client.post("/api/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def login(client, username, password="password"):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice(client):
    user = register(client, "alice", "pw1")
    return {**user, "headers": login(client, "alice", "pw1")}


@pytest.fixture
def bob(client):
    user = register(client, "bob", "pw2")
    return {**user, "headers": login(client, "bob", "pw2")}
