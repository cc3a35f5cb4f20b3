import os
import pytest

from meal_planner.core.planner import Planner
from meal_planner.db.store import MemoryStore


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["APP_PASSWORD"] = "testpass"
    os.environ["SECRET_KEY"] = "test-secret-key-for-testing"
    os.environ["PURCHASE_ANIMATION_MS"] = "400"


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture(scope="session")
def authed_client(client):
    client.post("/login", data={"password": "testpass"}, follow_redirects=False)
    return client


@pytest.fixture
def fresh_plan(authed_client):
    """Authed client with an empty planner."""
    authed_client.post("/meal-plan/clear-all")
    return authed_client


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def planner(store):
    return Planner(store)
