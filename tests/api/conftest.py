import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.auth import create_access_token
from app.core.db import get_db
from app.main import app
from app.services.location_store import get_location_store


@pytest.fixture
def client(engine, store):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def _get_test_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_location_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    def _make(handle: str, name: str | None = None):
        resp = client.post("/v1/profiles", json={"name": name or handle.title(), "handle": handle})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["profile"]["user_id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user_id: str):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
