import pytest
from fastapi.testclient import TestClient

from shiftdesk.api.deps import get_db
from shiftdesk.core.security import create_access_token
from shiftdesk.main import app


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(employee) -> dict:
        token = create_access_token({"sub": employee.id, "org": employee.organization_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
