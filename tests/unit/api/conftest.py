"""Fixtures for API unit tests: per-test SQLite database, AsyncClient, registered users."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


@pytest.fixture
def app_with_overrides(session_factory):
    """App with DB session and auth session factory bound to the test database."""
    from app.api import dependencies
    from app.infrastructure.database import session as db_session

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_session.get_db] = _get_db
    app.dependency_overrides[dependencies.get_session_factory] = lambda: session_factory
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(async_client):
    """Register an account through the API and return bearer headers for it."""

    async def _register(email, name="Asha", role="student", password="secret123", **profile):
        body = {"email": email, "password": password, "name": name, "role": role, **profile}
        r = await async_client.post("/auth/register", json=body)
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _register


@pytest.fixture
async def student_headers(register):
    return await register("asha@campus.edu", name="Asha", department="CS", student_id="S-100")


@pytest.fixture
async def admin_headers(register):
    return await register("dean@campus.edu", name="Dean Office", role="admin")
