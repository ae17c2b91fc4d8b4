"""API fixtures — the FastAPI app over in-memory storage, driven through httpx.

Invariants:
    - Each test gets a fresh container (no shared users or posts)
    - Lifespan is not run; get_container is overridden instead
"""

import httpx
import pytest

from microblog.api.dependencies import build_container, get_container
from microblog.infrastructure.repositories import build_repositories
from microblog.main import app


@pytest.fixture
def container():
    return build_container(build_repositories(None), bcrypt_rounds=4)


@pytest.fixture
async def client(container):
    app.dependency_overrides[get_container] = lambda: container
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Register an account over HTTP and return headers acting as that user."""
    async def _signup(username: str, email: str | None = None) -> dict:
        resp = await client.post("/api/v1/auth/accounts", json={
            "username": username,
            "email": email or f"{username}@app.com",
            "password": "password1",
        })
        assert resp.status_code == 201, resp.text
        return {"X-User-ID": resp.json()["id"]}
    return _signup
