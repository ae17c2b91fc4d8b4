"""Service test fixtures — in-memory repositories and a ProfileService over them.

Invariants:
    - Every test gets fresh repositories (no shared state between tests)
    - register() goes through create_profile, the same path account events use
"""

import pytest

from microblog.core.domain_types import new_id
from microblog.infrastructure.repositories.in_memory import (
    InMemoryAccountRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
)
from microblog.services.profile_service import ProfileService


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def posts():
    return InMemoryPostRepository()


@pytest.fixture
def accounts():
    return InMemoryAccountRepository()


@pytest.fixture
def service(users, posts):
    return ProfileService(users, posts)


@pytest.fixture
def register(service, users):
    """Create a profile and return the stored User."""
    async def _register(username: str, email: str | None = None):
        await service.create_profile(new_id(), username, email or f"{username}@app.com")
        return await users.find_by_name(username)
    return _register
