"""Storage fixtures — each repository test runs against both adapter families."""

import pytest

from microblog.infrastructure.database import DatabaseSessionManager
from microblog.infrastructure.repositories import build_repositories


@pytest.fixture
async def db(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'microblog.db'}")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture(params=["memory", "sql"])
async def repos(request, tmp_path):
    if request.param == "memory":
        yield build_repositories(None)
        return
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'microblog.db'}")
    await manager.create_all()
    yield build_repositories(manager)
    await manager.dispose()
