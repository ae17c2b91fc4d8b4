"""Storage Adapters — in-memory and SQLAlchemy implementations of the repository protocols.

Invariants:
    - Both adapter families return independent copies from every read
    - build_repositories() is the only place that chooses a backend
"""

from dataclasses import dataclass

from microblog.core.repository_protocols import (
    AccountRepository, PostRepository, UserRepository,
)
from microblog.infrastructure.database import DatabaseSessionManager
from microblog.infrastructure.repositories.in_memory import (
    InMemoryAccountRepository, InMemoryPostRepository, InMemoryUserRepository,
)
from microblog.infrastructure.repositories.sql import (
    SqlAccountRepository, SqlPostRepository, SqlUserRepository,
)


@dataclass
class Repositories:
    users: UserRepository
    posts: PostRepository
    accounts: AccountRepository


def build_repositories(db: DatabaseSessionManager | None) -> Repositories:
    """SQL adapters when a database manager is given, in-memory otherwise."""
    if db is None:
        return Repositories(
            users=InMemoryUserRepository(),
            posts=InMemoryPostRepository(),
            accounts=InMemoryAccountRepository(),
        )
    return Repositories(
        users=SqlUserRepository(db),
        posts=SqlPostRepository(db),
        accounts=SqlAccountRepository(db),
    )
