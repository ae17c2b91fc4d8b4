"""In-Memory Repositories — dict-backed adapters for tests and single-process demos.

Invariants:
    - Stored aggregates are deep-copied on the way in and on the way out, so a
      caller mutating a read result changes nothing until update() is called
    - Duplicate id/username/email on store raises DatabaseError, like a unique index
    - update/delete of a missing user raise NotFoundError

Design Decisions:
    - Copies instead of live references: keeps the two-write relationship hazard
      observable in tests exactly as it is against a networked store
"""

import copy

from microblog.core.accounts import Account
from microblog.core.domain_types import AccountId, PostId, UserId
from microblog.core.errors import DatabaseError, NotFoundError
from microblog.core.posts import Post, newest_first
from microblog.core.users import User


class InMemoryUserRepository:

    def __init__(self):
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> User | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_by_name(self, username: str) -> User | None:
        return self._find_by(lambda u: u.username == username)

    async def find_by_email(self, email: str) -> User | None:
        return self._find_by(lambda u: u.email == email)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        return [
            copy.deepcopy(self._users[i]) for i in dict.fromkeys(user_ids)
            if i in self._users
        ]

    async def store(self, user: User) -> None:
        for existing in self._users.values():
            if existing.id == user.id or existing.username == user.username \
                    or existing.email == user.email:
                raise DatabaseError("duplicate user", "store")
        self._users[user.id] = copy.deepcopy(user)

    async def update(self, user: User) -> None:
        if user.id not in self._users:
            raise NotFoundError()
        self._users[user.id] = copy.deepcopy(user)

    async def delete(self, user_id: UserId) -> None:
        if self._users.pop(user_id, None) is None:
            raise NotFoundError()

    def _find_by(self, predicate) -> User | None:
        for user in self._users.values():
            if predicate(user):
                return copy.deepcopy(user)
        return None


class InMemoryPostRepository:
    """Posts are frozen dataclasses, so they are shared without copying."""

    def __init__(self):
        self._posts: dict[PostId, Post] = {}

    async def store(self, post: Post) -> None:
        if post.id in self._posts:
            raise DatabaseError("duplicate post", "store")
        self._posts[post.id] = post

    async def find_by_id(self, post_id: PostId) -> Post | None:
        return self._posts.get(post_id)

    async def find_latest_posts_for_user(self, user_id: UserId) -> list[Post]:
        return newest_first([p for p in self._posts.values() if p.author_id == user_id])

    async def find_latest_posts_for_user_and_friends(self, user: User) -> list[Post]:
        authors = {user.id, *user.friends}
        return newest_first([p for p in self._posts.values() if p.author_id in authors])


class InMemoryAccountRepository:

    def __init__(self):
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        account = self._accounts.get(account_id)
        return copy.deepcopy(account) if account else None

    async def find_by_name(self, username: str) -> Account | None:
        for account in self._accounts.values():
            if account.username == username:
                return copy.deepcopy(account)
        return None

    async def find_by_email(self, email: str) -> Account | None:
        for account in self._accounts.values():
            if account.email == email:
                return copy.deepcopy(account)
        return None

    async def store(self, account: Account) -> None:
        if account.id in self._accounts:
            raise DatabaseError("duplicate account", "store")
        self._accounts[account.id] = copy.deepcopy(account)
