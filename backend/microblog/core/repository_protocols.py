"""Boundary Protocols — persistence contracts between the core and storage adapters.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Reads return independent copies: mutating a returned aggregate changes
      nothing until update() is awaited
    - Single lookups signal "missing" with None; find_by_ids silently omits misses
    - Infrastructure failures surface as DatabaseError

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no base class
    - Async in Protocol: adapters do IO; services await calls strictly in sequence
"""

from typing import Protocol

from microblog.core.accounts import Account
from microblog.core.domain_types import AccountId, PostId, UserId
from microblog.core.posts import Post
from microblog.core.users import User


class UserRepository(Protocol):
    """Contract for user persistence — implemented by storage adapters."""
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def find_by_name(self, username: str) -> User | None: ...
    async def find_by_email(self, email: str) -> User | None: ...
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]: ...
    async def store(self, user: User) -> None: ...
    async def update(self, user: User) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...


class PostRepository(Protocol):
    """Contract for post persistence — implemented by storage adapters."""
    async def store(self, post: Post) -> None: ...
    async def find_by_id(self, post_id: PostId) -> Post | None: ...
    async def find_latest_posts_for_user(self, user_id: UserId) -> list[Post]: ...
    async def find_latest_posts_for_user_and_friends(self, user: User) -> list[Post]: ...


class AccountRepository(Protocol):
    """Contract for credential persistence — used by the authentication context only."""
    async def find_by_id(self, account_id: AccountId) -> Account | None: ...
    async def find_by_name(self, username: str) -> Account | None: ...
    async def find_by_email(self, email: str) -> Account | None: ...
    async def store(self, account: Account) -> None: ...


class AccountEvents(Protocol):
    """Listener consulted before an account is stored and notified after.

    ensure_available raises ExistingUsernameError / ExistingEmailError when the
    listener already holds that username or email under another identity.
    """
    async def ensure_available(self, username: str, email: str) -> None: ...
    async def account_created(self, account_id: str, username: str, email: str) -> None: ...
