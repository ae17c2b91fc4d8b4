"""Profile Service — the facade every caller reaches the microblog core through.

Invariants:
    - create_profile is idempotent on username OR email
    - edit_profile: absent field ⇒ untouched; bio "" ⇒ cleared; username "" ⇒ rejected
    - edit_profile with no fields succeeds without reading or writing anything
    - update_last_seen treats a malformed id as NotFound

Design Decisions:
    - MicroblogService Protocol names the capability set; ProfileService is the
      production implementation and tests substitute fakes structurally
    - Composition over inheritance: graph, posts and timeline are collaborators
"""

import logging
from typing import Protocol

from microblog.core.domain_types import UNSET, PostId, UserId
from microblog.core.errors import (
    ExistingEmailError,
    ExistingUsernameError,
    InvalidIDError,
    InvalidUsernameError,
    NotFoundError,
)
from microblog.core.posts import Post, newest_first
from microblog.core.repository_protocols import PostRepository, UserRepository
from microblog.core.users import EditProfileRequest, User, utcnow
from microblog.core.validation import is_well_formed_id, validate_username
from microblog.core.views import PostView, Profile, UserInfo, build_profile
from microblog.services.post_lifecycle import PostLifecycle
from microblog.services.relationship_graph import RelationshipGraph
from microblog.services.timeline import TimelineAggregator

logger = logging.getLogger(__name__)


class MicroblogService(Protocol):
    """Operations exposed to the transport layer."""
    async def create_profile(self, user_id: str, username: str, email: str) -> None: ...
    async def ensure_available(self, username: str, email: str) -> None: ...
    async def get_profile(self, username: str) -> Profile: ...
    async def edit_profile(self, user_id: UserId, request: EditProfileRequest) -> None: ...
    async def update_last_seen(self, user_id: UserId) -> None: ...
    async def create_post(self, author_id: UserId, body: str) -> PostId: ...
    async def get_post(self, post_id: PostId) -> Post: ...
    async def get_user_posts(self, username: str) -> list[Post]: ...
    async def get_timeline(self, user_id: UserId) -> list[PostView]: ...
    async def create_relationship(self, actor_id: UserId, target_username: str) -> None: ...
    async def remove_relationship(self, actor_id: UserId, target_username: str) -> None: ...
    async def get_user_friends(self, username: str) -> list[UserInfo]: ...
    async def get_user_followers(self, username: str) -> list[UserInfo]: ...
    async def repair_relationships(self, user_id: UserId) -> int: ...


class ProfileService:
    """Composes relationship graph, post lifecycle and timeline into profile views."""

    def __init__(self, users: UserRepository, posts: PostRepository):
        self.users = users
        self.posts = posts
        self.graph = RelationshipGraph(users)
        self.post_lifecycle = PostLifecycle(users, posts)
        self.timeline = TimelineAggregator(users, posts)

    # ─── Profile ─────────────────────────────────────────────────

    async def create_profile(self, user_id: str, username: str, email: str) -> None:
        """Create the profile for a freshly registered account, once."""
        if await self._user_exists(username, email):
            logger.info(
                f"Profile for {username} already exists; skipping",
                extra={"user_id": user_id},
            )
            return
        now = utcnow()
        user = User(
            id=UserId(user_id), username=username, email=email,
            created_at=now, last_seen=now,
        )
        await self.users.store(user)
        logger.info(f"Profile created for {username}", extra={"user_id": user_id})

    async def ensure_available(self, username: str, email: str) -> None:
        """Reject a username or email some profile already uses (renames included)."""
        if await self.users.find_by_name(username) is not None:
            raise ExistingUsernameError()
        if await self.users.find_by_email(email) is not None:
            raise ExistingEmailError()

    async def get_profile(self, username: str) -> Profile:
        if not username:
            raise InvalidUsernameError()
        user = await self.users.find_by_name(username)
        if user is None:
            raise NotFoundError()
        posts = newest_first(await self.posts.find_latest_posts_for_user(user.id))
        return build_profile(user, posts)

    async def edit_profile(self, user_id: UserId, request: EditProfileRequest) -> None:
        if not is_well_formed_id(user_id):
            raise InvalidIDError()
        if request.is_empty:
            return

        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError()

        if request.username is not UNSET:
            await self._change_username(user, request.username)
        if request.bio is not UNSET:
            user.update_bio(request.bio)

        await self.users.update(user)
        logger.info("Profile edited", extra={"user_id": user.id})

    async def update_last_seen(self, user_id: UserId) -> None:
        if not is_well_formed_id(user_id):
            raise NotFoundError()
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        user.last_seen = utcnow()
        await self.users.update(user)

    # ─── Posts & timeline ────────────────────────────────────────

    async def create_post(self, author_id: UserId, body: str) -> PostId:
        return await self.post_lifecycle.create_post(author_id, body)

    async def get_post(self, post_id: PostId) -> Post:
        return await self.post_lifecycle.get_post(post_id)

    async def get_user_posts(self, username: str) -> list[Post]:
        return await self.post_lifecycle.get_user_posts(username)

    async def get_timeline(self, user_id: UserId) -> list[PostView]:
        return await self.timeline.get_timeline(user_id)

    # ─── Relationships ───────────────────────────────────────────

    async def create_relationship(self, actor_id: UserId, target_username: str) -> None:
        await self.graph.create_relationship(actor_id, target_username)

    async def remove_relationship(self, actor_id: UserId, target_username: str) -> None:
        await self.graph.remove_relationship(actor_id, target_username)

    async def get_user_friends(self, username: str) -> list[UserInfo]:
        return await self.graph.list_friends(username)

    async def get_user_followers(self, username: str) -> list[UserInfo]:
        return await self.graph.list_followers(username)

    async def repair_relationships(self, user_id: UserId) -> int:
        return await self.graph.repair(user_id)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _user_exists(self, username: str, email: str) -> bool:
        if await self.users.find_by_name(username) is not None:
            return True
        return await self.users.find_by_email(email) is not None

    async def _change_username(self, user: User, requested: str) -> None:
        username = requested.strip()
        if username == user.username:
            return
        if not username:
            raise InvalidUsernameError()
        validate_username(username)
        existing = await self.users.find_by_name(username)
        if existing is not None and existing.id != user.id:
            raise ExistingUsernameError()
        user.username = username
