"""Relationship Graph — follow/unfollow over two User aggregates.

Invariants:
    - Edge states are absent/present, decided by the target's followers list;
      creating a present edge or removing an absent one is a conflict
    - A half edge (friends entry without the mirror follower entry) counts as
      absent: following again completes it
    - Failure order: InvalidID → InvalidUsername → NotFound → self → conflict
    - Self detection compares identifiers, not display names
    - Actor is persisted before target; the actor's friends list is the
      authoritative side of a half-written edge

Design Decisions:
    - Two writes, not one: the repositories expose no multi-key transaction.
      A failed target write triggers a compensating write of the actor's
      pre-mutation snapshot; if that also fails the edge stays asymmetric and
      repair() reconciles it on demand
"""

import logging

from microblog.core.domain_types import UserId
from microblog.core.errors import (
    AlreadyFollowingError,
    CantFollowSelfError,
    CantUnfollowSelfError,
    DatabaseError,
    InvalidIDError,
    InvalidUsernameError,
    NotFollowingError,
    NotFoundError,
)
from microblog.core.repository_protocols import UserRepository
from microblog.core.users import User
from microblog.core.validation import is_well_formed_id
from microblog.core.views import UserInfo, build_user_infos

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """Maintains the symmetric friends/followers edge between users."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def create_relationship(self, actor_id: UserId, target_username: str) -> None:
        actor, target = await self._resolve_pair(actor_id, target_username)
        if actor.id == target.id:
            raise CantFollowSelfError()
        if actor.id in target.followers:
            raise AlreadyFollowingError()

        before = actor.snapshot()
        actor.follow(target)
        await self._persist_pair(actor, target, before, "follow")
        logger.info(
            f"{actor.username} now follows {target.username}",
            extra={"user_id": actor.id, "operation": "follow"},
        )

    async def remove_relationship(self, actor_id: UserId, target_username: str) -> None:
        actor, target = await self._resolve_pair(actor_id, target_username)
        if actor.id == target.id:
            raise CantUnfollowSelfError()
        if actor.id not in target.followers:
            raise NotFollowingError()

        before = actor.snapshot()
        actor.unfollow(target)
        await self._persist_pair(actor, target, before, "unfollow")
        logger.info(
            f"{actor.username} unfollowed {target.username}",
            extra={"user_id": actor.id, "operation": "unfollow"},
        )

    @staticmethod
    def is_following(u1: User, u2: User) -> bool:
        """Friends side of the edge; see User.is_following for half edges."""
        return u1.is_following(u2)

    async def list_friends(self, username: str) -> list[UserInfo]:
        user = await self._find_by_name(username)
        return await self._resolve_infos(user.friends)

    async def list_followers(self, username: str) -> list[UserInfo]:
        user = await self._find_by_name(username)
        return await self._resolve_infos(user.followers)

    async def repair(self, user_id: UserId) -> int:
        """Reconcile both sides of every edge touching one user.

        Friends entries are authoritative: a friend missing the mirror
        follower entry gets it added. Follower entries without a mirror
        friends entry, and entries pointing at deleted users, are dropped.
        Returns the number of entries fixed.
        """
        if not is_well_formed_id(user_id):
            raise InvalidIDError()
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError()

        fixed = 0
        for friend_id in list(user.friends):
            friend = await self.users.find_by_id(friend_id)
            if friend is None or friend.id == user.id:
                user.friends.remove(friend_id)
                fixed += 1
            elif user.id not in friend.followers:
                friend.followers.append(user.id)
                await self.users.update(friend)
                fixed += 1

        for follower_id in list(user.followers):
            follower = await self.users.find_by_id(follower_id)
            if follower is None or user.id not in follower.friends:
                user.followers.remove(follower_id)
                fixed += 1

        if fixed:
            await self.users.update(user)
            logger.warning(
                f"Repaired {fixed} relationship entries for {user.username}",
                extra={"user_id": user.id, "operation": "repair"},
            )
        return fixed

    async def _resolve_pair(self, actor_id: UserId, target_username: str) -> tuple[User, User]:
        if not is_well_formed_id(actor_id):
            raise InvalidIDError()
        if not target_username:
            raise InvalidUsernameError()
        actor = await self.users.find_by_id(actor_id)
        if actor is None:
            raise NotFoundError()
        target = await self.users.find_by_name(target_username)
        if target is None:
            raise NotFoundError()
        return actor, target

    async def _find_by_name(self, username: str) -> User:
        if not username:
            raise InvalidUsernameError()
        user = await self.users.find_by_name(username)
        if user is None:
            raise NotFoundError()
        return user

    async def _resolve_infos(self, ids: list[UserId]) -> list[UserInfo]:
        if not ids:
            return []
        found = {u.id: u for u in await self.users.find_by_ids(ids)}
        return build_user_infos([found[i] for i in ids if i in found])

    async def _persist_pair(
        self, actor: User, target: User, actor_before: User, operation: str,
    ) -> None:
        await self.users.update(actor)
        try:
            await self.users.update(target)
        except (DatabaseError, NotFoundError):
            logger.error(
                f"Target write failed during {operation}; restoring {actor.username}",
                extra={"user_id": actor.id, "operation": operation},
            )
            try:
                await self.users.update(actor_before)
            except (DatabaseError, NotFoundError):
                logger.error(
                    f"Compensating write failed; edge {actor.id} -> {target.id} "
                    f"is asymmetric until repaired",
                    extra={"user_id": actor.id, "operation": operation},
                )
            raise
