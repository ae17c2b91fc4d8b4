"""User Aggregate — identity plus the redundant two-sided follow edge.

Invariants:
    - a.id in b.followers  iff  b.id in a.friends (maintained by follow/unfollow)
    - friends never contains the user's own id
    - friends/followers hold no duplicates and keep insertion order
    - password_hash is opaque and never compared by value here

Design Decisions:
    - Plain dataclass, not the ORM model: storage adapters convert at the boundary
      so the core never sees a live database row
    - follow/unfollow mutate both aggregates in memory only; persisting both
      sides is the caller's job (see services/relationship_graph.py)
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone

from microblog.core.domain_types import UNSET, UserId
from microblog.core.validation import validate_bio


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A registered account's social profile."""
    id: UserId
    username: str
    email: str
    password_hash: str = ""
    bio: str = ""
    created_at: datetime = field(default_factory=utcnow)
    last_seen: datetime = field(default_factory=utcnow)
    friends: list[UserId] = field(default_factory=list)
    followers: list[UserId] = field(default_factory=list)

    def is_following(self, other: "User") -> bool:
        """Reads this user's friends side only.

        Follow/unfollow conflicts are decided by the target's followers list, so
        on a half edge this is True while following again still succeeds.
        """
        return other.id in self.friends

    def follow(self, other: "User") -> None:
        if other.id not in self.friends:
            self.friends.append(other.id)
        if self.id not in other.followers:
            other.followers.append(self.id)

    def unfollow(self, other: "User") -> None:
        if other.id in self.friends:
            self.friends.remove(other.id)
        if self.id in other.followers:
            other.followers.remove(self.id)

    def update_bio(self, bio: str) -> None:
        self.bio = validate_bio(bio)

    def snapshot(self) -> "User":
        """Independent deep copy, used for compensating writes."""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class EditProfileRequest:
    """Partial profile edit. UNSET means "leave untouched"; "" is a real value."""
    username: str | object = UNSET
    bio: str | object = UNSET

    @property
    def is_empty(self) -> bool:
        return self.username is UNSET and self.bio is UNSET
