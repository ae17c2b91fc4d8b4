"""Read Projections — profile, relationship list and post views assembled by services.

Invariants:
    - Views are never persisted and never handed back to repositories
    - avatar_url is a pure function of the email (gravatar identicon)
    - Post views carry the display fields of the post's own author
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime

from microblog.core.domain_types import PostId, UserId
from microblog.core.posts import Post
from microblog.core.users import User

GRAVATAR_URL = "https://www.gravatar.com/avatar"


def avatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_URL}/{digest}?d=identicon"


@dataclass(frozen=True)
class AuthorView:
    user_id: UserId
    username: str
    avatar: str


@dataclass(frozen=True)
class PostView:
    id: PostId
    body: str
    timestamp: datetime
    author: AuthorView


@dataclass(frozen=True)
class UserInfo:
    """Row in a friends/followers listing."""
    id: UserId
    username: str
    avatar: str
    bio: str
    joined: datetime


@dataclass(frozen=True)
class Relationships:
    followers: int
    following: int


@dataclass(frozen=True)
class Profile:
    id: UserId
    username: str
    avatar: str
    bio: str
    joined: datetime
    last_seen: datetime
    relationships: Relationships
    posts: list[PostView] = field(default_factory=list)


def author_view(user: User) -> AuthorView:
    return AuthorView(user_id=user.id, username=user.username, avatar=avatar_url(user.email))


def build_post_views(posts: list[Post], authors: dict[UserId, User]) -> list[PostView]:
    """Enrich posts with author display fields, preserving order.

    Posts whose author is missing from ``authors`` (a deleted user) are dropped.
    """
    views = []
    for post in posts:
        author = authors.get(post.author_id)
        if author is None:
            continue
        views.append(PostView(
            id=post.id, body=post.body, timestamp=post.timestamp,
            author=author_view(author),
        ))
    return views


def build_user_infos(users: list[User]) -> list[UserInfo]:
    return [
        UserInfo(
            id=u.id, username=u.username, avatar=avatar_url(u.email),
            bio=u.bio, joined=u.created_at,
        )
        for u in users
    ]


def build_profile(user: User, posts: list[Post]) -> Profile:
    return Profile(
        id=user.id,
        username=user.username,
        avatar=avatar_url(user.email),
        bio=user.bio,
        joined=user.created_at,
        last_seen=user.last_seen,
        relationships=Relationships(
            followers=len(user.followers), following=len(user.friends),
        ),
        posts=build_post_views(posts, {user.id: user}),
    )
