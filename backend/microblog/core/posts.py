"""Post Aggregate — an immutable authored message.

Invariants:
    - body is non-empty at creation
    - id is assigned once by new_post and never changes
    - new_post timestamps strictly increase within a process, even when two
      posts land in the same clock tick
    - author_id references an existing User (checked by the service, not here)
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from microblog.core.domain_types import PostId, UserId, new_id
from microblog.core.errors import EmptyBodyError
from microblog.core.users import utcnow


@dataclass(frozen=True)
class Post:
    id: PostId
    author_id: UserId
    body: str
    timestamp: datetime = field(default_factory=utcnow)


_TICK = timedelta(microseconds=1)
_clock_lock = threading.Lock()
_last_stamp: datetime | None = None


def _next_stamp() -> datetime:
    global _last_stamp
    with _clock_lock:
        now = utcnow()
        if _last_stamp is not None and now <= _last_stamp:
            now = _last_stamp + _TICK
        _last_stamp = now
        return now


def new_post(author_id: UserId, body: str) -> Post:
    """Build a post with a fresh id and a timestamp later than any previous post."""
    if not body:
        raise EmptyBodyError()
    return Post(
        id=PostId(new_id()), author_id=author_id, body=body, timestamp=_next_stamp(),
    )


def newest_first(posts: list[Post]) -> list[Post]:
    """Order by timestamp descending; equal timestamps fall back to id descending."""
    return sorted(posts, key=lambda p: (p.timestamp, p.id), reverse=True)
