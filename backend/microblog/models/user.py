"""User ORM — profile row with the follow edge stored on both ends.

Invariants:
    - id is the externally generated 20-char identifier
    - username and email are unique
    - friends/followers are JSON arrays of user ids

Design Decisions:
    - JSON arrays over a join table: mirrors the aggregate, one row read per user
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from microblog.db.base import Base


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    username: Mapped[str] = mapped_column(
        String(24), nullable=False, unique=True, index=True,
    )
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    bio: Mapped[str] = mapped_column(String(140), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_seen: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    friends: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    followers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
