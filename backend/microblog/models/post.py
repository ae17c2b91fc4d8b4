"""Post ORM — immutable authored message.

Invariants:
    - author_id references users.id
    - (author_id, timestamp) indexed for newest-first per-author scans
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from microblog.db.base import Base


class PostRecord(Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_author_timestamp", "author_id", "timestamp"),
    )

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    author_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
