"""SQL Repositories — SQLAlchemy async adapters over users, posts and accounts.

Invariants:
    - One short session per call; every write commits before returning
    - Rows are mapped to fresh core aggregates, so reads are independent copies
    - Timestamps come back timezone-aware UTC even on SQLite (which drops tzinfo)
    - SQLAlchemy failures surface as DatabaseError via DatabaseSessionManager

Design Decisions:
    - Newest-first ordering pushed into SQL with post id as tiebreak
"""

from datetime import datetime, timezone

from sqlalchemy import select

from microblog.core.accounts import Account
from microblog.core.domain_types import AccountId, PostId, UserId
from microblog.core.errors import NotFoundError
from microblog.core.posts import Post
from microblog.core.users import User
from microblog.infrastructure.database import DatabaseSessionManager
from microblog.models.account import AccountRecord
from microblog.models.post import PostRecord
from microblog.models.user import UserRecord


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_user(row: UserRecord) -> User:
    return User(
        id=UserId(row.id),
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        bio=row.bio,
        created_at=_aware(row.created_at),
        last_seen=_aware(row.last_seen),
        friends=[UserId(i) for i in row.friends],
        followers=[UserId(i) for i in row.followers],
    )


def _to_post(row: PostRecord) -> Post:
    return Post(
        id=PostId(row.id), author_id=UserId(row.author_id),
        body=row.body, timestamp=_aware(row.timestamp),
    )


def _to_account(row: AccountRecord) -> Account:
    return Account(
        id=AccountId(row.id), username=row.username, email=row.email,
        password_hash=row.password_hash, created_at=_aware(row.created_at),
    )


class SqlUserRepository:

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_id(self, user_id: UserId) -> User | None:
        async with self.db.session() as s:
            row = await s.get(UserRecord, user_id)
            return _to_user(row) if row else None

    async def find_by_name(self, username: str) -> User | None:
        return await self._find_one(UserRecord.username == username)

    async def find_by_email(self, email: str) -> User | None:
        return await self._find_one(UserRecord.email == email)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        async with self.db.session() as s:
            result = await s.execute(
                select(UserRecord).where(UserRecord.id.in_(list(user_ids))),
            )
            return [_to_user(row) for row in result.scalars().all()]

    async def store(self, user: User) -> None:
        async with self.db.session() as s:
            s.add(UserRecord(
                id=user.id,
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
                bio=user.bio,
                created_at=user.created_at,
                last_seen=user.last_seen,
                friends=list(user.friends),
                followers=list(user.followers),
            ))
            await s.commit()

    async def update(self, user: User) -> None:
        async with self.db.session() as s:
            row = await s.get(UserRecord, user.id)
            if row is None:
                raise NotFoundError()
            row.username = user.username
            row.email = user.email
            row.password_hash = user.password_hash
            row.bio = user.bio
            row.last_seen = user.last_seen
            row.friends = list(user.friends)
            row.followers = list(user.followers)
            await s.commit()

    async def delete(self, user_id: UserId) -> None:
        async with self.db.session() as s:
            row = await s.get(UserRecord, user_id)
            if row is None:
                raise NotFoundError()
            await s.delete(row)
            await s.commit()

    async def _find_one(self, clause) -> User | None:
        async with self.db.session() as s:
            result = await s.execute(select(UserRecord).where(clause))
            row = result.scalar_one_or_none()
            return _to_user(row) if row else None


class SqlPostRepository:

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def store(self, post: Post) -> None:
        async with self.db.session() as s:
            s.add(PostRecord(
                id=post.id, author_id=post.author_id,
                body=post.body, timestamp=post.timestamp,
            ))
            await s.commit()

    async def find_by_id(self, post_id: PostId) -> Post | None:
        async with self.db.session() as s:
            row = await s.get(PostRecord, post_id)
            return _to_post(row) if row else None

    async def find_latest_posts_for_user(self, user_id: UserId) -> list[Post]:
        return await self._latest_for([user_id])

    async def find_latest_posts_for_user_and_friends(self, user: User) -> list[Post]:
        return await self._latest_for([user.id, *user.friends])

    async def _latest_for(self, author_ids: list[UserId]) -> list[Post]:
        async with self.db.session() as s:
            result = await s.execute(
                select(PostRecord)
                .where(PostRecord.author_id.in_(author_ids))
                .order_by(PostRecord.timestamp.desc(), PostRecord.id.desc())
            )
            return [_to_post(row) for row in result.scalars().all()]


class SqlAccountRepository:

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_id(self, account_id: AccountId) -> Account | None:
        async with self.db.session() as s:
            row = await s.get(AccountRecord, account_id)
            return _to_account(row) if row else None

    async def find_by_name(self, username: str) -> Account | None:
        return await self._find_one(AccountRecord.username == username)

    async def find_by_email(self, email: str) -> Account | None:
        return await self._find_one(AccountRecord.email == email)

    async def store(self, account: Account) -> None:
        async with self.db.session() as s:
            s.add(AccountRecord(
                id=account.id, username=account.username, email=account.email,
                password_hash=account.password_hash, created_at=account.created_at,
            ))
            await s.commit()

    async def _find_one(self, clause) -> Account | None:
        async with self.db.session() as s:
            result = await s.execute(select(AccountRecord).where(clause))
            row = result.scalar_one_or_none()
            return _to_account(row) if row else None
