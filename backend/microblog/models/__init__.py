"""ORM Models — SQLAlchemy declarative models backing the SQL repositories.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/: repositories map them to core aggregates

Design Decisions:
    - One file per table for locality
    - All models imported here so metadata is complete before create_all/alembic
"""

from microblog.models.user import UserRecord  # noqa: F401
from microblog.models.post import PostRecord  # noqa: F401
from microblog.models.account import AccountRecord  # noqa: F401
