"""Account Aggregate — credentials owned by the authentication context.

Invariants:
    - username/email validated with the same rules as the profile core
    - password is stored only as a bcrypt hash

Design Decisions:
    - Separate aggregate from User: the profile core never sees credentials,
      it only hears about new accounts through AccountEvents
"""

from dataclasses import dataclass, field
from datetime import datetime

from microblog.core.domain_types import AccountId
from microblog.core.users import utcnow
from microblog.core.validation import validate_email, validate_username


@dataclass
class Account:
    id: AccountId
    username: str
    email: str
    password_hash: str = ""
    created_at: datetime = field(default_factory=utcnow)


def new_account(account_id: AccountId, username: str, email: str) -> Account:
    validate_username(username)
    validate_email(email)
    return Account(id=account_id, username=username, email=email)
