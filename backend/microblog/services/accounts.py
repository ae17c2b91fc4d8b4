"""Account Service — registration and credential checks for the authentication context.

Invariants:
    - Validation order: username, email, password, then uniqueness (username before email)
    - Passwords are hashed with bcrypt and never stored or logged in clear
    - Listeners can veto a username or email they already hold before anything
      is stored; they are notified only after the account is stored
    - Unknown username and wrong password are indistinguishable (InvalidCredentials)

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would stall the loop
    - Listeners are AccountEvents protocols so the profile core stays decoupled
"""

import asyncio
import logging

import bcrypt

from microblog.core.accounts import new_account
from microblog.core.domain_types import AccountId, new_id
from microblog.core.errors import (
    ExistingEmailError,
    ExistingUsernameError,
    InvalidCredentialsError,
    InvalidPasswordError,
)
from microblog.core.repository_protocols import AccountEvents, AccountRepository
from microblog.core.validation import validate_password

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class AccountService:

    def __init__(
        self,
        accounts: AccountRepository,
        listeners: list[AccountEvents] | None = None,
        bcrypt_rounds: int = 12,
    ):
        self.accounts = accounts
        self.listeners = list(listeners or [])
        self.bcrypt_rounds = bcrypt_rounds

    def subscribe(self, listener: AccountEvents) -> None:
        self.listeners.append(listener)

    async def register_account(self, username: str, email: str, password: str) -> AccountId:
        account = new_account(AccountId(new_id()), username, email)
        validate_password(password)
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise InvalidPasswordError()

        if await self.accounts.find_by_name(username) is not None:
            raise ExistingUsernameError()
        if await self.accounts.find_by_email(email) is not None:
            raise ExistingEmailError()
        for listener in self.listeners:
            await listener.ensure_available(username, email)

        hashed = await asyncio.to_thread(
            bcrypt.hashpw, encoded, bcrypt.gensalt(self.bcrypt_rounds),
        )
        account.password_hash = hashed.decode("utf-8")
        await self.accounts.store(account)
        logger.info(f"Account registered: {username}", extra={"user_id": account.id})

        for listener in self.listeners:
            await listener.account_created(account.id, account.username, account.email)
        return account.id

    async def validate_credentials(self, username: str, password: str) -> AccountId:
        account = await self.accounts.find_by_name(username) if username else None
        encoded = password.encode("utf-8") if password else b""
        if account is None or not encoded or len(encoded) > MAX_PASSWORD_BYTES:
            raise InvalidCredentialsError()
        matches = await asyncio.to_thread(
            bcrypt.checkpw,
            encoded,
            account.password_hash.encode("utf-8"),
        )
        if not matches:
            logger.warning("Rejected credentials", extra={"user_id": account.id})
            raise InvalidCredentialsError()
        return account.id
