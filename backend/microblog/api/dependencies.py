"""API Dependencies — service container and acting-user resolution.

Invariants:
    - The container is built once at startup and shared by every request
    - Authenticated routes require X-User-ID naming an existing profile, and
      every authenticated request refreshes that profile's last-seen time

Design Decisions:
    - X-User-ID header over token verification: signed-token issuance belongs
      to the upstream gateway, this service only trusts the forwarded id
    - Module-level container mirrors the db_manager singleton; tests override
      get_container through app.dependency_overrides
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Security, status
from fastapi.security.api_key import APIKeyHeader

from microblog.core.domain_types import UserId
from microblog.core.errors import NotFoundError
from microblog.infrastructure.repositories import Repositories
from microblog.services.account_events import AccountCreatedHandler
from microblog.services.accounts import AccountService
from microblog.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

user_id_header = APIKeyHeader(name="X-User-ID", auto_error=False)


@dataclass
class Container:
    profiles: ProfileService
    accounts: AccountService


def build_container(repos: Repositories, bcrypt_rounds: int = 12) -> Container:
    """Wire services together; profile creation listens to account registration."""
    profiles = ProfileService(repos.users, repos.posts)
    accounts = AccountService(
        repos.accounts, [AccountCreatedHandler(profiles)], bcrypt_rounds,
    )
    return Container(profiles=profiles, accounts=accounts)


# Singleton (initialized on startup)
container: Container | None = None


def init_container(repos: Repositories, bcrypt_rounds: int = 12) -> Container:
    global container
    container = build_container(repos, bcrypt_rounds)
    return container


def get_container() -> Container:
    if container is None:
        raise RuntimeError("Service container not initialized")
    return container


def get_profile_service(c: Container = Depends(get_container)) -> ProfileService:
    return c.profiles


def get_account_service(c: Container = Depends(get_container)) -> AccountService:
    return c.accounts


async def get_current_user_id(
    user_id: str | None = Security(user_id_header),
    service: ProfileService = Depends(get_profile_service),
) -> UserId:
    """Resolve the acting user and record that they were seen."""
    if not user_id:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header")
    try:
        await service.update_last_seen(UserId(user_id))
    except NotFoundError:
        logger.warning("Rejected unknown acting user", extra={"user_id": user_id})
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return UserId(user_id)
