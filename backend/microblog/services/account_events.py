"""Account-Created Handler — turns authentication-context events into profiles.

Invariants:
    - This is the only coupling point between credentials and the profile core
    - Handling is idempotent (delegates to ProfileService.create_profile)
"""

from microblog.services.profile_service import MicroblogService


class AccountCreatedHandler:
    """AccountEvents listener registered with AccountService."""

    def __init__(self, service: MicroblogService):
        self.service = service

    async def ensure_available(self, username: str, email: str) -> None:
        await self.service.ensure_available(username, email)

    async def account_created(self, account_id: str, username: str, email: str) -> None:
        await self.service.create_profile(account_id, username, email)
