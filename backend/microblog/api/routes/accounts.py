"""Account Routes — registration and credential checks.

Invariants:
    - POST /accounts returns 201 with a Location header pointing at the new account
    - Successful registration creates the matching profile via AccountCreatedHandler
"""

from fastapi import APIRouter, Depends, Response, status

from microblog.api.dependencies import get_account_service
from microblog.schemas.accounts import (
    CredentialsRequest,
    CredentialsResponse,
    RegisterAccountRequest,
    RegisterAccountResponse,
)
from microblog.services.accounts import AccountService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/accounts", response_model=RegisterAccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_account(
    body: RegisterAccountRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
):
    account_id = await accounts.register_account(body.username, body.email, body.password)
    response.headers["Location"] = f"{router.prefix}/accounts/{account_id}"
    return RegisterAccountResponse(id=account_id)


@router.post("/sessions", response_model=CredentialsResponse)
async def validate_credentials(
    body: CredentialsRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Check credentials and return the account id for the gateway to forward."""
    account_id = await accounts.validate_credentials(body.username, body.password)
    return CredentialsResponse(user_id=account_id)
