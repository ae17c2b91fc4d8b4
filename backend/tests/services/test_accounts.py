"""Account Service — registration, credential checks and the account-created event.

Tests cover:
    - registration stores a bcrypt hash and notifies listeners
    - validation and uniqueness ordering
    - credential checks never distinguish unknown user from wrong password
    - AccountCreatedHandler creates exactly one profile
    - names and emails held by profiles (incl. renamed ones) block registration
"""

import pytest

from microblog.core.errors import (
    ExistingEmailError,
    ExistingUsernameError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidUsernameError,
)
from microblog.core.users import EditProfileRequest
from microblog.services.account_events import AccountCreatedHandler
from microblog.services.accounts import AccountService


class RecordingListener:
    def __init__(self):
        self.events = []

    async def ensure_available(self, username, email):
        pass

    async def account_created(self, account_id, username, email):
        self.events.append((account_id, username, email))


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def account_service(accounts, listener):
    return AccountService(accounts, [listener], bcrypt_rounds=4)


async def test_register_hashes_password(account_service, accounts):
    account_id = await account_service.register_account("U", "user@app.com", "password1")
    stored = await accounts.find_by_id(account_id)
    assert stored.username == "U"
    assert stored.password_hash.startswith("$2")
    assert "password1" not in stored.password_hash


async def test_register_notifies_listener(account_service, listener):
    account_id = await account_service.register_account("U", "user@app.com", "password1")
    assert listener.events == [(account_id, "U", "user@app.com")]


@pytest.mark.parametrize(
    ("username", "email", "password", "error"),
    [
        ("", "user@app.com", "password1", InvalidUsernameError),
        ("bad name", "bad", "short", InvalidUsernameError),
        ("U", "not-an-email", "short", InvalidEmailError),
        ("U", "user@app.com", "short", InvalidPasswordError),
        ("U", "user@app.com", "x" * 73, InvalidPasswordError),
    ],
)
async def test_register_validation_order(account_service, listener, username, email, password, error):
    with pytest.raises(error):
        await account_service.register_account(username, email, password)
    assert listener.events == []


async def test_register_duplicate_username(account_service):
    await account_service.register_account("U", "user@app.com", "password1")
    with pytest.raises(ExistingUsernameError):
        await account_service.register_account("U", "other@app.com", "password1")


async def test_register_duplicate_email(account_service):
    await account_service.register_account("U", "user@app.com", "password1")
    with pytest.raises(ExistingEmailError):
        await account_service.register_account("V", "user@app.com", "password1")


async def test_validate_credentials(account_service):
    account_id = await account_service.register_account("U", "user@app.com", "password1")
    assert await account_service.validate_credentials("U", "password1") == account_id


@pytest.mark.parametrize(
    ("username", "password"),
    [("U", "wrong-password"), ("ghost", "password1"), ("U", ""), ("", "password1")],
)
async def test_validate_credentials_rejects(account_service, username, password):
    await account_service.register_account("U", "user@app.com", "password1")
    with pytest.raises(InvalidCredentialsError):
        await account_service.validate_credentials(username, password)


async def test_account_created_handler_builds_profile(accounts, service, users):
    account_service = AccountService(accounts, bcrypt_rounds=4)
    account_service.subscribe(AccountCreatedHandler(service))

    account_id = await account_service.register_account("U", "user@app.com", "password1")

    user = await users.find_by_id(account_id)
    assert user.username == "U"
    assert user.email == "user@app.com"


async def test_account_created_handler_is_idempotent(service, users):
    handler = AccountCreatedHandler(service)
    await handler.account_created("0" * 20, "U", "user@app.com")
    await handler.account_created("1" * 20, "U", "user@app.com")
    assert (await users.find_by_name("U")).id == "0" * 20
    assert await users.find_by_id("1" * 20) is None


@pytest.fixture
def linked_accounts(accounts, service):
    account_service = AccountService(accounts, bcrypt_rounds=4)
    account_service.subscribe(AccountCreatedHandler(service))
    return account_service


async def test_register_rejects_name_taken_by_renamed_profile(linked_accounts, accounts, service):
    alice_id = await linked_accounts.register_account("alice", "alice@app.com", "password1")
    await service.edit_profile(alice_id, EditProfileRequest(username="bob"))

    with pytest.raises(ExistingUsernameError):
        await linked_accounts.register_account("bob", "bob@app.com", "password1")

    assert await accounts.find_by_name("bob") is None
    assert await accounts.find_by_email("bob@app.com") is None


async def test_register_rejects_email_held_by_profile(linked_accounts, accounts, service):
    await service.create_profile("0" * 20, "legacy", "legacy@app.com")

    with pytest.raises(ExistingEmailError):
        await linked_accounts.register_account("fresh", "legacy@app.com", "password1")

    assert await accounts.find_by_name("fresh") is None

