"""Identity & Validation — tests for username, email, password, bio and id checks.

Tests cover:
    - validate_username accepts 1-24 word characters only
    - validate_email requires local@domain.tld shape
    - validate_password requires 8+ characters
    - validate_bio boundary at 140 trimmed characters
    - is_well_formed_id is a shape check on generated ids
"""

import pytest

from microblog.core.domain_types import new_id
from microblog.core.errors import (
    BioTooLongError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidUsernameError,
)
from microblog.core.validation import (
    is_well_formed_id,
    validate_bio,
    validate_email,
    validate_password,
    validate_username,
)


# ─── validate_username ───────────────────────────────────────────

@pytest.mark.parametrize("username", ["u", "user_1", "A" * 24, "Z9_"])
def test_validate_username_accepts_word_characters(username):
    assert validate_username(username) == username


@pytest.mark.parametrize("username", [
    "",
    "long_name_that_exceeds_24_characters_should_not_be_allowed",
    "user name with space",
    "user_name_with_@",
    "trailing\n",
    "ünïcode",
])
def test_validate_username_rejects_bad_shapes(username):
    with pytest.raises(InvalidUsernameError):
        validate_username(username)


# ─── validate_email ──────────────────────────────────────────────

def test_validate_email_accepts_minimal_shape():
    assert validate_email("e@m.co") == "e@m.co"


@pytest.mark.parametrize("email", ["", "email", "email@sdf", "a b@c.d e", "@."])
def test_validate_email_rejects_bad_shapes(email):
    with pytest.raises(InvalidEmailError):
        validate_email(email)


# ─── validate_password ───────────────────────────────────────────

def test_validate_password_accepts_eight_characters():
    assert validate_password("password") == "password"


def test_validate_password_rejects_seven_characters():
    with pytest.raises(InvalidPasswordError):
        validate_password("passwor")


# ─── validate_bio ────────────────────────────────────────────────

def test_validate_bio_accepts_exactly_140_characters():
    assert validate_bio("b" * 140) == "b" * 140


def test_validate_bio_rejects_141_characters():
    with pytest.raises(BioTooLongError):
        validate_bio("b" * 141)


def test_validate_bio_trims_before_measuring():
    padded = "  " + "b" * 140 + "  "
    assert validate_bio(padded) == "b" * 140


def test_validate_bio_allows_empty():
    assert validate_bio("") == ""


# ─── is_well_formed_id ───────────────────────────────────────────

def test_generated_ids_are_well_formed():
    assert is_well_formed_id(new_id())


@pytest.mark.parametrize("value", [
    "", "invalid", "A" * 20, "w" * 20, "0" * 19, "0" * 21, None, 12345,
])
def test_malformed_ids_are_rejected(value):
    assert not is_well_formed_id(value)
