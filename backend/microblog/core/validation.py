"""Identity & Validation — pure checks for usernames, emails, passwords, bios and ids.

Invariants:
    - Username: 1-24 word characters (letters, digits, underscore)
    - Email: minimal local@domain.tld shape
    - Password: at least 8 characters (hashing happens in the credential context)
    - Bio: at most 140 characters after trimming; trimmed value is returned
    - is_well_formed_id is structural only and never touches storage

Design Decisions:
    - Raise typed errors instead of returning flags: callers propagate them as-is
"""

import re

from microblog.core.domain_types import ID_LENGTH
from microblog.core.errors import (
    BioTooLongError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidUsernameError,
)

USERNAME_PATTERN = re.compile(r"\w{1,24}", re.ASCII)
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
ID_PATTERN = re.compile(rf"[0-9a-v]{{{ID_LENGTH}}}")

MIN_PASSWORD_LENGTH = 8
MAX_BIO_LENGTH = 140


def validate_username(username: str) -> str:
    if not isinstance(username, str) or not USERNAME_PATTERN.fullmatch(username):
        raise InvalidUsernameError()
    return username


def validate_email(email: str) -> str:
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        raise InvalidEmailError()
    return email


def validate_password(password: str) -> str:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPasswordError()
    return password


def validate_bio(bio: str) -> str:
    """Return the trimmed bio, or raise BioTooLongError past the limit."""
    trimmed = bio.strip()
    if len(trimmed) > MAX_BIO_LENGTH:
        raise BioTooLongError(MAX_BIO_LENGTH)
    return trimmed


def is_well_formed_id(value: object) -> bool:
    """Shape check used to short-circuit lookups before hitting storage."""
    return isinstance(value, str) and ID_PATTERN.fullmatch(value) is not None
