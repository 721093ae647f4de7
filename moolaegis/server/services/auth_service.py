"""
Account and token operations behind the ``/auth`` endpoints.

The service owns credential rules (minimum password length, email shape,
uniqueness) and raises domain errors with stable codes for each violation.
"""

from __future__ import annotations

import re
from typing import Optional

from moolaegis.core.database.entities.users import User
from moolaegis.core.database.repositories.users import UserRepository
from moolaegis.core.errors import (
    EmailTakenError,
    IncorrectPasswordError,
    InvalidEmailError,
    InvalidUsernameError,
    InvalidTokenError,
    UsernameTakenError,
    UserNotFoundError,
    WeakPasswordError,
)
from moolaegis.core.logging_config import get_logger
from moolaegis.core.security import create_token, decode_token, hash_password, verify_password

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    """Return the normalized email or raise ``InvalidEmailError``."""
    normalized = normalize_email(email)
    if not _EMAIL_PATTERN.match(normalized):
        raise InvalidEmailError(email)
    return normalized


def validate_username(username: str) -> str:
    """Return the stripped username or raise ``InvalidUsernameError`` when it is blank."""
    stripped = username.strip()
    if not stripped:
        raise InvalidUsernameError()
    return stripped


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(MIN_PASSWORD_LENGTH)


class AuthService:
    """Registration, login, token refresh and password reset."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    async def register(self, username: str, email: str, password: str) -> User:
        """Create an account.

        Raises:
            InvalidUsernameError: Username is blank after stripping
            InvalidEmailError: Email is not shaped like an address
            WeakPasswordError: Password shorter than the minimum
            UsernameTakenError: Username already registered
            EmailTakenError: Email already registered
        """
        username = validate_username(username)
        normalized = validate_email(email)
        validate_password(password)

        if await self.users.get_by_username(username):
            raise UsernameTakenError(username)
        if await self.users.get_by_email(normalized):
            raise EmailTakenError(normalized)

        user = await self.users.create(
            User(username=username, email=normalized, password_hash=hash_password(password))
        )
        logger.info(f"Registered user id={user.id} username={user.username}")
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.users.get_by_username(username.strip())
        if user is None or not user.is_active:
            raise UserNotFoundError()
        if not verify_password(password, user.password_hash):
            logger.info(f"Rejected login for username={user.username}: incorrect password")
            raise IncorrectPasswordError()
        return user

    @staticmethod
    def issue_tokens(user: User) -> tuple[str, str]:
        """Return a fresh ``(access_token, refresh_token)`` pair for ``user``."""
        access = create_token(username=user.username, user_id=user.id, token_type="access")
        refresh = create_token(username=user.username, user_id=user.id, token_type="refresh")
        return access, refresh

    async def login(self, username: str, password: str) -> tuple[str, str]:
        user = await self.authenticate(username, password)
        logger.info(f"User logged in: id={user.id}")
        return self.issue_tokens(user)

    async def refresh(self, refresh_token: str) -> str:
        """Exchange a valid refresh token for a new access token."""
        claims = decode_token(refresh_token, expected_type="refresh")
        user = await self.users.get_by_id(claims["uid"])
        if user is None or not user.is_active:
            raise InvalidTokenError()
        return create_token(username=user.username, user_id=user.id, token_type="access")

    async def reset_password(self, email: str, new_password: str) -> User:
        """Set a new password for the account registered under ``email``."""
        validate_password(new_password)
        user = await self.users.get_by_email(normalize_email(email))
        if user is None:
            raise UserNotFoundError()
        user = await self.users.set_password_hash(user, hash_password(new_password))
        logger.info(f"Password reset for user id={user.id}")
        return user

    async def resolve_access_token(self, token: Optional[str]) -> User:
        """Return the active user an access token belongs to."""
        if not token:
            raise InvalidTokenError("Not authenticated")
        claims = decode_token(token, expected_type="access")
        user = await self.users.get_by_id(claims["uid"])
        if user is None or not user.is_active:
            raise InvalidTokenError()
        return user
