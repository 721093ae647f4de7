"""Password hashing and JWT token handling.

Passwords are stored as salted PBKDF2-SHA256 digests in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.

Tokens are HS256 JWTs. Access and refresh tokens share the same claim set
(``sub`` is the username, ``uid`` the user id) and are told apart by the
``type`` claim, so a refresh token can never be used as an access token.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Literal, Optional

import jwt

from moolaegis.core.errors import InvalidTokenError
from moolaegis.server.core.config import JWTConfig, settings

TokenType = Literal["access", "refresh"]

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 390_000
SALT_BYTES = 16


def hash_password(password: str, *, iterations: Optional[int] = None) -> str:
    iterations = iterations or PBKDF2_ITERATIONS
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash in constant time."""
    try:
        algorithm, iterations, salt_hex, digest_hex = password_hash.split("$")
        if algorithm != PBKDF2_ALGORITHM:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(candidate, expected)


def create_token(
    *,
    username: str,
    user_id: int,
    token_type: TokenType,
    config: Optional[JWTConfig] = None,
    now: Optional[datetime] = None,
) -> str:
    """Sign a JWT of the given type for a user.

    Args:
        username: Stored in the ``sub`` claim
        user_id: Stored in the ``uid`` claim
        token_type: ``access`` or ``refresh``; selects the lifetime
        config: Token configuration, defaults to the application settings
        now: Issue time, mainly for tests

    Returns:
        The encoded token string
    """
    cfg = config or settings.jwt
    issued_at = now or datetime.now(timezone.utc)
    minutes = cfg.access_token_expire_minutes if token_type == "access" else cfg.refresh_token_expire_minutes
    payload = {
        "sub": username,
        "uid": user_id,
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=minutes),
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.algorithm)


def decode_token(token: str, *, expected_type: TokenType, config: Optional[JWTConfig] = None) -> dict[str, Any]:
    """Verify a token signature, expiry and type.

    Raises:
        InvalidTokenError: If the token cannot be trusted for ``expected_type``
    """
    cfg = config or settings.jwt
    try:
        claims = jwt.decode(token, cfg.secret, algorithms=[cfg.algorithm], options={"require": ["exp", "sub"]})
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError() from e

    if claims.get("type") != expected_type:
        raise InvalidTokenError(f"Expected a {expected_type} token")
    if not isinstance(claims.get("uid"), int):
        raise InvalidTokenError()
    return claims
