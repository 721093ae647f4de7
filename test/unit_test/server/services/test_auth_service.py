"""Unit tests for the account service against an in-memory database."""

import pytest

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
from moolaegis.core.security import decode_token, verify_password
from moolaegis.server.services.auth_service import (
    MIN_PASSWORD_LENGTH,
    AuthService,
    normalize_email,
    validate_email,
    validate_password,
    validate_username,
)


@pytest.fixture
def auth(session) -> AuthService:
    return AuthService(UserRepository(session))


class TestValidation:
    @pytest.mark.parametrize("email", ["alice@example.com", " Alice@Example.COM ", "a.b+c@sub.example.org"])
    def test_valid_email(self, email):
        assert validate_email(email) == normalize_email(email)

    @pytest.mark.parametrize("email", ["", "alice", "alice@", "alice@example", "a b@example.com", "a@@b.co"])
    def test_invalid_email(self, email):
        with pytest.raises(InvalidEmailError):
            validate_email(email)

    def test_username_stripped(self):
        assert validate_username("  alice ") == "alice"

    @pytest.mark.parametrize("username", ["", "   ", "\t\n"])
    def test_blank_username(self, username):
        with pytest.raises(InvalidUsernameError):
            validate_username(username)

    def test_password_length(self):
        validate_password("x" * MIN_PASSWORD_LENGTH)
        with pytest.raises(WeakPasswordError) as exc_info:
            validate_password("x" * (MIN_PASSWORD_LENGTH - 1))
        assert exc_info.value.details == {"n": MIN_PASSWORD_LENGTH}


class TestRegister:
    async def test_register(self, auth: AuthService):
        user = await auth.register(" alice ", "Alice@Example.com", "secret1")
        assert user.id is not None
        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert user.password_hash != "secret1"
        assert verify_password("secret1", user.password_hash)

    async def test_blank_username_creates_nothing(self, auth: AuthService):
        with pytest.raises(InvalidUsernameError):
            await auth.register("   ", "alice@example.com", "secret1")
        assert await auth.users.get_by_email("alice@example.com") is None

    async def test_duplicate_username(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        with pytest.raises(UsernameTakenError):
            await auth.register("alice", "other@example.com", "secret1")

    async def test_duplicate_email_case_insensitive(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        with pytest.raises(EmailTakenError):
            await auth.register("alice2", "ALICE@example.com", "secret1")

    async def test_weak_password_checked_before_uniqueness(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        with pytest.raises(WeakPasswordError):
            await auth.register("alice", "alice@example.com", "123")


class TestLogin:
    async def test_login_issues_token_pair(self, auth: AuthService):
        user = await auth.register("alice", "alice@example.com", "secret1")
        access, refresh = await auth.login("alice", "secret1")

        access_claims = decode_token(access, expected_type="access")
        assert access_claims["sub"] == "alice"
        assert access_claims["uid"] == user.id
        assert decode_token(refresh, expected_type="refresh")["uid"] == user.id

    async def test_unknown_user(self, auth: AuthService):
        with pytest.raises(UserNotFoundError):
            await auth.login("ghost", "secret1")

    async def test_wrong_password(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        with pytest.raises(IncorrectPasswordError):
            await auth.login("alice", "wrong-password")

    async def test_inactive_user(self, auth: AuthService):
        user = await auth.register("alice", "alice@example.com", "secret1")
        user.is_active = False
        await auth.users.update(user)
        with pytest.raises(UserNotFoundError):
            await auth.login("alice", "secret1")


class TestTokens:
    async def test_refresh(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        access, refresh = await auth.login("alice", "secret1")
        new_access = await auth.refresh(refresh)
        assert decode_token(new_access, expected_type="access")["sub"] == "alice"

    async def test_refresh_rejects_access_token(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        access, _ = await auth.login("alice", "secret1")
        with pytest.raises(InvalidTokenError):
            await auth.refresh(access)

    async def test_resolve_access_token(self, auth: AuthService):
        user = await auth.register("alice", "alice@example.com", "secret1")
        access, refresh = await auth.login("alice", "secret1")
        assert (await auth.resolve_access_token(access)).id == user.id
        with pytest.raises(InvalidTokenError):
            await auth.resolve_access_token(refresh)
        with pytest.raises(InvalidTokenError):
            await auth.resolve_access_token(None)

    async def test_token_of_deleted_user(self, auth: AuthService):
        user = await auth.register("alice", "alice@example.com", "secret1")
        access, _ = await auth.login("alice", "secret1")
        await auth.users.delete(user.id)
        with pytest.raises(InvalidTokenError):
            await auth.resolve_access_token(access)


class TestResetPassword:
    async def test_reset(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        await auth.reset_password("ALICE@example.com", "newsecret")

        with pytest.raises(IncorrectPasswordError):
            await auth.login("alice", "secret1")
        assert await auth.login("alice", "newsecret")

    async def test_unknown_email(self, auth: AuthService):
        with pytest.raises(UserNotFoundError):
            await auth.reset_password("nobody@example.com", "newsecret")

    async def test_weak_new_password(self, auth: AuthService):
        await auth.register("alice", "alice@example.com", "secret1")
        with pytest.raises(WeakPasswordError):
            await auth.reset_password("alice@example.com", "123")
