"""
Authentication endpoints.

Registration, login, token refresh and password reset. Login returns an
access/refresh token pair; the access token is sent as ``Authorization:
Bearer`` on every other endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from moolaegis.core.models.io.auth import (
    AccessToken,
    ForgetPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    StatusResponse,
    TokenPair,
    UserRead,
)
from moolaegis.server.services.deps import AuthServiceDep, CurrentUserDep

router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a new account with a unique username and email.",
    response_description="The created user.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "Username or email already registered (USERNAME_TAKEN / EMAIL_TAKEN)"},
        422: {
            "description": "Weak password, invalid email or blank username "
            "(WEAK_PASSWORD / INVALID_EMAIL / INVALID_USERNAME)"
        },
    },
)
async def register(payload: RegisterRequest, auth: AuthServiceDep) -> UserRead:
    """
    Register a new account.

    - **username**: Unique login name.
    - **email**: Unique email address, stored lower-cased.
    - **password**: At least 6 characters.
    """
    user = await auth.register(payload.username, payload.email, payload.password)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    summary="Login",
    description="Exchange username and password for an access and refresh token.",
    responses={
        200: {"description": "Login succeeded"},
        401: {"description": "Incorrect password"},
        404: {"description": "User not found"},
    },
)
async def login(payload: LoginRequest, auth: AuthServiceDep) -> TokenPair:
    """
    Log in.

    The access token's ``sub`` claim carries the username for display.
    """
    access, refresh = await auth.login(payload.username, payload.password)
    return TokenPair(access_token=access, refresh_token=refresh)


@router.post(
    "/refresh",
    response_model=AccessToken,
    summary="Refresh Access Token",
    description="Issue a new access token from a valid refresh token.",
    responses={401: {"description": "Invalid, expired or non-refresh token"}},
)
async def refresh(payload: RefreshRequest, auth: AuthServiceDep) -> AccessToken:
    access = await auth.refresh(payload.refresh_token)
    return AccessToken(access_token=access)


@router.post(
    "/forget-password",
    response_model=StatusResponse,
    summary="Reset Password",
    description="Set a new password for the account registered under an email address.",
    responses={
        404: {"description": "No account with this email"},
        422: {"description": "New password too short"},
    },
)
async def forget_password(payload: ForgetPasswordRequest, auth: AuthServiceDep) -> StatusResponse:
    await auth.reset_password(payload.email, payload.new_password)
    return StatusResponse(status="success")


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Return the account the access token belongs to.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def me(user: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(user)
