"""
Request dependencies shared by the API routers.

Provides typed ``Annotated`` aliases for the database session, the auth
service and the authenticated user.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from moolaegis.core.database import get_session
from moolaegis.core.database.entities.users import User
from moolaegis.core.database.repositories.users import UserRepository

from .auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_auth_service(session: SessionDep) -> AuthService:
    return AuthService(UserRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(
    auth: AuthServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer access token to a user, raising 401 when it is missing or invalid."""
    token = credentials.credentials if credentials else None
    return await auth.resolve_access_token(token)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
