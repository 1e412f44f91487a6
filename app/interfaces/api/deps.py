"""FastAPI dependency: JWT auth and role gates."""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.application.services.auth_service import resolve_user
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.models.user import User, UserRole
from app.infrastructure.database import get_db

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Extract and validate the current user from the bearer token."""
    if credentials is None:
        raise UnauthorizedException("Missing bearer token")

    user = resolve_user(db, credentials.credentials)
    if user is None:
        raise UnauthorizedException("Invalid or expired token")
    if not user.active:
        raise UnauthorizedException("User not found or inactive")

    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Build a dependency admitting only users holding one of the given authorities."""
    allowed = {role.authority for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role.authority not in allowed:
            raise ForbiddenException("You do not have permission to access this resource")
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
