"""Bearer authentication and authorization dependencies."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hr_portal.application.services.auth_service import (
    CurrentUser,
    decode_access_token,
    is_primary_admin_email,
)
from hr_portal.core.exceptions import (
    AccountDeactivatedException,
    ForbiddenException,
    UnauthenticatedException,
    UserNotFoundException,
)
from hr_portal.domain.models.user import ROLE_ADMIN
from hr_portal.domain.repositories.user_repository import UserRepository
from hr_portal.interfaces.deps import get_user_repository

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """Resolve the bearer token to a live, active user.

    The token only proves who the caller was at issue time; existence, the
    active flag and the role are read from the store on every request.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedException()

    claims = decode_access_token(credentials.credentials)

    user = repo.get_by_id(claims.user_id)
    if user is None:
        raise UserNotFoundException()
    if not user.is_active:
        raise AccountDeactivatedException()

    return CurrentUser(id=user.id, email=user.email, role=user.role, is_active=True)


def require_primary_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Only the single configured primary-admin account."""
    if not is_primary_admin_email(user.email):
        raise ForbiddenException("Access denied. Primary admin privileges required.")
    return user


def require_admin_role(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Any account holding the admin role."""
    if user.role != ROLE_ADMIN:
        raise ForbiddenException("Access denied. Admin privileges required.")
    return user
