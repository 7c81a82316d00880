"""Account administration by the primary admin."""

from typing import List

import structlog

from hr_portal.application.services.auth_service import CurrentUser, is_primary_admin_email
from hr_portal.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    ForbiddenException,
    ValidationException,
)
from hr_portal.domain.models.user import ROLES, User
from hr_portal.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def list_users(repo: UserRepository) -> List[User]:
    return repo.list_newest_first()


def get_user(repo: UserRepository, user_id: int) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return user


def update_user_status(repo: UserRepository, actor: CurrentUser, user_id: int, active: bool) -> User:
    """Activate or deactivate an account. The primary admin can never be deactivated."""
    if not isinstance(active, bool):
        raise ValidationException("Active status must be a boolean")

    user = get_user(repo, user_id)
    if is_primary_admin_email(user.email) and not active:
        logger.warning("Refused to deactivate primary admin", actor_id=actor.id)
        raise ForbiddenException("Cannot deactivate the main admin account")

    user = repo.update(user, {"is_active": active})
    logger.info("User status changed", actor_id=actor.id, user_id=user.id, active=active)
    return user


def update_user_role(repo: UserRepository, actor: CurrentUser, user_id: int, role: str) -> User:
    """Change an account's role. The primary admin's role is immutable."""
    if role not in ROLES:
        raise ValidationException("Invalid role. Must be 'hr' or 'admin'")

    user = get_user(repo, user_id)
    if is_primary_admin_email(user.email):
        logger.warning("Refused to change primary admin role", actor_id=actor.id)
        raise ForbiddenException("Cannot change role of primary admin account")

    user = repo.update(user, {"role": role})
    logger.info("User role changed", actor_id=actor.id, user_id=user.id, role=role)
    return user


def delete_user(repo: UserRepository, actor: CurrentUser, user_id: int) -> None:
    """Delete an account that owns no notes. The primary admin is never deletable."""
    user = get_user(repo, user_id)
    if is_primary_admin_email(user.email):
        logger.warning("Refused to delete primary admin", actor_id=actor.id)
        raise ForbiddenException("Cannot delete the main admin account")

    note_count = repo.count_notes(user.id)
    if note_count > 0:
        raise ConflictException(
            f"Cannot delete user with {note_count} note(s). Please reassign or delete notes first."
        )

    repo.delete(user.id)
    logger.info("User deleted", actor_id=actor.id, user_id=user_id)
