"""Recovery service — primary-admin recovery answer and password changes.

The recovery answer is a shared secret stored only as a bcrypt hash on the
primary-admin user record. It is either unset (no hash) or set; resetting the
password with it never changes the hash.

Password and hash replacements are conditional writes keyed on the hash read
during verification, so a concurrent change between verify and write is
reported as a conflict instead of being silently overwritten.
"""

import structlog

from hr_portal.application.services.auth_service import (
    CurrentUser,
    hash_password,
    verify_password,
)
from hr_portal.config import get_settings
from hr_portal.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    InvalidCredentialException,
    RecoveryNotConfiguredException,
    ValidationException,
)
from hr_portal.domain.models.user import User
from hr_portal.domain.repositories.user_repository import UserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)

MIN_RECOVERY_ANSWER_LENGTH = 3
MIN_PASSWORD_LENGTH = 8

RESET_FAILURE_MESSAGE = "Invalid recovery credentials"


# Verified against when there is nothing real to compare, so every reset costs one bcrypt check
DUMMY_ANSWER_HASH = hash_password("recovery-answer-placeholder")


def _normalize_answer(answer: str) -> str:
    normalized = (answer or "").strip()
    if len(normalized) < MIN_RECOVERY_ANSWER_LENGTH:
        raise ValidationException(
            f"Recovery answer must be at least {MIN_RECOVERY_ANSWER_LENGTH} characters"
        )
    return normalized


def _check_password_length(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def _load_admin(repo: UserRepository, actor: CurrentUser) -> User:
    admin = repo.get_by_id(actor.id)
    if admin is None:
        raise EntityNotFoundException("Admin account not found")
    return admin


def is_recovery_configured(repo: UserRepository) -> bool:
    admin = repo.get_by_email(settings.PRIMARY_ADMIN_EMAIL)
    return bool(admin and admin.recovery_answer_hash)


def set_recovery_answer(repo: UserRepository, actor: CurrentUser, answer: str) -> None:
    """Store (or overwrite) the recovery answer. No proof of a previous answer is needed."""
    normalized = _normalize_answer(answer)
    admin = _load_admin(repo, actor)

    repo.set_recovery_answer_hash(admin.id, hash_password(normalized))
    logger.info("Recovery answer configured", user_id=admin.id)


def update_recovery_answer(repo: UserRepository, actor: CurrentUser, old_answer: str, new_answer: str) -> None:
    """Replace the recovery answer after proving knowledge of the current one."""
    normalized = _normalize_answer(new_answer)
    admin = _load_admin(repo, actor)

    current_hash = admin.recovery_answer_hash
    if not current_hash:
        raise RecoveryNotConfiguredException()

    if not verify_password((old_answer or "").strip(), current_hash):
        logger.warning("Recovery answer update rejected", user_id=admin.id, reason="wrong_old_answer")
        raise InvalidCredentialException("Invalid recovery credentials")

    if not repo.compare_and_set_recovery_answer_hash(admin.id, current_hash, hash_password(normalized)):
        logger.warning("Recovery answer update lost a concurrent write", user_id=admin.id)
        raise ConflictException("Recovery answer was changed concurrently. Please retry.")

    logger.info("Recovery answer updated", user_id=admin.id)


def reset_admin_password(repo: UserRepository, answer: str, new_password: str) -> None:
    """Unauthenticated password reset for the primary admin.

    A missing account, a missing recovery answer and a wrong answer all raise
    the same ``InvalidCredentialException`` after one bcrypt verification; only
    the log line tells them apart.
    """
    _check_password_length(new_password)
    normalized = (answer or "").strip()

    admin = repo.get_by_email(settings.PRIMARY_ADMIN_EMAIL)
    stored_hash = admin.recovery_answer_hash if admin else None

    if stored_hash is None:
        verify_password(normalized, DUMMY_ANSWER_HASH)
        logger.warning(
            "Admin password reset rejected",
            reason="admin_missing" if admin is None else "recovery_not_configured",
        )
        raise InvalidCredentialException(RESET_FAILURE_MESSAGE)

    if not verify_password(normalized, stored_hash):
        logger.warning("Admin password reset rejected", reason="wrong_answer", user_id=admin.id)
        raise InvalidCredentialException(RESET_FAILURE_MESSAGE)

    if not repo.compare_and_set_password_hash(admin.id, admin.password_hash, hash_password(new_password)):
        logger.warning("Admin password reset lost a concurrent write", user_id=admin.id)
        raise ConflictException("Password was changed concurrently. Please retry.")

    # Tokens issued before the reset stay valid until they expire
    logger.info("Admin password reset via recovery answer", user_id=admin.id)


def change_password(repo: UserRepository, actor: CurrentUser, current_password: str, new_password: str) -> None:
    """Authenticated password change; requires the current password."""
    _check_password_length(new_password)
    admin = _load_admin(repo, actor)

    current_hash = admin.password_hash
    if not verify_password(current_password or "", current_hash):
        logger.warning("Password change rejected", user_id=admin.id, reason="wrong_current_password")
        raise InvalidCredentialException("Current password is incorrect")

    if not repo.compare_and_set_password_hash(admin.id, current_hash, hash_password(new_password)):
        logger.warning("Password change lost a concurrent write", user_id=admin.id)
        raise ConflictException("Password was changed concurrently. Please retry.")

    logger.info("Password changed", user_id=admin.id)
