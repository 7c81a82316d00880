"""Auth service — JWT token management, password hashing, login and registration."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from hr_portal.config import get_settings
from hr_portal.core.exceptions import (
    AccountDeactivatedException,
    ConflictException,
    ForbiddenException,
    InvalidCredentialException,
    InvalidTokenException,
    TokenExpiredException,
)
from hr_portal.domain.models.user import ROLE_ADMIN, ROLE_HR, User
from hr_portal.domain.repositories.user_repository import UserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


@dataclass(frozen=True)
class SessionClaims:
    """Decoded bearer token content. Never persisted."""

    user_id: int
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to an authenticated request, loaded fresh from the store."""

    id: int
    email: str
    role: str
    is_active: bool = True


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def is_primary_admin_email(email: Optional[str]) -> bool:
    return email is not None and email == settings.PRIMARY_ADMIN_EMAIL


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> SessionClaims:
    """Verify signature and expiry, then parse the identity claims.

    Raises:
        TokenExpiredException: the token is authentic but past its expiry.
        InvalidTokenException: bad signature, bad structure or missing claims.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpiredException()
    except JWTError:
        raise InvalidTokenException()

    try:
        return SessionClaims(
            user_id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidTokenException()


def authenticate_user(repo: UserRepository, email: str, password: str) -> User:
    """Check credentials; the active flag is only revealed to a caller who knows the password."""
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed", email=email, reason="bad_credentials" if user else "unknown_email")
        raise InvalidCredentialException("Invalid credentials")
    if not user.is_active:
        logger.warning("Login rejected for deactivated account", user_id=user.id)
        raise AccountDeactivatedException()

    logger.info("Login succeeded", user_id=user.id, role=user.role)
    return user


def get_user_by_email(repo: UserRepository, email: str) -> Optional[User]:
    return repo.get_by_email(email)


def create_user(repo: UserRepository, email: str, password: str, role: str = ROLE_HR) -> User:
    return repo.create(
        {
            "email": email,
            "password_hash": hash_password(password),
            "role": role,
            "is_active": True,
        }
    )


def register_user(repo: UserRepository, email: str, password: str, role: str = ROLE_HR) -> User:
    """Open self-registration, gated by ``ALLOW_OPEN_REGISTRATION``."""
    if not settings.ALLOW_OPEN_REGISTRATION:
        raise ForbiddenException("Registration is disabled")
    if is_primary_admin_email(email):
        raise ForbiddenException("This account cannot be registered")
    if repo.get_by_email(email):
        raise ConflictException("User already exists")

    user = create_user(repo, email=email, password=password, role=role)
    logger.info("User registered", user_id=user.id, role=user.role)
    return user


def ensure_primary_admin(repo: UserRepository) -> Optional[User]:
    """Create the primary admin account at startup when a bootstrap password is configured."""
    existing = repo.get_by_email(settings.PRIMARY_ADMIN_EMAIL)
    if existing or not settings.PRIMARY_ADMIN_PASSWORD:
        return existing

    admin = create_user(
        repo,
        email=settings.PRIMARY_ADMIN_EMAIL,
        password=settings.PRIMARY_ADMIN_PASSWORD,
        role=ROLE_ADMIN,
    )
    logger.info("Primary admin account created", email=admin.email)
    return admin
