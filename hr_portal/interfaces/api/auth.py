"""Auth API routes — register, login, me, account recovery and password change."""

from fastapi import APIRouter, Depends, status

from hr_portal.application.services import recovery_service
from hr_portal.application.services.auth_service import (
    CurrentUser,
    authenticate_user,
    create_access_token,
    register_user,
)
from hr_portal.core.rate_limit import login_limiter, recovery_answer_limiter, reset_password_limiter
from hr_portal.domain.repositories.user_repository import UserRepository
from hr_portal.domain.schemas.auth import (
    ChangePassword,
    LoginRequest,
    RecoveryAnswerSet,
    RecoveryAnswerUpdate,
    RecoveryStatus,
    ResetAdminPassword,
    TokenResponse,
    UserCreate,
    UserRead,
    UserSummary,
)
from hr_portal.domain.schemas.common import MessageResponse
from hr_portal.interfaces.api.deps import get_current_user, require_primary_admin
from hr_portal.interfaces.deps import get_user_repository

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, repo: UserRepository = Depends(get_user_repository)):
    user = register_user(repo, email=body.email, password=body.password, role=body.role)
    return UserSummary.model_validate(user)


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(login_limiter)])
def login(body: LoginRequest, repo: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(repo, body.email, body.password)
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserSummary.model_validate(user),
    )


@router.get("/me", response_model=UserRead)
def get_me(
    user: CurrentUser = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    return UserRead.model_validate(repo.get_by_id(user.id))


@router.get("/recovery-configured", response_model=RecoveryStatus)
def recovery_configured(repo: UserRepository = Depends(get_user_repository)):
    return RecoveryStatus(configured=recovery_service.is_recovery_configured(repo))


@router.post(
    "/reset-admin-password",
    response_model=MessageResponse,
    dependencies=[Depends(reset_password_limiter)],
)
def reset_admin_password(body: ResetAdminPassword, repo: UserRepository = Depends(get_user_repository)):
    """Forgot-password flow for the primary admin, authorized by the recovery answer."""
    recovery_service.reset_admin_password(repo, body.answer, body.new_password)
    return MessageResponse(message="Password has been reset. Please log in with the new password.")


@router.post("/set-recovery-answer", response_model=MessageResponse)
def set_recovery_answer(
    body: RecoveryAnswerSet,
    admin: CurrentUser = Depends(require_primary_admin),
    _: None = Depends(recovery_answer_limiter),
    repo: UserRepository = Depends(get_user_repository),
):
    recovery_service.set_recovery_answer(repo, admin, body.answer)
    return MessageResponse(message="Recovery answer saved")


@router.post("/update-recovery-answer", response_model=MessageResponse)
def update_recovery_answer(
    body: RecoveryAnswerUpdate,
    admin: CurrentUser = Depends(require_primary_admin),
    _: None = Depends(recovery_answer_limiter),
    repo: UserRepository = Depends(get_user_repository),
):
    recovery_service.update_recovery_answer(repo, admin, body.old_answer, body.new_answer)
    return MessageResponse(message="Recovery answer updated")


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePassword,
    admin: CurrentUser = Depends(require_primary_admin),
    repo: UserRepository = Depends(get_user_repository),
):
    recovery_service.change_password(repo, admin, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")
