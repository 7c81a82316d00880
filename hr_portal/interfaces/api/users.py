"""User management routes, primary admin only."""

from fastapi import APIRouter, Depends

from hr_portal.application.services.auth_service import CurrentUser
from hr_portal.application.services.user_service import (
    delete_user,
    get_user,
    list_users,
    update_user_role,
    update_user_status,
)
from hr_portal.domain.repositories.user_repository import UserRepository
from hr_portal.domain.schemas.auth import UserRead, UserRoleUpdate, UserStatusUpdate
from hr_portal.interfaces.api.deps import require_primary_admin
from hr_portal.interfaces.deps import get_user_repository

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
def get_users(
    repo: UserRepository = Depends(get_user_repository),
    admin: CurrentUser = Depends(require_primary_admin),
):
    return {"success": True, "data": [UserRead.model_validate(u) for u in list_users(repo)]}


@router.get("/{user_id}")
def get_user_by_id(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    admin: CurrentUser = Depends(require_primary_admin),
):
    return {"success": True, "data": UserRead.model_validate(get_user(repo, user_id))}


@router.patch("/{user_id}/status")
def change_user_status(
    user_id: int,
    body: UserStatusUpdate,
    repo: UserRepository = Depends(get_user_repository),
    admin: CurrentUser = Depends(require_primary_admin),
):
    user = update_user_status(repo, admin, user_id, body.active)
    return {
        "success": True,
        "message": f"User {'activated' if body.active else 'deactivated'} successfully",
        "data": UserRead.model_validate(user),
    }


@router.patch("/{user_id}/role")
def change_user_role(
    user_id: int,
    body: UserRoleUpdate,
    repo: UserRepository = Depends(get_user_repository),
    admin: CurrentUser = Depends(require_primary_admin),
):
    user = update_user_role(repo, admin, user_id, body.role)
    return {
        "success": True,
        "message": "User role updated successfully",
        "data": UserRead.model_validate(user),
    }


@router.delete("/{user_id}")
def remove_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    admin: CurrentUser = Depends(require_primary_admin),
):
    delete_user(repo, admin, user_id)
    return {"success": True, "message": "User deleted successfully"}
