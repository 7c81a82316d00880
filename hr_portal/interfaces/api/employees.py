"""Employee API routes."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from hr_portal.application.services import employee_service
from hr_portal.application.services.auth_service import CurrentUser
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.repositories.employee_repository import EmployeeRepository
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.schemas.common import Pagination
from hr_portal.domain.schemas.employee import (
    EmployeeCreate,
    EmployeeDetail,
    EmployeeFilter,
    EmployeeRead,
    EmployeeStats,
    EmployeeStatusRead,
    EmployeeUpdate,
    NoteCreate,
    NoteRead,
    SortField,
)
from hr_portal.interfaces.api.deps import get_current_user, require_admin_role
from hr_portal.interfaces.deps import (
    get_client_repository,
    get_employee_repository,
    get_team_repository,
)

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("")
def list_employees(
    search: Optional[str] = None,
    team_id: Optional[int] = None,
    client_id: Optional[int] = None,
    title: Optional[str] = None,
    gender: Optional[str] = None,
    min_exp: Optional[int] = None,
    max_exp: Optional[int] = None,
    status: Optional[Literal["active", "inactive"]] = None,
    sort_by: SortField = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(get_current_user),
):
    """List employees with search, filters, sorting and pagination."""
    filters = EmployeeFilter(
        search=search,
        team_id=team_id,
        client_id=client_id,
        title=title,
        gender=gender,
        min_exp=min_exp,
        max_exp=max_exp,
        status=status,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    employees, total, filters = employee_service.get_employees(repo, filters)
    return {
        "success": True,
        "data": [EmployeeRead.model_validate(e) for e in employees],
        "pagination": Pagination.build(total, filters.page, filters.page_size),
    }


@router.get("/stats")
def employee_stats(
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(get_current_user),
):
    stats: EmployeeStats = employee_service.get_employee_stats(repo)
    return {"success": True, "data": stats}


@router.get("/{employee_id}/notes")
def list_employee_notes(
    employee_id: int,
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(get_current_user),
):
    notes = employee_service.get_employee_notes(repo, employee_id)
    return {"success": True, "data": [NoteRead.model_validate(n) for n in notes]}


@router.post("/{employee_id}/notes", status_code=status.HTTP_201_CREATED)
def add_employee_note(
    employee_id: int,
    body: NoteCreate,
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    note = employee_service.add_employee_note(repo, user, employee_id, body)
    return {
        "success": True,
        "message": "Note added successfully",
        "data": NoteRead.model_validate(note),
    }


@router.patch("/{employee_id}/toggle-status")
def toggle_employee_status(
    employee_id: int,
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    employee = employee_service.toggle_employee_status(repo, employee_id)
    return {
        "success": True,
        "message": f"Employee {'activated' if employee.is_active else 'deactivated'} successfully",
        "data": EmployeeStatusRead.model_validate(employee),
    }


@router.get("/{employee_id}")
def get_employee_by_id(
    employee_id: int,
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(get_current_user),
):
    employee = employee_service.get_employee(repo, employee_id)
    return {"success": True, "data": EmployeeDetail.model_validate(employee)}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_employee(
    body: EmployeeCreate,
    repo: EmployeeRepository = Depends(get_employee_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    employee = employee_service.create_employee(repo, team_repo, client_repo, body)
    return {
        "success": True,
        "message": "Employee created successfully",
        "data": EmployeeRead.model_validate(employee),
    }


@router.put("/{employee_id}")
def edit_employee(
    employee_id: int,
    body: EmployeeUpdate,
    repo: EmployeeRepository = Depends(get_employee_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    employee = employee_service.update_employee(repo, team_repo, client_repo, employee_id, body)
    return {
        "success": True,
        "message": "Employee updated successfully",
        "data": EmployeeRead.model_validate(employee),
    }


@router.delete("/{employee_id}")
def remove_employee(
    employee_id: int,
    hard: bool = False,
    repo: EmployeeRepository = Depends(get_employee_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    """Deactivate by default; ``?hard=true`` deletes permanently."""
    employee = employee_service.delete_employee(repo, employee_id, hard=hard)
    if employee is None:
        return {"success": True, "message": "Employee permanently deleted"}
    return {
        "success": True,
        "message": "Employee deactivated successfully",
        "data": EmployeeStatusRead.model_validate(employee),
    }
