"""Team API routes: CRUD, filtering and membership."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from hr_portal.application.services.auth_service import CurrentUser
from hr_portal.application.services.team_service import (
    create_team,
    delete_team,
    get_team,
    get_team_employees,
    get_teams,
    update_team,
)
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.schemas.common import EmployeeBrief, Pagination, TeamBrief
from hr_portal.domain.schemas.team import TeamCreate, TeamDetail, TeamFilter, TeamRead, TeamUpdate
from hr_portal.interfaces.api.deps import get_current_user, require_admin_role
from hr_portal.interfaces.deps import get_client_repository, get_team_repository

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get("")
def list_teams(
    client_id: Optional[int] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    repo: TeamRepository = Depends(get_team_repository),
    user: CurrentUser = Depends(get_current_user),
):
    filters = TeamFilter(client_id=client_id, search=search, page=page, page_size=page_size)
    teams, total, filters = get_teams(repo, filters)
    return {
        "success": True,
        "data": [TeamRead.model_validate(t) for t in teams],
        "pagination": Pagination.build(total, filters.page, filters.page_size),
    }


@router.get("/{team_id}/employees")
def team_employees(
    team_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: CurrentUser = Depends(get_current_user),
):
    team, employees = get_team_employees(repo, team_id)
    return {
        "success": True,
        "data": [EmployeeBrief.model_validate(e) for e in employees],
        "team": TeamBrief.model_validate(team),
    }


@router.get("/{team_id}")
def get_team_by_id(
    team_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return {"success": True, "data": TeamDetail.model_validate(get_team(repo, team_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_team(
    body: TeamCreate,
    repo: TeamRepository = Depends(get_team_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    team = create_team(repo, client_repo, body)
    return {
        "success": True,
        "message": "Team created successfully",
        "data": TeamDetail.model_validate(team),
    }


@router.put("/{team_id}")
def edit_team(
    team_id: int,
    body: TeamUpdate,
    repo: TeamRepository = Depends(get_team_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    team = update_team(repo, client_repo, team_id, body)
    return {
        "success": True,
        "message": "Team updated successfully",
        "data": TeamDetail.model_validate(team),
    }


@router.delete("/{team_id}")
def remove_team(
    team_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    delete_team(repo, team_id)
    return {"success": True, "message": "Team deleted successfully"}
