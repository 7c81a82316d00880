"""Team service — business logic for teams and their membership."""

from typing import List, Optional, Tuple

import structlog

from hr_portal.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.schemas.team import TeamCreate, TeamFilter, TeamUpdate

logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100


def _ensure_client(client_repo: ClientRepository, client_id: Optional[int]) -> None:
    if client_id and client_repo.get_by_id(client_id) is None:
        raise EntityNotFoundException("Client not found")


def get_teams(repo: TeamRepository, filters: TeamFilter) -> Tuple[List[Team], int, TeamFilter]:
    """One page of teams, the total count and the normalized filter used."""
    filters = filters.model_copy(
        update={
            "page": max(1, filters.page),
            "page_size": min(MAX_PAGE_SIZE, max(1, filters.page_size)),
        }
    )
    teams, total = repo.get_with_filters(filters)
    return teams, total, filters


def get_team(repo: TeamRepository, team_id: int) -> Team:
    team = repo.get_by_id(team_id)
    if team is None:
        raise EntityNotFoundException("Team not found")
    return team


def create_team(repo: TeamRepository, client_repo: ClientRepository, data: TeamCreate) -> Team:
    if repo.get_by_name(data.name):
        raise ConflictException("Team name already exists")
    _ensure_client(client_repo, data.client_id)

    team = repo.create(data.model_dump(exclude={"employee_ids"}))
    if data.employee_ids:
        repo.add_members(team.id, data.employee_ids)

    logger.info("Team created", team_id=team.id, members=len(data.employee_ids or []))
    return get_team(repo, team.id)


def update_team(repo: TeamRepository, client_repo: ClientRepository, team_id: int, data: TeamUpdate) -> Team:
    """Apply the fields present; ``employee_ids`` when present replaces the membership."""
    team = get_team(repo, team_id)
    changes = data.model_dump(exclude_unset=True)
    employee_ids = changes.pop("employee_ids", None)

    if "name" in changes:
        if changes["name"] is None:
            raise ValidationException("Team name cannot be empty")
        if changes["name"] != team.name and repo.get_by_name(changes["name"]):
            raise ConflictException("Team name already exists")
    if "client_id" in changes:
        _ensure_client(client_repo, changes["client_id"])

    team = repo.update(team, changes)
    if employee_ids is not None:
        repo.replace_members(team.id, employee_ids)

    return get_team(repo, team.id)


def delete_team(repo: TeamRepository, team_id: int) -> None:
    """Delete a team; its employees are kept and left without a team."""
    get_team(repo, team_id)
    repo.delete(team_id)
    logger.info("Team deleted", team_id=team_id)


def get_team_employees(repo: TeamRepository, team_id: int) -> Tuple[Team, List[Employee]]:
    team = get_team(repo, team_id)
    return team, repo.get_employees(team.id)
