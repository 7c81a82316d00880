"""Client API routes, including the teams and employees attached to a client."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from hr_portal.application.services.auth_service import CurrentUser
from hr_portal.application.services.client_service import (
    create_client,
    delete_client,
    get_client,
    get_client_employees,
    get_client_teams,
    get_clients,
    update_client,
)
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.schemas.client import ClientCreate, ClientDetail, ClientFilter, ClientRead, ClientUpdate
from hr_portal.domain.schemas.common import ClientBrief, EmployeeBrief
from hr_portal.domain.schemas.team import TeamRead
from hr_portal.interfaces.api.deps import get_current_user, require_admin_role
from hr_portal.interfaces.deps import get_client_repository

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("")
def list_clients(
    search: Optional[str] = None,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(get_current_user),
):
    """List clients, optionally filtered by name, POC names or address."""
    clients = get_clients(repo, ClientFilter(search=search))
    return {"success": True, "data": [ClientRead.model_validate(c) for c in clients]}


@router.get("/{client_id}/teams")
def client_teams(
    client_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(get_current_user),
):
    client, teams = get_client_teams(repo, client_id)
    return {
        "success": True,
        "data": [TeamRead.model_validate(t) for t in teams],
        "client": ClientBrief.model_validate(client),
    }


@router.get("/{client_id}/employees")
def client_employees(
    client_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(get_current_user),
):
    client, employees = get_client_employees(repo, client_id)
    return {
        "success": True,
        "data": [EmployeeBrief.model_validate(e) for e in employees],
        "client": ClientBrief.model_validate(client),
    }


@router.get("/{client_id}")
def get_client_by_id(
    client_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return {"success": True, "data": ClientDetail.model_validate(get_client(repo, client_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_client(
    body: ClientCreate,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    client = create_client(repo, body)
    return {
        "success": True,
        "message": "Client created successfully",
        "data": ClientRead.model_validate(client),
    }


@router.put("/{client_id}")
def edit_client(
    client_id: int,
    body: ClientUpdate,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    client = update_client(repo, client_id, body)
    return {
        "success": True,
        "message": "Client updated successfully",
        "data": ClientDetail.model_validate(client),
    }


@router.delete("/{client_id}")
def remove_client(
    client_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: CurrentUser = Depends(require_admin_role),
):
    delete_client(repo, client_id)
    return {"success": True, "message": "Client deleted successfully"}
