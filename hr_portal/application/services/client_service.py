"""Business logic for client records."""

from typing import List, Tuple

import structlog

from hr_portal.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from hr_portal.domain.models.client import Client
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.schemas.client import ClientCreate, ClientFilter, ClientUpdate

logger = structlog.get_logger(__name__)


def get_clients(repo: ClientRepository, filters: ClientFilter) -> List[Client]:
    """List clients matching the search term, ordered by name."""
    return repo.get_with_filters(filters)


def get_client(repo: ClientRepository, client_id: int) -> Client:
    client = repo.get_by_id(client_id)
    if client is None:
        raise EntityNotFoundException("Client not found")
    return client


def create_client(repo: ClientRepository, data: ClientCreate) -> Client:
    if repo.get_by_name(data.name):
        raise ConflictException("Client name already exists")

    client = repo.create(data.model_dump())
    logger.info("Client created", client_id=client.id)
    return client


def update_client(repo: ClientRepository, client_id: int, data: ClientUpdate) -> Client:
    client = get_client(repo, client_id)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes:
        if changes["name"] is None:
            raise ValidationException("Client name cannot be empty")
        if changes["name"] != client.name and repo.get_by_name(changes["name"]):
            raise ConflictException("Client name already exists")

    return repo.update(client, changes)


def delete_client(repo: ClientRepository, client_id: int) -> None:
    """Delete a client that has no teams or employees attached."""
    client = get_client(repo, client_id)
    if client.team_count > 0 or client.employee_count > 0:
        raise ConflictException(
            f"Cannot delete client. It has {client.team_count} team(s) and "
            f"{client.employee_count} employee(s) associated."
        )

    repo.delete(client.id)
    logger.info("Client deleted", client_id=client_id)


def get_client_teams(repo: ClientRepository, client_id: int) -> Tuple[Client, List[Team]]:
    client = get_client(repo, client_id)
    return client, repo.get_teams(client.id)


def get_client_employees(repo: ClientRepository, client_id: int) -> Tuple[Client, List[Employee]]:
    client = get_client(repo, client_id)
    return client, repo.get_employees(client.id)
