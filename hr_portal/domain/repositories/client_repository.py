"""
Client Repository Interface.
Defines specific data access operations for Clients.
"""

from typing import List, Optional

from hr_portal.domain.repositories.base import BaseRepository
from hr_portal.domain.models.client import Client
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.schemas.client import ClientFilter


class ClientRepository(BaseRepository[Client]):
    """Interface for Client-specific operations."""

    def get_by_name(self, name: str) -> Optional[Client]:
        """Exact name lookup."""
        ...

    def get_with_filters(self, filters: ClientFilter) -> List[Client]:
        """Clients matching the search term, ordered by name."""
        ...

    def get_teams(self, client_id: int) -> List[Team]:
        """Teams attached to the client, ordered by name."""
        ...

    def get_employees(self, client_id: int) -> List[Employee]:
        """Employees attached to the client, ordered by first name."""
        ...
