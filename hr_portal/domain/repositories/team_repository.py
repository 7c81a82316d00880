"""
Team Repository Interface.
Defines specific data access operations for Teams.
"""

from typing import List, Optional, Tuple

from hr_portal.domain.repositories.base import BaseRepository
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.schemas.team import TeamFilter


class TeamRepository(BaseRepository[Team]):
    """Interface for Team-specific operations."""

    def get_by_name(self, name: str) -> Optional[Team]:
        """Exact name lookup."""
        ...

    def get_with_filters(self, filters: TeamFilter) -> Tuple[List[Team], int]:
        """One page of teams plus the total match count."""
        ...

    def get_employees(self, team_id: int) -> List[Employee]:
        """Employees assigned to the team, ordered by first name."""
        ...

    def replace_members(self, team_id: int, employee_ids: List[int]) -> None:
        """Detach current members, then attach the given employees."""
        ...

    def add_members(self, team_id: int, employee_ids: List[int]) -> None:
        """Attach the given employees to the team."""
        ...
