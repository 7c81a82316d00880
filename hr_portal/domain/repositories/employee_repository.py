"""
Employee Repository Interface.
Employees and the notes attached to them.
"""

from typing import List, Optional, Tuple

from hr_portal.domain.repositories.base import BaseRepository
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.note import Note
from hr_portal.domain.schemas.employee import EmployeeFilter, EmployeeStats


class EmployeeRepository(BaseRepository[Employee]):
    """Interface for Employee-specific operations."""

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        ...

    def get_by_email(self, email: str, exclude_id: Optional[int] = None) -> Optional[Employee]:
        ...

    def get_with_filters(self, filters: EmployeeFilter) -> Tuple[List[Employee], int]:
        """One page of employees plus the total match count."""
        ...

    def get_stats(self) -> EmployeeStats:
        ...

    def get_notes(self, employee_id: int) -> List[Note]:
        """Notes for the employee, newest first."""
        ...

    def add_note(self, note: Note) -> Note:
        ...
