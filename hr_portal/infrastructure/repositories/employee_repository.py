"""
SQLAlchemy Implementation of Employee Repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.note import Note
from hr_portal.domain.repositories.employee_repository import EmployeeRepository
from hr_portal.domain.schemas.employee import EmployeeFilter, EmployeeStats, GroupCount
from hr_portal.infrastructure.repositories.base_repository import (
    LIKE_ESCAPE,
    SQLAlchemyRepository,
    contains_pattern,
)

SORT_COLUMNS = {
    "created_at": Employee.created_at,
    "first_name": Employee.first_name,
    "last_name": Employee.last_name,
    "date_of_joining": Employee.date_of_joining,
    "employee_code": Employee.employee_code,
}


class SQLAlchemyEmployeeRepository(SQLAlchemyRepository[Employee], EmployeeRepository):
    """Employee repository implementation using SQLAlchemy."""

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.employee_code == employee_code).first()

    def get_by_email(self, email: str, exclude_id: Optional[int] = None) -> Optional[Employee]:
        query = self.db.query(Employee).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        return query.first()

    def get_with_filters(self, filters: EmployeeFilter) -> Tuple[List[Employee], int]:
        query = self.db.query(Employee)

        if filters.search and filters.search.strip():
            term = contains_pattern(filters.search.strip())
            query = query.filter(
                or_(
                    Employee.employee_code.ilike(term, escape=LIKE_ESCAPE),
                    Employee.first_name.ilike(term, escape=LIKE_ESCAPE),
                    Employee.last_name.ilike(term, escape=LIKE_ESCAPE),
                    Employee.email.ilike(term, escape=LIKE_ESCAPE),
                    Employee.personal_email.ilike(term, escape=LIKE_ESCAPE),
                    Employee.company_email.ilike(term, escape=LIKE_ESCAPE),
                    Employee.title.ilike(term, escape=LIKE_ESCAPE),
                )
            )

        if filters.team_id:
            query = query.filter(Employee.team_id == filters.team_id)
        if filters.client_id:
            query = query.filter(Employee.client_id == filters.client_id)
        if filters.title and filters.title.strip():
            title = contains_pattern(filters.title.strip())
            query = query.filter(Employee.title.ilike(title, escape=LIKE_ESCAPE))
        if filters.gender and filters.gender.strip():
            query = query.filter(Employee.gender == filters.gender.strip())
        if filters.min_exp is not None:
            query = query.filter(Employee.experience_years_at_joining >= filters.min_exp)
        if filters.max_exp is not None:
            query = query.filter(Employee.experience_years_at_joining <= filters.max_exp)

        if filters.status == "active":
            query = query.filter(Employee.is_active.is_(True))
        elif filters.status == "inactive":
            query = query.filter(Employee.is_active.is_(False))

        total = query.count()

        column = SORT_COLUMNS[filters.sort_by]
        ordering = column.asc() if filters.sort_order == "asc" else column.desc()
        offset = (filters.page - 1) * filters.page_size
        employees = (
            query.order_by(ordering, Employee.id.asc())
            .offset(offset)
            .limit(filters.page_size)
            .all()
        )
        return employees, total

    def get_stats(self) -> EmployeeStats:
        total = self.db.query(func.count(Employee.id)).scalar() or 0
        active = (
            self.db.query(func.count(Employee.id)).filter(Employee.is_active.is_(True)).scalar() or 0
        )

        by_team = (
            self.db.query(Employee.team_id, func.count(Employee.id))
            .filter(Employee.team_id.isnot(None))
            .group_by(Employee.team_id)
            .all()
        )
        by_client = (
            self.db.query(Employee.client_id, func.count(Employee.id))
            .filter(Employee.client_id.isnot(None))
            .group_by(Employee.client_id)
            .all()
        )

        return EmployeeStats(
            total=total,
            active=active,
            inactive=total - active,
            by_team=[GroupCount(id=team_id, count=count) for team_id, count in by_team],
            by_client=[GroupCount(id=client_id, count=count) for client_id, count in by_client],
        )

    def get_notes(self, employee_id: int) -> List[Note]:
        return (
            self.db.query(Note)
            .filter(Note.employee_id == employee_id)
            .order_by(Note.created_at.desc(), Note.id.desc())
            .all()
        )

    def add_note(self, note: Note) -> Note:
        self.db.add(note)
        self._commit()
        self.db.refresh(note)
        return note
