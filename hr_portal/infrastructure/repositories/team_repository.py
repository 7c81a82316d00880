"""
SQLAlchemy Implementation of Team Repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import or_, update

from hr_portal.domain.models.client import Client
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.schemas.team import TeamFilter
from hr_portal.infrastructure.repositories.base_repository import (
    LIKE_ESCAPE,
    SQLAlchemyRepository,
    contains_pattern,
)


class SQLAlchemyTeamRepository(SQLAlchemyRepository[Team], TeamRepository):
    """Team repository implementation using SQLAlchemy."""

    def get_by_name(self, name: str) -> Optional[Team]:
        return self.db.query(Team).filter(Team.name == name).first()

    def get_with_filters(self, filters: TeamFilter) -> Tuple[List[Team], int]:
        query = self.db.query(Team).outerjoin(Client, Team.client_id == Client.id)

        if filters.client_id:
            query = query.filter(Team.client_id == filters.client_id)

        if filters.search and filters.search.strip():
            term = contains_pattern(filters.search.strip())
            query = query.filter(
                or_(
                    Team.name.ilike(term, escape=LIKE_ESCAPE),
                    Team.manager_name.ilike(term, escape=LIKE_ESCAPE),
                    Client.name.ilike(term, escape=LIKE_ESCAPE),
                )
            )

        total = query.count()
        offset = (filters.page - 1) * filters.page_size
        teams = (
            query.order_by(Team.name.asc())
            .offset(offset)
            .limit(filters.page_size)
            .all()
        )
        return teams, total

    def get_employees(self, team_id: int) -> List[Employee]:
        return (
            self.db.query(Employee)
            .filter(Employee.team_id == team_id)
            .order_by(Employee.first_name.asc())
            .all()
        )

    def replace_members(self, team_id: int, employee_ids: List[int]) -> None:
        self.db.execute(
            update(Employee)
            .where(Employee.team_id == team_id)
            .values(team_id=None)
            .execution_options(synchronize_session=False)
        )
        self.add_members(team_id, employee_ids)

    def add_members(self, team_id: int, employee_ids: List[int]) -> None:
        if employee_ids:
            self.db.execute(
                update(Employee)
                .where(Employee.id.in_(employee_ids))
                .values(team_id=team_id)
                .execution_options(synchronize_session=False)
            )
        self._commit()

    def delete(self, id: int) -> Optional[Team]:
        # Members are detached rather than deleted
        team = self.db.get(Team, id)
        if team:
            self.db.execute(
                update(Employee)
                .where(Employee.team_id == id)
                .values(team_id=None)
                .execution_options(synchronize_session=False)
            )
            self.db.delete(team)
            self._commit()
        return team
