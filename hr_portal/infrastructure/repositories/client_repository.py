"""
SQLAlchemy Implementation of Client Repository.
"""

from typing import List, Optional

from sqlalchemy import or_

from hr_portal.domain.models.client import Client
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.schemas.client import ClientFilter
from hr_portal.infrastructure.repositories.base_repository import (
    LIKE_ESCAPE,
    SQLAlchemyRepository,
    contains_pattern,
)


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """Client repository implementation using SQLAlchemy."""

    def get_by_name(self, name: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.name == name).first()

    def get_with_filters(self, filters: ClientFilter) -> List[Client]:
        query = self.db.query(Client)

        if filters.search and filters.search.strip():
            term = contains_pattern(filters.search.strip())
            query = query.filter(
                or_(
                    Client.name.ilike(term, escape=LIKE_ESCAPE),
                    Client.poc_internal_name.ilike(term, escape=LIKE_ESCAPE),
                    Client.poc_external_name.ilike(term, escape=LIKE_ESCAPE),
                    Client.address.ilike(term, escape=LIKE_ESCAPE),
                )
            )

        return query.order_by(Client.name.asc()).all()

    def get_teams(self, client_id: int) -> List[Team]:
        return (
            self.db.query(Team)
            .filter(Team.client_id == client_id)
            .order_by(Team.name.asc())
            .all()
        )

    def get_employees(self, client_id: int) -> List[Employee]:
        return (
            self.db.query(Employee)
            .filter(Employee.client_id == client_id)
            .order_by(Employee.first_name.asc())
            .all()
        )
