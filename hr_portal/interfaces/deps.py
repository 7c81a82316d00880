"""
API Dependencies.
Repositories are built per request around the request's session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hr_portal.infrastructure.database import get_db
from hr_portal.domain.models.client import Client
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.team import Team
from hr_portal.domain.models.user import User
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.repositories.employee_repository import EmployeeRepository
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.repositories.user_repository import UserRepository
from hr_portal.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from hr_portal.infrastructure.repositories.employee_repository import SQLAlchemyEmployeeRepository
from hr_portal.infrastructure.repositories.team_repository import SQLAlchemyTeamRepository
from hr_portal.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_client_repository(db: Session = Depends(get_db)) -> ClientRepository:
    """Get client repository instance."""
    return SQLAlchemyClientRepository(db, Client)


def get_team_repository(db: Session = Depends(get_db)) -> TeamRepository:
    """Get team repository instance."""
    return SQLAlchemyTeamRepository(db, Team)


def get_employee_repository(db: Session = Depends(get_db)) -> EmployeeRepository:
    """Get employee repository instance."""
    return SQLAlchemyEmployeeRepository(db, Employee)
