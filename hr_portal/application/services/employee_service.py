"""Employee service — employee records, status changes, stats and notes."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pytz
import structlog

from hr_portal.application.services.auth_service import CurrentUser
from hr_portal.config import get_settings
from hr_portal.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.note import Note
from hr_portal.domain.repositories.client_repository import ClientRepository
from hr_portal.domain.repositories.employee_repository import EmployeeRepository
from hr_portal.domain.repositories.team_repository import TeamRepository
from hr_portal.domain.schemas.employee import (
    EmployeeCreate,
    EmployeeFilter,
    EmployeeStats,
    EmployeeUpdate,
    NoteCreate,
)

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100

# Request field -> column, where the names differ
FIELD_COLUMNS = {
    "experience_years": "experience_years_at_joining",
    "experience_months": "experience_months_at_joining",
    "active": "is_active",
}


def get_current_date() -> date:
    """Get current date in the configured timezone."""
    return datetime.now(tz).date()


def _ensure_relations(
    team_repo: TeamRepository,
    client_repo: ClientRepository,
    team_id: Optional[int],
    client_id: Optional[int],
) -> None:
    if team_id is not None and team_repo.get_by_id(team_id) is None:
        raise EntityNotFoundException("Team not found")
    if client_id is not None and client_repo.get_by_id(client_id) is None:
        raise EntityNotFoundException("Client not found")


def get_employees(repo: EmployeeRepository, filters: EmployeeFilter) -> Tuple[List[Employee], int, EmployeeFilter]:
    """One page of employees, the total count and the normalized filter used."""
    filters = filters.model_copy(
        update={
            "page": max(1, filters.page),
            "page_size": min(MAX_PAGE_SIZE, max(1, filters.page_size)),
        }
    )
    employees, total = repo.get_with_filters(filters)
    return employees, total, filters


def get_employee_stats(repo: EmployeeRepository) -> EmployeeStats:
    return repo.get_stats()


def get_employee(repo: EmployeeRepository, employee_id: int) -> Employee:
    employee = repo.get_by_id(employee_id)
    if employee is None:
        raise EntityNotFoundException("Employee not found")
    return employee


def create_employee(
    repo: EmployeeRepository,
    team_repo: TeamRepository,
    client_repo: ClientRepository,
    data: EmployeeCreate,
) -> Employee:
    if data.employee_code and repo.get_by_code(data.employee_code):
        raise ConflictException("Employee code already exists")

    main_email = data.company_email or data.personal_email
    if repo.get_by_email(main_email):
        raise ConflictException("Email already exists")

    _ensure_relations(team_repo, client_repo, data.team_id, data.client_id)

    employee = repo.create(
        {
            "employee_code": data.employee_code,
            "first_name": data.first_name,
            "last_name": data.last_name,
            "email": main_email,
            "personal_email": data.personal_email,
            "company_email": data.company_email,
            "phone": data.phone,
            "date_of_birth": data.date_of_birth,
            "date_of_joining": data.date_of_joining,
            "experience_years_at_joining": data.experience_years,
            "experience_months_at_joining": data.experience_months,
            "team_name": data.team_name,
            "title": data.title or data.team_name,
            "gender": data.gender,
            "is_active": data.active,
            "team_id": data.team_id,
            "client_id": data.client_id,
        }
    )
    logger.info("Employee created", employee_id=employee.id)
    return employee


def update_employee(
    repo: EmployeeRepository,
    team_repo: TeamRepository,
    client_repo: ClientRepository,
    employee_id: int,
    data: EmployeeUpdate,
) -> Employee:
    """Apply only the fields present in the request."""
    employee = get_employee(repo, employee_id)
    changes = data.model_dump(exclude_unset=True)

    for required in ("first_name", "last_name", "active"):
        if required in changes and changes[required] is None:
            raise ValidationException(f"{required} cannot be empty")

    code = changes.get("employee_code")
    if code and code != employee.employee_code and repo.get_by_code(code):
        raise ConflictException("Employee code already exists")

    if "personal_email" in changes or "company_email" in changes:
        company = changes.get("company_email", employee.company_email)
        personal = changes.get("personal_email", employee.personal_email)
        main_email = company or personal
        if not main_email:
            raise ValidationException("At least one email (personal or company) is required")
        if main_email != employee.email:
            if repo.get_by_email(main_email, exclude_id=employee.id):
                raise ConflictException("Email already exists")
            changes["email"] = main_email

    _ensure_relations(team_repo, client_repo, changes.get("team_id"), changes.get("client_id"))

    update_data: Dict[str, Any] = {FIELD_COLUMNS.get(field, field): value for field, value in changes.items()}
    return repo.update(employee, update_data)


def delete_employee(repo: EmployeeRepository, employee_id: int, hard: bool = False) -> Optional[Employee]:
    """Soft delete (deactivate) by default; ``hard`` removes the record when it has no notes."""
    employee = get_employee(repo, employee_id)

    if not hard:
        employee = repo.update(employee, {"is_active": False})
        logger.info("Employee deactivated", employee_id=employee_id)
        return employee

    if employee.note_count > 0:
        raise ConflictException(
            "Cannot delete employee with existing notes. Please delete notes first or use soft delete."
        )
    repo.delete(employee.id)
    logger.info("Employee permanently deleted", employee_id=employee_id)
    return None


def toggle_employee_status(repo: EmployeeRepository, employee_id: int) -> Employee:
    employee = get_employee(repo, employee_id)
    return repo.update(employee, {"is_active": not employee.is_active})


def get_employee_notes(repo: EmployeeRepository, employee_id: int) -> List[Note]:
    get_employee(repo, employee_id)
    return repo.get_notes(employee_id)


def add_employee_note(
    repo: EmployeeRepository,
    author: CurrentUser,
    employee_id: int,
    data: NoteCreate,
) -> Note:
    get_employee(repo, employee_id)

    note = Note(
        content=data.content,
        note_date=data.note_date or get_current_date(),
        employee_id=employee_id,
        author_id=author.id,
    )
    note = repo.add_note(note)
    logger.info("Note added", employee_id=employee_id, note_id=note.id, author_id=author.id)
    return note
