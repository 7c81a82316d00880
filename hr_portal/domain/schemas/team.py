"""Pydantic schemas for Team domain."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from hr_portal.domain.schemas.common import ClientBrief, EmployeeBrief, OptionalEmail, OptionalText

RequiredName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TeamBase(BaseModel):
    manager_name: OptionalText = None
    manager_email: OptionalEmail = None
    client_id: Optional[int] = None


class TeamCreate(TeamBase):
    name: RequiredName
    employee_ids: Optional[list[int]] = None


class TeamUpdate(TeamBase):
    name: Optional[RequiredName] = None
    employee_ids: Optional[list[int]] = None


class TeamRead(TeamBase):
    id: int
    name: str
    client: Optional[ClientBrief] = None
    employee_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TeamDetail(TeamRead):
    employees: list[EmployeeBrief] = Field(default=[], validation_alias="active_employees")


class TeamFilter(BaseModel):
    client_id: Optional[int] = None
    search: Optional[str] = None
    page: int = 1
    page_size: int = 10
