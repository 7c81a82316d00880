"""Pydantic schemas for Client domain."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from hr_portal.domain.schemas.common import (
    EmployeeBrief,
    OptionalEmail,
    OptionalText,
    TeamBrief,
)

RequiredName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ClientBase(BaseModel):
    poc_internal_name: OptionalText = None
    poc_internal_email: OptionalEmail = None
    poc_external_name: OptionalText = None
    poc_external_email: OptionalEmail = None
    address: OptionalText = None


class ClientCreate(ClientBase):
    name: RequiredName


class ClientUpdate(ClientBase):
    name: Optional[RequiredName] = None


class ClientRead(ClientBase):
    id: int
    name: str
    team_count: int = 0
    employee_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ClientDetail(ClientRead):
    teams: list[TeamBrief] = []
    employees: list[EmployeeBrief] = Field(default=[], validation_alias="active_employees")


class ClientFilter(BaseModel):
    search: Optional[str] = None
