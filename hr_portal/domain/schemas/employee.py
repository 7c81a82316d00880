"""Pydantic schemas for Employee and Note domain."""

from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, Field, StrictBool, StringConstraints, model_validator

from hr_portal.domain.schemas.common import (
    AuthorBrief,
    ClientBrief,
    OptionalEmail,
    OptionalPhone,
    OptionalText,
    TeamBrief,
)

RequiredName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Gender = Literal["Male", "Female", "Other", "Prefer not to say"]
SortField = Literal["created_at", "first_name", "last_name", "date_of_joining", "employee_code"]


class EmployeeBase(BaseModel):
    employee_code: OptionalText = None
    personal_email: OptionalEmail = None
    company_email: OptionalEmail = None
    phone: OptionalPhone = None
    date_of_birth: Optional[date] = None
    date_of_joining: Optional[date] = None
    experience_years: Optional[int] = Field(default=None, ge=0, le=70)
    experience_months: Optional[int] = Field(default=None, ge=0, le=11)
    team_name: OptionalText = None
    title: OptionalText = None
    gender: Optional[Gender] = None
    team_id: Optional[int] = None
    client_id: Optional[int] = None


class EmployeeCreate(EmployeeBase):
    first_name: RequiredName
    last_name: RequiredName
    active: StrictBool = True

    @model_validator(mode="after")
    def require_an_email(self):
        if not self.personal_email and not self.company_email:
            raise ValueError("At least one email (personal or company) is required")
        return self


class EmployeeUpdate(EmployeeBase):
    """Partial update; only the fields present in the request are applied."""

    first_name: Optional[RequiredName] = None
    last_name: Optional[RequiredName] = None
    active: Optional[StrictBool] = None


class EmployeeRead(BaseModel):
    id: int
    employee_code: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    personal_email: Optional[str] = None
    company_email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_joining: Optional[date] = None
    experience_years_at_joining: Optional[int] = None
    experience_months_at_joining: Optional[int] = None
    team_name: Optional[str] = None
    title: Optional[str] = None
    gender: Optional[str] = None
    is_active: bool
    team_id: Optional[int] = None
    client_id: Optional[int] = None
    team: Optional[TeamBrief] = None
    client: Optional[ClientBrief] = None
    note_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class NoteCreate(BaseModel):
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    note_date: Optional[date] = None


class NoteRead(BaseModel):
    id: int
    content: str
    note_date: Optional[date] = None
    employee_id: int
    author: AuthorBrief
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmployeeDetail(EmployeeRead):
    notes: list[NoteRead] = []


class EmployeeStatusRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    is_active: bool

    model_config = {"from_attributes": True}


class EmployeeFilter(BaseModel):
    search: Optional[str] = None
    team_id: Optional[int] = None
    client_id: Optional[int] = None
    title: Optional[str] = None
    gender: Optional[str] = None
    min_exp: Optional[int] = None
    max_exp: Optional[int] = None
    status: Optional[Literal["active", "inactive"]] = None
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = 1
    page_size: int = 10


class GroupCount(BaseModel):
    id: int
    count: int


class EmployeeStats(BaseModel):
    total: int
    active: int
    inactive: int
    by_team: list[GroupCount]
    by_client: list[GroupCount]
