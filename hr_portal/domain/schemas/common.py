"""Shared schema pieces: email checks, trimmed strings, envelopes."""

import re
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\s\-\+\(\)]+$")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def check_email(value: Optional[str]) -> Optional[str]:
    if value is not None and not EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


def check_phone(value: Optional[str]) -> Optional[str]:
    if value is not None and (len(value) < 10 or not PHONE_RE.match(value)):
        raise ValueError("Invalid phone number format")
    return value


# Trimmed optional text; empty strings become None
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
OptionalEmail = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(check_email)]
OptionalPhone = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(check_phone)]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class Pagination(BaseModel):
    total: int
    page: int
    page_size: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> "Pagination":
        total_pages = (total + page_size - 1) // page_size
        return cls(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_more=page < total_pages,
        )


class ClientBrief(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class TeamBrief(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class EmployeeBrief(BaseModel):
    id: int
    employee_code: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    title: Optional[str] = None
    is_active: bool

    model_config = {"from_attributes": True}


class AuthorBrief(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}
