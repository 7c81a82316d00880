"""Pydantic schemas for User, Auth and account recovery."""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field, StrictBool, StringConstraints

from hr_portal.domain.schemas.common import check_email

Role = Literal["hr", "admin"]

Email = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1), AfterValidator(check_email)]
Password = Annotated[str, Field(min_length=8)]
RecoveryAnswer = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]


class UserCreate(BaseModel):
    email: Email
    password: Password
    role: Role = "hr"


class UserSummary(BaseModel):
    id: int
    email: str
    role: str

    model_config = {"from_attributes": True}


class UserRead(UserSummary):
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


class RecoveryAnswerSet(BaseModel):
    answer: RecoveryAnswer


class RecoveryAnswerUpdate(BaseModel):
    old_answer: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    new_answer: RecoveryAnswer


class RecoveryStatus(BaseModel):
    configured: bool


class ResetAdminPassword(BaseModel):
    answer: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    new_password: Password


class ChangePassword(BaseModel):
    current_password: Annotated[str, Field(min_length=1)]
    new_password: Password


class UserStatusUpdate(BaseModel):
    active: StrictBool


class UserRoleUpdate(BaseModel):
    role: Role
