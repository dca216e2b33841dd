"""Pydantic schemas for accounts, authentication and approval."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from campus_events.models.account import Role

SIGNUP_ROLES = (Role.student, Role.staff)


class SignupRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    role: Role = Role.student
    department: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password cannot be longer than 72 bytes")
        return value

    @field_validator("role")
    @classmethod
    def role_open_to_signup(cls, value: Role) -> Role:
        # Admin authority is only granted by reassignment.
        if value not in SIGNUP_ROLES:
            raise ValueError("Accounts can only sign up as student or staff")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RoleUpdate(BaseModel):
    role: Role


class AccountOut(BaseModel):
    account_id: str
    full_name: str
    email: str
    department: Optional[str] = None
    is_approved: bool
    role: Optional[Role] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ApprovalOut(BaseModel):
    account: AccountOut
    notified: bool
    # Only present when the notice could not be delivered.
    temporary_password: Optional[str] = None
