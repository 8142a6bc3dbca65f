"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.fields import (
    normalize_email,
    validate_address,
    validate_password,
    validate_person_name,
)
from app.schemas.users import UserPublic


class RegisterRequest(BaseModel):
    """Self-registration; the account is always created as a normal user."""

    name: str = Field(..., description="Full name, 20-60 characters")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="8-16 chars, one uppercase, one special character")
    address: str | None = Field(default=None, description="Optional, at most 400 characters")

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_person_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str | None) -> str | None:
        return validate_address(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return normalize_email(v)


class AuthResponse(BaseModel):
    """Token plus the public user fields, returned by register and login."""

    message: str
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated user attached to the request by the auth dependency."""

    id: int
    name: str
    email: str
    role: str
    store_id: int | None = None

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    user: UserPublic
