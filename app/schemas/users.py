"""Schemas for user accounts: admin creation, listings, detail and password changes."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.fields import (
    normalize_email,
    reject_boolean,
    validate_address,
    validate_password,
    validate_person_name,
)


class UserPublic(BaseModel):
    """User fields safe to return to clients (never the password hash)."""

    id: int
    name: str
    email: str
    address: str | None = None
    role: str
    store_id: int | None = None

    model_config = {"from_attributes": True}


class UserCreateRequest(BaseModel):
    """Admin user creation. Unknown roles fall back to normal_user in the service."""

    name: str
    email: EmailStr
    password: str
    address: str | None = None
    role: str | None = Field(default=None, description="normal_user, store_owner or system_administrator")
    store_id: int | None = Field(default=None, description="Store managed by a store_owner")

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

    @field_validator("store_id", mode="before")
    @classmethod
    def check_store_id(cls, v: object) -> object:
        return reject_boolean(v)


class UserCreatedResponse(BaseModel):
    message: str
    user: UserPublic


class UserListItem(UserPublic):
    """User entry for the admin list, joined with the managed store's name."""

    store_name: str | None = None


class UsersListResponse(BaseModel):
    users: list[UserListItem]


class UserDetail(UserListItem):
    """Admin user detail; store owners also carry their store's rating summary."""

    rating: str | None = Field(default=None, description="Average rating of the owned store, 2 dp")
    total_ratings: int | None = None


class UserDetailResponse(BaseModel):
    user: UserDetail


class PasswordUpdateRequest(BaseModel):
    """Change own password; the new password follows the registration rules."""

    model_config = {"populate_by_name": True}

    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword")

    @field_validator("current_password")
    @classmethod
    def check_current_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        return validate_password(v)


class MessageResponse(BaseModel):
    message: str
