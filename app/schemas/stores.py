"""Schemas for stores: admin creation, listings and single-store detail."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.fields import normalize_email, validate_address, validate_store_name


class StoreCreateRequest(BaseModel):
    name: str
    email: EmailStr
    address: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_store_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str | None) -> str | None:
        return validate_address(v)


class StoreOut(BaseModel):
    id: int
    name: str
    email: str
    address: str | None = None

    model_config = {"from_attributes": True}


class StoreCreatedResponse(BaseModel):
    message: str
    store: StoreOut


class StoreWithRating(StoreOut):
    """Store joined with its average rating (2 dp string, "0.00" when unrated)."""

    rating: str


class StoresListResponse(BaseModel):
    stores: list[StoreWithRating]


class StoreForUser(StoreWithRating):
    """Store as seen by a normal user, annotated with the caller's own rating."""

    user_rating: int | None = Field(default=None, serialization_alias="userRating")


class StoresForUserResponse(BaseModel):
    stores: list[StoreForUser]


class StoreForUserResponse(BaseModel):
    store: StoreForUser
