"""Schemas for rating submission and update."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.fields import reject_boolean, validate_rating_value


class RatingSubmitRequest(BaseModel):
    """Rate a store; a second submission for the same store updates the first."""

    store_id: int = Field(..., description="Store being rated")
    rating: int = Field(..., description="Integer 1-5")

    @field_validator("store_id", "rating", mode="before")
    @classmethod
    def check_not_boolean(cls, v: object) -> object:
        return reject_boolean(v)

    @field_validator("rating")
    @classmethod
    def check_rating(cls, v: int) -> int:
        return validate_rating_value(v)


class RatingUpdateRequest(BaseModel):
    rating: int = Field(..., description="Integer 1-5")

    @field_validator("rating", mode="before")
    @classmethod
    def check_not_boolean(cls, v: object) -> object:
        return reject_boolean(v)

    @field_validator("rating")
    @classmethod
    def check_rating(cls, v: int) -> int:
        return validate_rating_value(v)


class RatingOut(BaseModel):
    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class RatingResponse(BaseModel):
    message: str
    rating: RatingOut
    created: bool = Field(..., description="True when a new rating row was inserted")
