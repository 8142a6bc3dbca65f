"""Schemas for the admin and store-owner dashboards."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.stores import StoreOut


class AdminDashboardResponse(BaseModel):
    """Platform totals."""

    total_users: int = Field(..., serialization_alias="totalUsers")
    total_stores: int = Field(..., serialization_alias="totalStores")
    total_ratings: int = Field(..., serialization_alias="totalRatings")


class StoreRater(BaseModel):
    """A user who rated the owner's store, with their rating and when it was given."""

    id: int
    name: str
    email: str
    address: str | None = None
    rating: int
    rated_at: datetime | None = Field(default=None, serialization_alias="ratedAt")


class StoreOwnerDashboardResponse(BaseModel):
    store: StoreOut
    average_rating: str = Field(..., serialization_alias="averageRating")
    total_ratings: int = Field(..., serialization_alias="totalRatings")
    users: list[StoreRater]
