"""Normal-user endpoints: browse stores, rate them, change password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.auth import get_app_settings, require_normal_user
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.ratings import (
    RatingOut,
    RatingResponse,
    RatingSubmitRequest,
    RatingUpdateRequest,
)
from app.schemas.stores import StoreForUserResponse, StoresForUserResponse
from app.schemas.users import MessageResponse, PasswordUpdateRequest
from app.services.accounts import change_password
from app.services.ratings import submit_or_update_rating, update_rating_by_id
from app.services.stores import get_store_for_user, list_stores_for_user

router = APIRouter(dependencies=[Depends(require_normal_user)])

NormalUser = Annotated[CurrentUser, Depends(require_normal_user)]


@router.get("/stores", response_model=StoresForUserResponse)
def get_stores(
    current_user: NormalUser,
    db: Annotated[Session, Depends(get_db)],
    name: str | None = None,
    address: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> StoresForUserResponse:
    """Stores with average rating and the caller's own rating (userRating, null if none)."""
    stores = list_stores_for_user(
        db,
        current_user.id,
        name=name,
        address=address,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return StoresForUserResponse(stores=stores)


@router.get("/stores/{store_id}", response_model=StoreForUserResponse)
def get_store(
    store_id: int,
    current_user: NormalUser,
    db: Annotated[Session, Depends(get_db)],
) -> StoreForUserResponse:
    return StoreForUserResponse(store=get_store_for_user(db, store_id, current_user.id))


@router.post("/ratings", response_model=RatingResponse)
def post_rating(
    body: RatingSubmitRequest,
    current_user: NormalUser,
    db: Annotated[Session, Depends(get_db)],
    response: Response,
) -> RatingResponse:
    """
    Rate a store. The first rating is created (201); later ones replace it (200).
    """
    rating, created = submit_or_update_rating(db, current_user.id, body.store_id, body.rating)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return RatingResponse(
        message="Rating submitted successfully" if created else "Rating updated successfully",
        rating=RatingOut.model_validate(rating),
        created=created,
    )


@router.put("/ratings/{rating_id}", response_model=RatingResponse)
def put_rating(
    rating_id: int,
    body: RatingUpdateRequest,
    current_user: NormalUser,
    db: Annotated[Session, Depends(get_db)],
) -> RatingResponse:
    """Change one of the caller's own ratings; other users' ratings are reported as not found."""
    rating = update_rating_by_id(db, rating_id, current_user.id, body.rating)
    return RatingResponse(
        message="Rating updated successfully",
        rating=RatingOut.model_validate(rating),
        created=False,
    )


@router.put("/password", response_model=MessageResponse)
def put_password(
    body: PasswordUpdateRequest,
    current_user: NormalUser,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    change_password(db, current_user.id, body.current_password, body.new_password, settings)
    return MessageResponse(message="Password updated successfully")
