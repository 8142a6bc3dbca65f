"""Administrator endpoints: platform totals, store and user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.auth import get_app_settings, require_admin
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.dashboard import AdminDashboardResponse
from app.schemas.stores import (
    StoreCreatedResponse,
    StoreCreateRequest,
    StoreOut,
    StoresListResponse,
)
from app.schemas.users import (
    UserCreatedResponse,
    UserCreateRequest,
    UserDetailResponse,
    UserPublic,
    UsersListResponse,
)
from app.services.accounts import create_user, get_user_detail, list_users
from app.services.dashboards import admin_totals
from app.services.stores import create_store, list_stores

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=AdminDashboardResponse)
def get_dashboard(db: Annotated[Session, Depends(get_db)]) -> AdminDashboardResponse:
    """Total number of users, stores and ratings."""
    return admin_totals(db)


@router.post("/stores", response_model=StoreCreatedResponse, status_code=status.HTTP_201_CREATED)
def post_store(
    body: StoreCreateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> StoreCreatedResponse:
    store = create_store(db, body)
    return StoreCreatedResponse(
        message="Store added successfully",
        store=StoreOut.model_validate(store),
    )


@router.get("/stores", response_model=StoresListResponse)
def get_stores(
    db: Annotated[Session, Depends(get_db)],
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> StoresListResponse:
    """
    All stores with their average rating.

    name/email/address are case-insensitive substring filters. sortBy is one of
    name, email, address, rating; anything else sorts by name. sortOrder is ASC or DESC.
    """
    stores = list_stores(
        db,
        {"name": name, "email": email, "address": address},
        sort_by,
        sort_order,
    )
    return StoresListResponse(stores=stores)


@router.post("/users", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def post_user(
    body: UserCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserCreatedResponse:
    """Create a user with any role; store owners may be linked to an existing store."""
    user = create_user(db, body, settings)
    return UserCreatedResponse(
        message="User added successfully",
        user=UserPublic.model_validate(user),
    )


@router.get("/users", response_model=UsersListResponse)
def get_users(
    db: Annotated[Session, Depends(get_db)],
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> UsersListResponse:
    """All users with their store name; role filters by exact value."""
    users = list_users(
        db,
        name=name,
        email=email,
        address=address,
        role=role,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return UsersListResponse(users=users)


@router.get("/users/{user_id}", response_model=UserDetailResponse)
def get_user(user_id: int, db: Annotated[Session, Depends(get_db)]) -> UserDetailResponse:
    return UserDetailResponse(user=get_user_detail(db, user_id))
