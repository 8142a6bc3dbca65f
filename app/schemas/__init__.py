"""Pydantic request/response schemas."""

from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest, MeResponse, RegisterRequest
from app.schemas.dashboard import AdminDashboardResponse, StoreOwnerDashboardResponse, StoreRater
from app.schemas.health import HealthResponse
from app.schemas.ratings import (
    RatingOut,
    RatingResponse,
    RatingSubmitRequest,
    RatingUpdateRequest,
)
from app.schemas.stores import (
    StoreCreatedResponse,
    StoreCreateRequest,
    StoreForUser,
    StoreForUserResponse,
    StoreOut,
    StoresForUserResponse,
    StoresListResponse,
    StoreWithRating,
)
from app.schemas.users import (
    MessageResponse,
    PasswordUpdateRequest,
    UserCreatedResponse,
    UserCreateRequest,
    UserDetail,
    UserDetailResponse,
    UserListItem,
    UserPublic,
    UsersListResponse,
)

__all__ = [
    "AdminDashboardResponse",
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MeResponse",
    "MessageResponse",
    "PasswordUpdateRequest",
    "RatingOut",
    "RatingResponse",
    "RatingSubmitRequest",
    "RatingUpdateRequest",
    "RegisterRequest",
    "StoreCreateRequest",
    "StoreCreatedResponse",
    "StoreForUser",
    "StoreForUserResponse",
    "StoreOut",
    "StoreOwnerDashboardResponse",
    "StoreRater",
    "StoreWithRating",
    "StoresForUserResponse",
    "StoresListResponse",
    "UserCreateRequest",
    "UserCreatedResponse",
    "UserDetail",
    "UserDetailResponse",
    "UserListItem",
    "UserPublic",
    "UsersListResponse",
]
