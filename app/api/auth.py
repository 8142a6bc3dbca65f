"""Register/login/me endpoints and the auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import Forbidden, Unauthorized
from app.core.security import decode_access_token
from app.models import Role, User
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    RegisterRequest,
)
from app.schemas.users import UserPublic
from app.services.accounts import authenticate, register_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings the running app was built with."""
    return request.app.state.settings


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise Unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise Unauthorized("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token payload")
    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized("User not found")
    return CurrentUser.model_validate(user)


def require_role(*roles: Role) -> Callable[..., CurrentUser]:
    """Build a dependency that lets through only users whose role is in roles (else 403)."""
    allowed = frozenset(role.value for role in roles)

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise Forbidden("Access denied: insufficient permissions")
        return current_user

    return dependency


# Built once so FastAPI caches each check per request.
require_admin = require_role(Role.SYSTEM_ADMINISTRATOR)
require_normal_user = require_role(Role.NORMAL_USER)
require_store_owner = require_role(Role.STORE_OWNER)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthResponse:
    """Create a normal_user account and return a token for it."""
    user, token = register_user(db, body, settings)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = authenticate(db, body, settings)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Public fields of the authenticated user, any role."""
    return MeResponse(user=UserPublic.model_validate(db.get(User, current_user.id)))
