"""Store-owner endpoints: rating dashboard for the owned store, password change."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth import get_app_settings, require_store_owner
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.dashboard import StoreOwnerDashboardResponse
from app.schemas.users import MessageResponse, PasswordUpdateRequest
from app.services.accounts import change_password
from app.services.dashboards import store_owner_dashboard

router = APIRouter(dependencies=[Depends(require_store_owner)])

StoreOwner = Annotated[CurrentUser, Depends(require_store_owner)]


@router.get("/dashboard", response_model=StoreOwnerDashboardResponse)
def get_dashboard(
    current_user: StoreOwner,
    db: Annotated[Session, Depends(get_db)],
) -> StoreOwnerDashboardResponse:
    """Average rating, rating count and the users who rated the owner's store, newest first."""
    return store_owner_dashboard(db, current_user.id)


@router.put("/password", response_model=MessageResponse)
def put_password(
    body: PasswordUpdateRequest,
    current_user: StoreOwner,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    change_password(db, current_user.id, body.current_password, body.new_password, settings)
    return MessageResponse(message="Password updated successfully")
