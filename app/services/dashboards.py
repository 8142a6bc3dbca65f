"""Dashboard aggregates for administrators and store owners."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import BadRequest
from app.models import Rating, Store, User
from app.schemas.dashboard import (
    AdminDashboardResponse,
    StoreOwnerDashboardResponse,
    StoreRater,
)
from app.schemas.stores import StoreOut
from app.services.stores import store_rating_summary


def admin_totals(db: Session) -> AdminDashboardResponse:
    return AdminDashboardResponse(
        total_users=db.query(func.count(User.id)).scalar() or 0,
        total_stores=db.query(func.count(Store.id)).scalar() or 0,
        total_ratings=db.query(func.count(Rating.id)).scalar() or 0,
    )


def store_owner_dashboard(db: Session, owner_id: int) -> StoreOwnerDashboardResponse:
    """
    The owner's store, its rating summary, and everyone who rated it (newest first).

    Raises BadRequest when the owner has no store assigned.
    """
    owner = db.get(User, owner_id)
    store = db.get(Store, owner.store_id) if owner is not None and owner.store_id else None
    if store is None:
        raise BadRequest("Store owner is not associated with a store")

    average, total = store_rating_summary(db, store.id)
    rows = (
        db.query(User, Rating.rating, Rating.created_at)
        .join(Rating, Rating.user_id == User.id)
        .filter(Rating.store_id == store.id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .all()
    )
    return StoreOwnerDashboardResponse(
        store=StoreOut.model_validate(store),
        average_rating=average,
        total_ratings=total,
        users=[
            StoreRater(
                id=user.id,
                name=user.name,
                email=user.email,
                address=user.address,
                rating=rating,
                rated_at=rated_at,
            )
            for user, rating, rated_at in rows
        ],
    )
