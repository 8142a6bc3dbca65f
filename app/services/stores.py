"""Stores: admin creation, rated listings and single-store lookups."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict, NotFound
from app.models import Rating, Store
from app.schemas.fields import format_average
from app.schemas.stores import StoreCreateRequest, StoreForUser, StoreWithRating
from app.services.listing import apply_contains_filters, apply_sort, normalize_sort

logger = logging.getLogger(__name__)

ADMIN_STORE_SORT_FIELDS = ("name", "email", "address", "rating")
USER_STORE_SORT_FIELDS = ("name", "address", "rating")
STORE_EXISTS_MESSAGE = "Store already exists with this email"


def _average_column():
    return func.coalesce(func.avg(Rating.rating), 0).label("average_rating")


def create_store(db: Session, body: StoreCreateRequest) -> Store:
    if db.query(Store.id).filter(func.lower(Store.email) == body.email.lower()).first():
        raise Conflict(STORE_EXISTS_MESSAGE)
    store = Store(name=body.name, email=body.email, address=body.address)
    db.add(store)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(STORE_EXISTS_MESSAGE) from e
    db.refresh(store)
    logger.info("Store created: id=%s", store.id)
    return store


def list_stores(
    db: Session,
    filters: dict[str, str | None],
    sort_by: str | None,
    sort_order: str | None,
    allowed_sort_fields: tuple[str, ...] = ADMIN_STORE_SORT_FIELDS,
) -> list[StoreWithRating]:
    """
    Stores left-joined with their average rating (0 when unrated).

    filters maps any of name/email/address to a case-insensitive substring;
    sorting outside allowed_sort_fields falls back to name ASC.
    """
    average = _average_column()
    columns = {
        "name": Store.name,
        "email": Store.email,
        "address": Store.address,
        "rating": average,
    }
    query = db.query(Store, average).outerjoin(Rating, Rating.store_id == Store.id)
    query = apply_contains_filters(query, columns, filters)
    query = query.group_by(Store.id)
    field, order = normalize_sort(sort_by, sort_order, allowed_sort_fields)
    query = apply_sort(query, columns, field, order, tiebreaker=Store.id)
    return [
        StoreWithRating(
            id=store.id,
            name=store.name,
            email=store.email,
            address=store.address,
            rating=format_average(avg),
        )
        for store, avg in query.all()
    ]


def user_ratings_by_store(db: Session, user_id: int) -> dict[int, int]:
    """The caller's own ratings keyed by store id."""
    rows = db.query(Rating.store_id, Rating.rating).filter(Rating.user_id == user_id).all()
    return {store_id: rating for store_id, rating in rows}


def list_stores_for_user(
    db: Session,
    user_id: int,
    name: str | None = None,
    address: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> list[StoreForUser]:
    stores = list_stores(
        db,
        {"name": name, "address": address},
        sort_by,
        sort_order,
        allowed_sort_fields=USER_STORE_SORT_FIELDS,
    )
    own = user_ratings_by_store(db, user_id)
    return [StoreForUser(**s.model_dump(), user_rating=own.get(s.id)) for s in stores]


def get_store_for_user(db: Session, store_id: int, user_id: int) -> StoreForUser:
    row = (
        db.query(Store, _average_column())
        .outerjoin(Rating, Rating.store_id == Store.id)
        .filter(Store.id == store_id)
        .group_by(Store.id)
        .first()
    )
    if row is None:
        raise NotFound("Store not found")
    store, avg = row
    own = (
        db.query(Rating.rating)
        .filter(Rating.user_id == user_id, Rating.store_id == store_id)
        .scalar()
    )
    return StoreForUser(
        id=store.id,
        name=store.name,
        email=store.email,
        address=store.address,
        rating=format_average(avg),
        user_rating=own,
    )


def store_rating_summary(db: Session, store_id: int) -> tuple[str, int]:
    """Return (average as 2-dp string, number of ratings) for one store."""
    avg, total = (
        db.query(func.coalesce(func.avg(Rating.rating), 0), func.count(Rating.id))
        .filter(Rating.store_id == store_id)
        .one()
    )
    return format_average(avg), int(total)
