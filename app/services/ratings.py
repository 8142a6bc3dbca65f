"""Ratings: submit-or-update keyed on (user, store) and owner-only update by id."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFound
from app.models import Rating, Store

logger = logging.getLogger(__name__)

RATING_NOT_FOUND_MESSAGE = "Rating not found"


def _find_rating(db: Session, user_id: int, store_id: int) -> Rating | None:
    return (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.store_id == store_id)
        .first()
    )


def submit_or_update_rating(
    db: Session, user_id: int, store_id: int, value: int
) -> tuple[Rating, bool]:
    """
    Upsert the caller's rating of a store. Returns (rating, created).

    The (user_id, store_id) unique constraint decides races: if a concurrent
    request inserts first, our insert fails and is retried as an update.
    """
    if db.get(Store, store_id) is None:
        raise NotFound("Store not found")

    existing = _find_rating(db, user_id, store_id)
    if existing is None:
        rating = Rating(user_id=user_id, store_id=store_id, rating=value)
        db.add(rating)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            existing = _find_rating(db, user_id, store_id)
            if existing is None:
                raise
            logger.info(
                "Concurrent rating insert for user_id=%s store_id=%s; updating instead",
                user_id,
                store_id,
            )
        else:
            db.refresh(rating)
            logger.info("Rating created: id=%s store_id=%s", rating.id, store_id)
            return rating, True

    existing.rating = value
    db.commit()
    db.refresh(existing)
    logger.info("Rating updated: id=%s store_id=%s", existing.id, store_id)
    return existing, False


def update_rating_by_id(db: Session, rating_id: int, user_id: int, value: int) -> Rating:
    """
    Change one of the caller's ratings by id.

    Ratings that do not exist and ratings owned by someone else both raise
    NotFound, so ids of other users' ratings are not disclosed.
    """
    rating = (
        db.query(Rating)
        .filter(Rating.id == rating_id, Rating.user_id == user_id)
        .first()
    )
    if rating is None:
        raise NotFound(RATING_NOT_FOUND_MESSAGE)
    rating.rating = value
    db.commit()
    db.refresh(rating)
    logger.info("Rating updated: id=%s store_id=%s", rating.id, rating.store_id)
    return rating
