"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.rating import MAX_RATING, MIN_RATING, Rating
from app.models.store import Store
from app.models.user import Role, User

__all__ = ["Base", "MAX_RATING", "MIN_RATING", "Rating", "Role", "Store", "User"]
