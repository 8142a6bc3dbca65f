"""ORM model for application users (auth and role-based access control)."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class Role(str, enum.Enum):
    """Closed set of roles; authorization checks membership against these values."""

    NORMAL_USER = "normal_user"
    STORE_OWNER = "store_owner"
    SYSTEM_ADMINISTRATOR = "system_administrator"

    @classmethod
    def parse(cls, value: str | None, default: "Role | None" = None) -> "Role | None":
        """Return the Role for value, or default when value is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return default


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    store_id is only set for store owners and points at the store they manage.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    address = Column(String(400), nullable=True)
    role = Column(String(20), nullable=False, default=Role.NORMAL_USER.value, index=True)
    store_id = Column(
        Integer,
        ForeignKey("stores.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    store = relationship("Store", back_populates="owners")
    ratings = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
