"""ORM model for rateable stores."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class Store(Base):
    """Store created by an administrator; rated by normal users, managed by store owners."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    address = Column(String(400), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    owners = relationship("User", back_populates="store", passive_deletes=True)
    ratings = relationship(
        "Rating",
        back_populates="store",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
