"""User accounts: registration, login, admin user management and password changes."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import Conflict, NotFound, Unauthorized
from app.core.security import create_access_token, hash_password, verify_password
from app.models import Role, Store, User
from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.users import UserCreateRequest, UserDetail, UserListItem
from app.services.listing import apply_contains_filters, apply_sort, normalize_sort
from app.services.stores import store_rating_summary

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

USER_SORT_FIELDS = ("name", "email", "address", "role")
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
USER_EXISTS_MESSAGE = "User already exists with this email"


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def _insert_user(db: Session, user: User) -> User:
    """Persist a new user; a unique-email race surfaces as Conflict, not a 500."""
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(USER_EXISTS_MESSAGE) from e
    db.refresh(user)
    return user


def register_user(db: Session, body: RegisterRequest, settings: "Settings") -> tuple[User, str]:
    """Create a normal_user account and return it with a fresh access token."""
    if get_user_by_email(db, body.email) is not None:
        raise Conflict(USER_EXISTS_MESSAGE)
    user = _insert_user(
        db,
        User(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
            address=body.address,
            role=Role.NORMAL_USER.value,
        ),
    )
    logger.info("User registered: id=%s", user.id)
    return user, create_access_token(sub=user.id, role=user.role, settings=settings)


def authenticate(db: Session, body: LoginRequest, settings: "Settings") -> tuple[User, str]:
    """Check email and password; same error for unknown email and wrong password."""
    user = get_user_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed for email domain=%s", body.email.rsplit("@", 1)[-1])
        raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)
    return user, create_access_token(sub=user.id, role=user.role, settings=settings)


def create_user(db: Session, body: UserCreateRequest, settings: "Settings") -> User:
    """
    Admin-side user creation with any role.

    An unrecognised role becomes normal_user. store_id is kept only for
    store owners and must reference an existing store.
    """
    if get_user_by_email(db, body.email) is not None:
        raise Conflict(USER_EXISTS_MESSAGE)

    role = Role.parse(body.role, default=Role.NORMAL_USER)
    store_id = body.store_id if role is Role.STORE_OWNER else None
    if store_id is not None and db.get(Store, store_id) is None:
        raise NotFound("Store not found")

    user = _insert_user(
        db,
        User(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
            address=body.address,
            role=role.value,
            store_id=store_id,
        ),
    )
    logger.info("User created by administrator: id=%s role=%s", user.id, user.role)
    return user


def _list_item(user: User, store_name: str | None) -> UserListItem:
    return UserListItem(
        id=user.id,
        name=user.name,
        email=user.email,
        address=user.address,
        role=user.role,
        store_id=user.store_id,
        store_name=store_name,
    )


def list_users(
    db: Session,
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> list[UserListItem]:
    """Users left-joined with their store's name; substring filters, exact role filter."""
    columns = {
        "name": User.name,
        "email": User.email,
        "address": User.address,
        "role": User.role,
    }
    query = db.query(User, Store.name.label("store_name")).outerjoin(
        Store, User.store_id == Store.id
    )
    query = apply_contains_filters(
        query, columns, {"name": name, "email": email, "address": address}
    )
    if role:
        query = query.filter(User.role == role)
    field, order = normalize_sort(sort_by, sort_order, USER_SORT_FIELDS)
    query = apply_sort(query, columns, field, order, tiebreaker=User.id)
    return [_list_item(user, store_name) for user, store_name in query.all()]


def get_user_detail(db: Session, user_id: int) -> UserDetail:
    """User detail for admins; store owners get their store's average and rating count."""
    row = (
        db.query(User, Store.name.label("store_name"))
        .outerjoin(Store, User.store_id == Store.id)
        .filter(User.id == user_id)
        .first()
    )
    if row is None:
        raise NotFound("User not found")
    user, store_name = row
    detail = UserDetail(**_list_item(user, store_name).model_dump())
    if user.role == Role.STORE_OWNER.value and user.store_id is not None:
        average, total = store_rating_summary(db, user.store_id)
        detail.rating = average
        detail.total_ratings = total
    return detail


def change_password(
    db: Session,
    user_id: int,
    current_password: str,
    new_password: str,
    settings: "Settings",
) -> None:
    """Replace the caller's password after checking the current one."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    if not verify_password(current_password, user.password_hash):
        raise Unauthorized("Current password is incorrect")
    user.password_hash = hash_password(new_password, rounds=settings.BCRYPT_ROUNDS)
    db.commit()
    logger.info("Password updated: user_id=%s", user_id)
