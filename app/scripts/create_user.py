"""
Create a user with any role (e.g. the first administrator). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role] [--store-id N]
Example:
  python -m app.scripts.create_user "Platform Administrator One" admin@example.com 'Admin!234' system_administrator
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import Database
from app.core.errors import AppError
from app.models import Role
from app.schemas.users import UserCreateRequest
from app.services.accounts import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a Store Rating user (registration only creates normal users)."
    )
    parser.add_argument("name", help="Full name (20-60 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="8-16 chars with an uppercase and a special character")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.SYSTEM_ADMINISTRATOR.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--address", default=None)
    parser.add_argument("--store-id", type=int, default=None, help="Store managed by a store_owner")
    args = parser.parse_args(argv)

    try:
        body = UserCreateRequest(
            name=args.name,
            email=args.email,
            password=args.password,
            address=args.address,
            role=args.role,
            store_id=args.store_id,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    settings = get_settings()
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    db = database.session()
    try:
        user = create_user(db, body, settings)
        print(f"Created user '{user.email}' with role '{user.role}'.")
        return 0
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
