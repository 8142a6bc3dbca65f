"""Reusable field rules shared by request schemas (users, stores, ratings, passwords)."""

from app.models.rating import MAX_RATING, MIN_RATING

NAME_MIN_LEN = 20
NAME_MAX_LEN = 60
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 16
ADDRESS_MAX_LEN = 400

# Characters that satisfy the "one special character" password rule.
PASSWORD_SPECIAL_CHARS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")

NAME_LENGTH_MESSAGE = f"Name must be between {NAME_MIN_LEN} and {NAME_MAX_LEN} characters"
PASSWORD_LENGTH_MESSAGE = (
    f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters"
)
PASSWORD_UPPERCASE_MESSAGE = "Password must contain at least one uppercase letter"
PASSWORD_SPECIAL_MESSAGE = "Password must contain at least one special character"
ADDRESS_LENGTH_MESSAGE = f"Address must not exceed {ADDRESS_MAX_LEN} characters"
STORE_NAME_MESSAGE = "Store name is required"
STORE_NAME_MAX_LEN = 255
STORE_NAME_LENGTH_MESSAGE = f"Store name must not exceed {STORE_NAME_MAX_LEN} characters"
INTEGER_MESSAGE = "Must be an integer"
RATING_RANGE_MESSAGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}"


def validate_person_name(value: str) -> str:
    """Trim and require NAME_MIN_LEN..NAME_MAX_LEN characters."""
    name = value.strip()
    if not NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN:
        raise ValueError(NAME_LENGTH_MESSAGE)
    return name


def validate_store_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError(STORE_NAME_MESSAGE)
    if len(name) > STORE_NAME_MAX_LEN:
        raise ValueError(STORE_NAME_LENGTH_MESSAGE)
    return name


def normalize_email(value: str) -> str:
    """Emails are compared and stored lower-cased."""
    return value.strip().lower()


def password_problems(value: str) -> list[str]:
    """
    Return every rule the password breaks, in a fixed order (empty list when valid).

    Rules: 8-16 characters, at least one ASCII uppercase letter, at least one
    character from PASSWORD_SPECIAL_CHARS.
    """
    problems: list[str] = []
    if not PASSWORD_MIN_LEN <= len(value) <= PASSWORD_MAX_LEN:
        problems.append(PASSWORD_LENGTH_MESSAGE)
    if not any("A" <= ch <= "Z" for ch in value):
        problems.append(PASSWORD_UPPERCASE_MESSAGE)
    if not any(ch in PASSWORD_SPECIAL_CHARS for ch in value):
        problems.append(PASSWORD_SPECIAL_MESSAGE)
    return problems


def validate_password(value: str) -> str:
    problems = password_problems(value)
    if problems:
        raise ValueError("; ".join(problems))
    return value


def validate_address(value: str | None) -> str | None:
    """Optional address; blank becomes None, otherwise at most ADDRESS_MAX_LEN characters."""
    if value is None:
        return None
    address = value.strip()
    if not address:
        return None
    if len(address) > ADDRESS_MAX_LEN:
        raise ValueError(ADDRESS_LENGTH_MESSAGE)
    return address


def reject_boolean(value: object) -> object:
    """Run before int coercion: JSON true/false must not pass as 1/0."""
    if isinstance(value, bool):
        raise ValueError(INTEGER_MESSAGE)
    return value


def validate_rating_value(value: int) -> int:
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValueError(RATING_RANGE_MESSAGE)
    return value


def format_average(value: float | None) -> str:
    """Average rating as shown to clients: 2 decimal places, 0.00 when there are no ratings."""
    return f"{float(value or 0):.2f}"
