"""Shared helpers for API tests: an app on in-memory SQLite plus row/token factories."""

import unittest

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import create_access_token, hash_password
from app.main import create_app
from app.models import Rating, Role, Store, User

DEFAULT_PASSWORD = "Valid1!Pass"
TEST_BCRYPT_ROUNDS = 4


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: in-memory SQLite, tables created at startup, cheap bcrypt."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "AUTO_CREATE_TABLES": True,
        "BCRYPT_ROUNDS": TEST_BCRYPT_ROUNDS,
        "JWT_SECRET": "test-secret-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Starts a fresh app (and database) per test and tears it down afterwards."""

    def setUp(self) -> None:
        self.settings = make_settings()
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def session(self):
        return self.app.state.database.session()

    def add_user(
        self,
        email: str,
        role: Role = Role.NORMAL_USER,
        name: str = "Test Person With Long Name",
        password: str = DEFAULT_PASSWORD,
        address: str | None = None,
        store_id: int | None = None,
    ) -> int:
        with self.session() as db:
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
                address=address,
                role=role.value,
                store_id=store_id,
            )
            db.add(user)
            db.commit()
            return user.id

    def add_store(self, name: str, email: str, address: str | None = None) -> int:
        with self.session() as db:
            store = Store(name=name, email=email, address=address)
            db.add(store)
            db.commit()
            return store.id

    def add_rating(self, user_id: int, store_id: int, value: int) -> int:
        with self.session() as db:
            rating = Rating(user_id=user_id, store_id=store_id, rating=value)
            db.add(rating)
            db.commit()
            return rating.id

    def token_for(self, user_id: int, role: Role) -> str:
        return create_access_token(sub=user_id, role=role.value, settings=self.settings)

    def auth_headers(self, user_id: int, role: Role) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user_id, role)}"}
