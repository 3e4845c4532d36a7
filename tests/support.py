"""Shared test cases: an in-memory SQLite store and a TestClient wired to it."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models import Base, User
from app.schemas.auth import CurrentUser
from app.services import auth as auth_service

# One shared connection so every session sees the same in-memory database.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "s3cret-pass"


def override_get_db() -> Generator[Session, None, None]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test plus a session for arranging and checking state."""

    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.db = TestingSessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(bind=engine)

    def make_user(
        self,
        username: str,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: str = "user",
    ) -> User:
        user = auth_service.signup(self.db, username, email or f"{username}@example.com", password)
        if role != user.role:
            user.role = role
            self.db.commit()
            self.db.refresh(user)
        return user

    @staticmethod
    def identity(user: User) -> CurrentUser:
        return CurrentUser(id=user.id, username=user.username, role=user.role)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase with the app's get_db pointed at the test store."""

    def setUp(self) -> None:
        super().setUp()
        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def signup(self, username: str, password: str = DEFAULT_PASSWORD):
        return self.client.post(
            "/api/user/signup",
            json={"username": username, "email": f"{username}@example.com", "password": password},
        )

    def login(self, username: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = self.client.post(
            "/api/user/login", json={"username": username, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def register(self, username: str) -> tuple[int, dict[str, str]]:
        """Sign up and log in; returns the user id and bearer headers."""
        self.assertEqual(self.signup(username).status_code, 200)
        body = self.login(username)
        return body["data"]["id"], self.bearer(body["accessToken"])

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
