"""Test configuration for the archive API and web client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bha_server.app import create_app
from bha_server.data.lookups import seed_lookups
from bha_server.data.orm import ORMBase
from bha_server.db import g_db_func


@dataclass
class TestUser:
    __test__ = False

    account_id: int
    username: str
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(autouse=True)
def _environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ORMBase.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as db:
        seed_lookups(db)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app()

    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[g_db_func] = _override_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(client) -> Callable[..., TestUser]:
    """Sign up an account through the API and return its credentials."""

    def _make_user(username: str, email: str | None = None, password: str = "password123") -> TestUser:
        email = email or f"{username.lower()}@example.com"
        response = client.post(
            "/api/auth/signup",
            json={"email": email, "username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200, me.text
        return TestUser(
            account_id=me.json()["account_id"],
            username=username,
            email=email,
            token=token,
        )

    return _make_user


@pytest.fixture
def alice(make_user) -> TestUser:
    return make_user("alice")


@pytest.fixture
def bob(make_user) -> TestUser:
    return make_user("bob")


def create_profile(client: TestClient, user: TestUser, profile_type_id: int, name: str, **extra):
    payload = {"profile_type_id": profile_type_id, "name": name, **extra}
    return client.post("/api/profiles", json=payload, headers=user.headers)


def create_character(client: TestClient, user: TestUser, name: str, **extra) -> dict:
    response = create_profile(client, user, 1, name, **extra)
    assert response.status_code == 201, response.text
    return response.json()


def create_post(client: TestClient, user: TestUser, post_type_id: int, title: str, **extra) -> dict:
    payload = {"post_type_id": post_type_id, "title": title, **extra}
    response = client.post("/api/posts", json=payload, headers=user.headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_collection(client: TestClient, user: TestUser, collection_type_id: int, title: str, **extra) -> dict:
    payload = {"collection_type_id": collection_type_id, "title": title, **extra}
    response = client.post("/api/collections", json=payload, headers=user.headers)
    assert response.status_code == 201, response.text
    return response.json()
