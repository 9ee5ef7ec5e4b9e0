from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from bha_web.app import create_app

ARCHIVE = {
    "items": [
        {
            "id": 7,
            "contentCategory": "post",
            "typeId": 2,
            "typeName": "art",
            "name": "Moonrise over Weathertop",
            "thumbnail": "/uploads/images/moon.png",
            "preview": "Ink",
            "authorName": "Aragorn",
            "username": "alice",
            "createdAt": "2025-04-21T10:00:00",
            "updatedAt": "2025-04-21T10:00:00",
        }
    ],
    "total": 1,
    "hasMore": False,
}


class FakeBackend:
    """Records requests and answers like the archive API"""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/auth/login":
            body = json.loads(request.content)
            if body.get("password") == "password123":
                return httpx.Response(200, json={"token": "tok-123"})
            return httpx.Response(401, json={"detail": "Invalid credentials"})
        if path == "/api/auth/signup":
            return httpx.Response(201, json={"token": "tok-new"})
        if path == "/api/auth/me":
            if request.headers.get("authorization") == "Bearer tok-123":
                return httpx.Response(200, json={"account_id": 1, "username": "alice"})
            return httpx.Response(401, json={"detail": "Invalid token"})
        if path == "/api/archive/public":
            if request.url.params.get("limit") == "0":
                return httpx.Response(400, json={"detail": "Invalid query parameters"})
            return httpx.Response(200, json=ARCHIVE)
        if path == "/api/posts/7":
            return httpx.Response(
                200,
                json={
                    "post_id": 7,
                    "title": "Moonrise over Weathertop",
                    "type_name": "art",
                    "username": "alice",
                    "content": {"description": "Ink"},
                    "is_published": True,
                    "primary_author": None,
                    "authors": [],
                    "can_edit": False,
                },
            )
        if path.startswith("/api/posts/"):
            return httpx.Response(404, json={"detail": "Post not found"})
        return httpx.Response(200, json={"echo": path})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def web(backend) -> TestClient:
    app = create_app(transport=httpx.MockTransport(backend))
    with TestClient(app) as client:
        yield client


def test_login_sets_http_only_cookie(web: TestClient) -> None:
    response = web.post("/api/auth/login", json={"user": "alice", "password": "password123"})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("auth_token=tok-123")
    assert "HttpOnly" in set_cookie
    assert "tok-123" not in response.text


def test_failed_login_is_relayed(web: TestClient) -> None:
    response = web.post("/api/auth/login", json={"user": "alice", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert "set-cookie" not in response.headers


def test_register_maps_to_signup(web: TestClient, backend: FakeBackend) -> None:
    response = web.post(
        "/api/auth/register",
        json={"email": "a@example.com", "username": "alice", "password": "password123"},
    )
    assert response.status_code == 201
    assert backend.last.url.path == "/api/auth/signup"
    assert response.cookies.get("auth_token") == "tok-new"


def test_me_reports_session_state(web: TestClient) -> None:
    assert web.get("/api/auth/me").json() == {"isLoggedIn": False}

    web.cookies.set("auth_token", "tok-123")
    me = web.get("/api/auth/me").json()
    assert me["isLoggedIn"] is True
    assert me["user"]["username"] == "alice"

    web.cookies.set("auth_token", "stale")
    assert web.get("/api/auth/me").json() == {"isLoggedIn": False}


def test_logout_clears_cookie(web: TestClient) -> None:
    web.cookies.set("auth_token", "tok-123")
    response = web.post("/api/auth/logout")
    assert response.json() == {"success": True}
    assert 'auth_token=""' in response.headers["set-cookie"]


def test_proxy_forwards_cookie_as_bearer(web: TestClient, backend: FakeBackend) -> None:
    web.cookies.set("auth_token", "tok-123")
    response = web.put(
        "/api/profiles/3",
        params={"dry": "1"},
        json={"name": "Strider"},
    )
    assert response.status_code == 200
    assert response.json() == {"echo": "/api/profiles/3"}

    forwarded = backend.last
    assert forwarded.method == "PUT"
    assert forwarded.headers["authorization"] == "Bearer tok-123"
    assert forwarded.headers["content-type"] == "application/json"
    assert forwarded.url.params["dry"] == "1"
    assert json.loads(forwarded.content) == {"name": "Strider"}


def test_proxy_without_cookie_sends_no_token(web: TestClient, backend: FakeBackend) -> None:
    web.get("/api/archive/public")
    assert "authorization" not in backend.last.headers


def test_catalog_page_renders_items(web: TestClient) -> None:
    response = web.get("/")
    assert response.status_code == 200
    assert "Moonrise over Weathertop" in response.text
    assert 'href="/posts/7"' in response.text
    assert "by Aragorn" in response.text


def test_catalog_page_shows_bad_query(web: TestClient) -> None:
    response = web.get("/", params={"limit": "0"})
    assert response.status_code == 400
    assert "Invalid query parameters" in response.text


def test_detail_pages(web: TestClient) -> None:
    found = web.get("/posts/7")
    assert found.status_code == 200
    assert "Moonrise over Weathertop" in found.text

    missing = web.get("/posts/999")
    assert missing.status_code == 404
    assert "Not found" in missing.text


def test_login_form_redirects_with_cookie(web: TestClient) -> None:
    response = web.post(
        "/login", data={"user": "alice", "password": "password123"}, follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert response.cookies.get("auth_token") == "tok-123"

    rejected = web.post("/login", data={"user": "alice", "password": "nope"}, follow_redirects=False)
    assert rejected.status_code == 401
    assert "Invalid username, email or password." in rejected.text


def test_backend_down_returns_502() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    app = create_app(transport=httpx.MockTransport(refuse))
    with TestClient(app) as client:
        api = client.get("/api/archive/public")
        assert api.status_code == 502
        assert api.json() == {"detail": "Backend unavailable"}

        page = client.get("/")
        assert page.status_code == 502
        assert "unavailable" in page.text
