from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import create_character, create_post, create_profile


@pytest.fixture
def catalog(client: TestClient, alice, bob) -> dict:
    hero = create_character(client, alice, "Aragorn", details={"description": "Ranger of the North"})
    create_profile(client, alice, 5, "Bree")
    create_character(client, bob, "Hidden", is_published=False)
    create_post(
        client,
        alice,
        1,
        "Chronicle of Aragorn",
        content={"body": "x" * 250},
        primary_author_profile_id=hero["profile_id"],
    )
    create_post(
        client,
        bob,
        2,
        "Drawing",
        content={"description": "Ink on paper", "images": [{"url": "/uploads/a.png"}, {"url": "/uploads/b.png"}]},
    )
    create_post(
        client,
        bob,
        4,
        "Feast",
        content={"description": "Midsummer", "headerImage": {"url": "/uploads/feast.png"}},
    )
    create_post(client, bob, 1, "Unfinished", is_published=False)
    return {"hero": hero}


def _names(payload: dict) -> list:
    return [item["name"] for item in payload["items"]]


def test_archive_merges_published_profiles_and_posts(client: TestClient, catalog) -> None:
    response = client.get("/api/archive/public", params={"sortBy": "name", "order": "asc"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 5
    assert payload["hasMore"] is False
    assert _names(payload) == ["Aragorn", "Bree", "Chronicle of Aragorn", "Drawing", "Feast"]


def test_archive_items_carry_thumbnail_and_preview(client: TestClient, catalog) -> None:
    items = {
        item["name"]: item
        for item in client.get("/api/archive/public").json()["items"]
    }

    profile = items["Aragorn"]
    assert profile["contentCategory"] == "profile"
    assert profile["typeName"] == "character"
    assert profile["preview"] == "Ranger of the North"
    assert profile["thumbnail"] is None
    assert profile["authorName"] is None
    assert profile["username"] == "alice"

    writing = items["Chronicle of Aragorn"]
    assert writing["contentCategory"] == "post"
    assert writing["preview"] == "x" * 200
    assert writing["thumbnail"] is None
    assert writing["authorName"] == "Aragorn"

    art = items["Drawing"]
    assert art["thumbnail"] == "/uploads/a.png"
    assert art["preview"] == "Ink on paper"
    assert art["authorName"] is None

    event = items["Feast"]
    assert event["thumbnail"] == "/uploads/feast.png"
    assert event["preview"] == "Midsummer"


def test_archive_filters(client: TestClient, catalog) -> None:
    profiles = client.get("/api/archive/public", params={"contentType": "profiles"}).json()
    assert sorted(_names(profiles)) == ["Aragorn", "Bree"]

    locations = client.get(
        "/api/archive/public", params={"contentType": "profiles", "profileTypes": "5"}
    ).json()
    assert _names(locations) == ["Bree"]

    art_and_events = client.get(
        "/api/archive/public", params={"contentType": "posts", "postTypes": "2,4,77"}
    ).json()
    assert sorted(_names(art_and_events)) == ["Drawing", "Feast"]

    # type filters apply only to their own side
    mixed = client.get("/api/archive/public", params={"profileTypes": "5", "postTypes": "4"}).json()
    assert sorted(_names(mixed)) == ["Bree", "Feast"]

    search = client.get("/api/archive/public", params={"search": "aragorn"}).json()
    assert sorted(_names(search)) == ["Aragorn", "Chronicle of Aragorn"]


def test_archive_paging(client: TestClient, catalog) -> None:
    first = client.get(
        "/api/archive/public", params={"sortBy": "name", "order": "desc", "limit": 2}
    ).json()
    assert _names(first) == ["Feast", "Drawing"]
    assert first["hasMore"] is True

    last = client.get(
        "/api/archive/public", params={"sortBy": "name", "order": "desc", "limit": 2, "offset": 4}
    ).json()
    assert _names(last) == ["Aragorn"]
    assert last["hasMore"] is False
    assert last["total"] == 5


@pytest.mark.parametrize(
    "params",
    [
        {"contentType": "collections"},
        {"sortBy": "title"},
        {"order": "up"},
        {"limit": "0"},
        {"limit": "101"},
        {"limit": "ten"},
        {"offset": "-1"},
        {"search": "s" * 101},
    ],
)
def test_archive_rejects_invalid_query(client: TestClient, params) -> None:
    response = client.get("/api/archive/public", params=params)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid query parameters"


def test_catalog_alias(client: TestClient, catalog) -> None:
    archive = client.get("/api/archive/public", params={"sortBy": "name"}).json()
    alias = client.get("/api/catalog/public", params={"sortBy": "name"}).json()
    assert _names(alias) == _names(archive)


def test_archive_hides_deleted_content(client: TestClient, alice, catalog) -> None:
    client.delete(f"/api/profiles/{catalog['hero']['profile_id']}", headers=alice.headers)
    payload = client.get("/api/archive/public").json()
    assert "Aragorn" not in _names(payload)
    # the post survives and keeps its primary author's name
    chronicle = next(i for i in payload["items"] if i["name"] == "Chronicle of Aragorn")
    assert chronicle["authorName"] == "Aragorn"
