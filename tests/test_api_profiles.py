from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import create_character, create_profile


def test_create_character_trims_name_and_keeps_details(client: TestClient, alice) -> None:
    response = create_profile(
        client, alice, 1, "  Aragorn  ", details={"description": "Heir of Isildur", "age": 87}
    )
    assert response.status_code == 201
    payload = response.json()
    assert payload["name"] == "Aragorn"
    assert payload["details"] == {"description": "Heir of Isildur", "age": 87}
    assert payload["account_id"] == alice.account_id
    assert payload["is_published"] is True


def test_details_may_be_any_json(client: TestClient, alice) -> None:
    as_string = create_profile(client, alice, 5, "Bree", details="a village")
    assert as_string.status_code == 201
    assert as_string.json()["details"] == "a village"

    as_null = create_profile(client, alice, 5, "Archet", details=None)
    assert as_null.status_code == 201
    assert as_null.json()["details"] is None


def test_create_validation(client: TestClient, alice) -> None:
    assert create_profile(client, alice, 1, "   ").status_code == 400
    assert create_profile(client, alice, 1, "x" * 101).status_code == 400
    assert create_profile(client, alice, 1, "x" * 100).status_code == 201
    assert create_profile(client, alice, 6, "Nobody").status_code == 400
    assert create_profile(client, alice, 0, "Nobody").status_code == 400


def test_character_names_are_unique_site_wide(client: TestClient, alice, bob) -> None:
    create_character(client, alice, "Aragorn")

    clash = create_profile(client, bob, 1, "Aragorn")
    assert clash.status_code == 409
    assert clash.json()["detail"] == "There is already a profile with this name"

    # comparison is case-sensitive
    assert create_profile(client, bob, 1, "aragorn").status_code == 201
    # other types may reuse the name
    assert create_profile(client, alice, 5, "Aragorn").status_code == 201


def test_other_types_are_unique_per_account(client: TestClient, alice, bob) -> None:
    alice_char = create_character(client, alice, "Halbarad")
    bob_char = create_character(client, bob, "Hirgon")

    first = create_profile(
        client, alice, 3, "Rangers", parent_profile_id=alice_char["profile_id"]
    )
    assert first.status_code == 201

    again = create_profile(
        client, alice, 3, "Rangers", parent_profile_id=alice_char["profile_id"]
    )
    assert again.status_code == 409

    # different account, same name and type
    other = create_profile(client, bob, 3, "Rangers", parent_profile_id=bob_char["profile_id"])
    assert other.status_code == 201

    # same account, different type
    org = create_profile(client, alice, 4, "Rangers", parent_profile_id=alice_char["profile_id"])
    assert org.status_code == 201

    assert create_profile(client, alice, 5, "Weathertop").status_code == 201
    assert create_profile(client, alice, 5, "Weathertop").status_code == 409
    assert create_profile(client, bob, 5, "Weathertop").status_code == 201


def test_soft_delete_frees_the_name(client: TestClient, alice, bob) -> None:
    profile = create_character(client, alice, "Boromir")
    deleted = client.delete(f"/api/profiles/{profile['profile_id']}", headers=alice.headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Profile deleted successfully"

    assert create_profile(client, bob, 1, "Boromir").status_code == 201
    gone = client.get(f"/api/profiles/{profile['profile_id']}")
    assert gone.status_code == 404
    assert gone.json()["detail"] == "Profile not found"


def test_parent_hierarchy_rules(client: TestClient, alice, bob) -> None:
    character = create_character(client, alice, "Gimli")
    location = create_profile(client, alice, 5, "Erebor").json()
    bobs = create_character(client, bob, "Legolas")

    orphan_item = create_profile(client, alice, 2, "Axe")
    assert orphan_item.status_code == 400

    parented_character = create_profile(
        client, alice, 1, "Gloin", parent_profile_id=character["profile_id"]
    )
    assert parented_character.status_code == 400

    under_location = create_profile(
        client, alice, 2, "Axe", parent_profile_id=location["profile_id"]
    )
    assert under_location.status_code == 400

    under_someone_else = create_profile(
        client, alice, 2, "Axe", parent_profile_id=bobs["profile_id"]
    )
    assert under_someone_else.status_code == 403

    item = create_profile(client, alice, 2, "Axe", parent_profile_id=character["profile_id"])
    assert item.status_code == 201

    detail = client.get(f"/api/profiles/{item.json()['profile_id']}").json()
    assert detail["parent"] == {"profile_id": character["profile_id"], "name": "Gimli"}
    assert detail["type_name"] == "item"


def test_get_profile_flags_and_errors(client: TestClient, alice, bob) -> None:
    profile = create_character(client, alice, "Eowyn")
    path = f"/api/profiles/{profile['profile_id']}"

    as_owner = client.get(path, headers=alice.headers).json()
    assert as_owner["can_edit"] is True
    assert as_owner["is_owner"] is True
    assert as_owner["username"] == "alice"

    as_other = client.get(path, headers=bob.headers).json()
    assert as_other["can_edit"] is False
    assert as_other["is_owner"] is False

    anonymous = client.get(path).json()
    assert anonymous["can_edit"] is False

    invalid = client.get("/api/profiles/abc")
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid profile ID"

    assert client.get("/api/profiles/9999").status_code == 404


def test_update_profile_permissions(client: TestClient, alice, bob) -> None:
    profile = create_character(client, alice, "Faramir")
    path = f"/api/profiles/{profile['profile_id']}"

    no_fields = client.put(path, json={}, headers=alice.headers)
    assert no_fields.status_code == 400
    assert no_fields.json()["detail"] == "No fields to update"

    forbidden = client.put(path, json={"name": "Steward"}, headers=bob.headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == "You do not have permission to edit this profile"

    client.post(f"{path}/editors", json={"username": "bob"}, headers=alice.headers)
    as_editor = client.put(path, json={"details": {"description": "Captain"}}, headers=bob.headers)
    assert as_editor.status_code == 200
    assert as_editor.json()["details"] == {"description": "Captain"}

    # editors may not delete
    assert client.delete(path, headers=bob.headers).status_code == 404


def test_rename_checks_uniqueness(client: TestClient, alice) -> None:
    create_character(client, alice, "Merry")
    pippin = create_character(client, alice, "Pippin")
    path = f"/api/profiles/{pippin['profile_id']}"

    clash = client.put(path, json={"name": "Merry"}, headers=alice.headers)
    assert clash.status_code == 409

    same = client.put(path, json={"name": "Pippin"}, headers=alice.headers)
    assert same.status_code == 200

    renamed = client.put(path, json={"name": "Peregrin"}, headers=alice.headers)
    assert renamed.json()["name"] == "Peregrin"


def test_delete_requires_owner(client: TestClient, alice, bob) -> None:
    profile = create_character(client, alice, "Sam")
    response = client.delete(f"/api/profiles/{profile['profile_id']}", headers=bob.headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Profile not found or not authorized"


def test_drafts_are_hidden_from_others(client: TestClient, alice, bob) -> None:
    draft = create_character(client, alice, "Secret", is_published=False)
    path = f"/api/profiles/{draft['profile_id']}"

    assert client.get(path, headers=alice.headers).status_code == 200
    assert client.get(path, headers=bob.headers).status_code == 404
    assert client.get(path).status_code == 404

    listing = client.get("/api/profiles/public").json()
    assert all(p["name"] != "Secret" for p in listing["profiles"])


def test_public_listing_filters_and_paging(client: TestClient, alice, bob) -> None:
    create_character(client, alice, "Theoden")
    create_character(client, bob, "Theodred")
    create_profile(client, alice, 5, "Edoras")

    everything = client.get("/api/profiles/public").json()
    assert everything["total"] == 3
    assert everything["hasMore"] is False

    characters = client.get("/api/profiles/public", params={"profile_type_id": "1,99"}).json()
    assert {p["name"] for p in characters["profiles"]} == {"Theoden", "Theodred"}

    search = client.get("/api/profiles/public", params={"search": "  THEOD  "}).json()
    assert search["total"] == 2

    by_name = client.get("/api/profiles/public", params={"sortBy": "name", "order": "asc"}).json()
    assert [p["name"] for p in by_name["profiles"]] == ["Edoras", "Theoden", "Theodred"]

    first_page = client.get(
        "/api/profiles/public", params={"sortBy": "name", "order": "asc", "limit": "0"}
    ).json()
    assert [p["name"] for p in first_page["profiles"]] == ["Edoras"]
    assert first_page["hasMore"] is True

    lenient = client.get(
        "/api/profiles/public",
        params={"limit": "abc", "offset": "-5", "sortBy": "bogus", "order": "sideways"},
    )
    assert lenient.status_code == 200
    assert len(lenient.json()["profiles"]) == 3

    second = client.get(
        "/api/profiles/public", params={"sortBy": "name", "order": "asc", "limit": 2, "offset": 2}
    ).json()
    assert [p["name"] for p in second["profiles"]] == ["Theodred"]
    assert second["hasMore"] is False


def test_null_publish_flag_is_rejected(client: TestClient, alice) -> None:
    profile = create_character(client, alice, "Beregond")
    path = f"/api/profiles/{profile['profile_id']}"

    response = client.put(path, json={"is_published": None}, headers=alice.headers)
    assert response.status_code == 400
    assert "is_published" in response.json()["detail"]
    assert client.get(path).json()["is_published"] is True

    # a null flag next to a real change is still refused as a whole
    mixed = client.put(path, json={"name": "Bergil", "is_published": None}, headers=alice.headers)
    assert mixed.status_code == 400
    assert client.get(path).json()["name"] == "Beregond"
