from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import create_character, create_post, create_profile


def _comments_path(post: dict) -> str:
    return f"/api/posts/{post['post_id']}/comments"


def test_comment_thread(client: TestClient, alice, bob) -> None:
    post = create_post(client, alice, 1, "Open Letter")
    path = _comments_path(post)
    character = create_character(client, bob, "Treebeard")

    first = client.post(path, json={"content": "  Hoom!  ", "profile_id": character["profile_id"]}, headers=bob.headers)
    assert first.status_code == 201
    assert first.json()["content"] == "Hoom!"
    assert first.json()["profile_name"] == "Treebeard"
    assert first.json()["username"] == "bob"

    reply = client.post(
        path,
        json={"content": "Hello", "parent_comment_id": first.json()["comment_id"]},
        headers=alice.headers,
    )
    assert reply.status_code == 201
    assert reply.json()["profile_id"] is None

    listing = client.get(path).json()["comments"]
    assert [c["content"] for c in listing] == ["Hoom!", "Hello"]
    assert listing[1]["parent_comment_id"] == first.json()["comment_id"]


def test_comment_identity_rules(client: TestClient, alice, bob) -> None:
    post = create_post(client, alice, 1, "Letter")
    path = _comments_path(post)
    bobs = create_character(client, bob, "Quickbeam")
    location = create_profile(client, alice, 5, "Fangorn").json()

    for profile_id in (bobs["profile_id"], location["profile_id"]):
        response = client.post(path, json={"content": "Hi", "profile_id": profile_id}, headers=alice.headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Comments can only be made as a character that you own"

    orphan = client.post(path, json={"content": "Hi", "parent_comment_id": 9999}, headers=alice.headers)
    assert orphan.status_code == 400
    assert orphan.json()["detail"] == "Parent comment not found on this post"

    blank = client.post(path, json={"content": "   "}, headers=alice.headers)
    assert blank.status_code == 400

    assert client.post(path, json={"content": "Hi"}).status_code == 401
    assert client.post("/api/posts/9999/comments", json={"content": "Hi"}, headers=alice.headers).status_code == 404


def test_edit_and_delete_comment(client: TestClient, alice, bob) -> None:
    post = create_post(client, alice, 1, "Letter")
    path = _comments_path(post)
    comment = client.post(path, json={"content": "First draft"}, headers=alice.headers).json()
    comment_path = f"{path}/{comment['comment_id']}"

    assert client.put(comment_path, json={"content": "Mine now"}, headers=bob.headers).status_code == 403
    edited = client.put(comment_path, json={"content": "Second draft"}, headers=alice.headers)
    assert edited.json()["content"] == "Second draft"

    assert client.delete(comment_path, headers=bob.headers).status_code == 403
    deleted = client.delete(comment_path, headers=alice.headers)
    assert deleted.json()["message"] == "Comment deleted successfully"

    again = client.delete(comment_path, headers=alice.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "Comment is already deleted"

    edit_deleted = client.put(comment_path, json={"content": "Back"}, headers=alice.headers)
    assert edit_deleted.status_code == 400
    assert edit_deleted.json()["detail"] == "Cannot edit a deleted comment"

    # deleted comments stay in the thread without their text
    listing = client.get(path).json()["comments"]
    assert listing[0]["is_deleted"] is True
    assert listing[0]["content"] is None

    assert client.delete(f"{path}/9999", headers=alice.headers).status_code == 404


def test_draft_post_comments_need_edit_rights(client: TestClient, alice, bob) -> None:
    draft = create_post(client, alice, 1, "Unfinished", is_published=False)
    path = _comments_path(draft)

    own = client.post(path, json={"content": "Note to self"}, headers=alice.headers)
    assert own.status_code == 201
    assert [c["content"] for c in client.get(path, headers=alice.headers).json()["comments"]] == ["Note to self"]

    for headers in ({}, bob.headers):
        hidden = client.get(path, headers=headers)
        assert hidden.status_code == 404
        assert hidden.json()["detail"] == "Post not found"

    assert client.post(path, json={"content": "Peek"}, headers=bob.headers).status_code == 404
    comment_path = f"{path}/{own.json()['comment_id']}"
    assert client.put(comment_path, json={"content": "Peek"}, headers=bob.headers).status_code == 404
    assert client.delete(comment_path, headers=bob.headers).status_code == 404

    client.post(f"/api/posts/{draft['post_id']}/editors", json={"username": "bob"}, headers=alice.headers)
    as_editor = client.get(path, headers=bob.headers)
    assert as_editor.status_code == 200
    assert len(as_editor.json()["comments"]) == 1
