from __future__ import annotations

import io

from fastapi.testclient import TestClient
from PIL import Image


def _png(size=(32, 16), color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_upload_images_and_serve_them(client: TestClient, alice) -> None:
    data = _png()
    response = client.post(
        "/api/uploads/images",
        files=[
            ("images", ("map.png", data, "image/png")),
            ("images", ("notes.gif", b"GIF89a", "image/gif")),
        ],
        headers=alice.headers,
    )
    assert response.status_code == 201
    payload = response.json()
    assert payload["message"] == "2 file(s) uploaded successfully"

    first = payload["files"][0]
    assert first["originalName"] == "map.png"
    assert first["mimetype"] == "image/png"
    assert first["size"] == len(data)
    assert first["filename"].endswith(".png")
    assert first["url"] == f"/uploads/images/{first['filename']}"
    assert payload["files"][1]["filename"].endswith(".gif")

    served = client.get(first["url"])
    assert served.status_code == 200
    assert served.content == data


def test_upload_rejects_wrong_type_and_too_many_files(client: TestClient, alice) -> None:
    wrong = client.post(
        "/api/uploads/images",
        files=[("images", ("script.txt", b"hello", "text/plain"))],
        headers=alice.headers,
    )
    assert wrong.status_code == 400
    assert "Only JPEG, PNG, GIF and WebP" in wrong.json()["detail"]

    png = _png()
    too_many = client.post(
        "/api/uploads/images",
        files=[("images", (f"{n}.png", png, "image/png")) for n in range(11)],
        headers=alice.headers,
    )
    assert too_many.status_code == 400


def test_upload_requires_login(client: TestClient) -> None:
    response = client.post(
        "/api/uploads/images", files=[("images", ("a.png", _png(), "image/png"))]
    )
    assert response.status_code == 401


def test_delete_image(client: TestClient, alice) -> None:
    uploaded = client.post(
        "/api/uploads/images",
        files=[("images", ("a.png", _png(), "image/png"))],
        headers=alice.headers,
    ).json()["files"][0]

    deleted = client.delete(f"/api/uploads/images/{uploaded['filename']}", headers=alice.headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "File deleted successfully"

    missing = client.delete(f"/api/uploads/images/{uploaded['filename']}", headers=alice.headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "File not found"

    traversal = client.delete("/api/uploads/images/..secret", headers=alice.headers)
    assert traversal.status_code == 400
    assert traversal.json()["detail"] == "Invalid filename"


def test_avatar_is_cropped_to_square_png(client: TestClient, alice) -> None:
    response = client.post(
        "/api/uploads/avatar",
        files={"avatar": ("me.png", _png(size=(600, 300)), "image/png")},
        headers=alice.headers,
    )
    assert response.status_code == 200
    avatar_url = response.json()["avatar_url"]
    assert avatar_url.startswith("/uploads/avatars/")
    assert avatar_url.endswith(".png")

    stored = client.get(avatar_url)
    with Image.open(io.BytesIO(stored.content)) as img:
        assert img.size == (256, 256)
        assert img.format == "PNG"

    me = client.get("/api/auth/me", headers=alice.headers).json()
    assert me["avatar_url"] == avatar_url


def test_avatar_rejects_broken_image(client: TestClient, alice) -> None:
    response = client.post(
        "/api/uploads/avatar",
        files={"avatar": ("me.png", b"definitely not a png", "image/png")},
        headers=alice.headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid image file"


def test_oversized_uploads_are_rejected(client: TestClient, alice) -> None:
    big_image = client.post(
        "/api/uploads/images",
        files=[("images", ("huge.png", b"\0" * (10 * 1024 * 1024 + 1), "image/png"))],
        headers=alice.headers,
    )
    assert big_image.status_code == 400
    assert big_image.json()["detail"] == "huge.png exceeds the 10MB size limit"

    big_avatar = client.post(
        "/api/uploads/avatar",
        files={"avatar": ("me.png", b"\0" * (5 * 1024 * 1024 + 1), "image/png")},
        headers=alice.headers,
    )
    assert big_avatar.status_code == 400
    assert big_avatar.json()["detail"] == "Avatar exceeds the 5MB size limit"


def test_avatar_rejects_decompression_bomb(client: TestClient, alice, monkeypatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    response = client.post(
        "/api/uploads/avatar",
        files={"avatar": ("bomb.png", _png(size=(64, 64)), "image/png")},
        headers=alice.headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid image file"
