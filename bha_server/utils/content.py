# -*- coding: utf-8 -*-
# @file content.py
# @brief Thumbnail and preview extraction from post/profile JSON content
# @author sailing-innocent
# @date 2025-04-21

from typing import Any, Optional

from bha_server.data.lookups import ART, EVENT, MEDIA, WRITING

PREVIEW_LENGTH = 200


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def post_thumbnail(post_type_id: int, content: Any) -> Optional[str]:
    if not isinstance(content, dict):
        return None
    if post_type_id in (ART, MEDIA):
        images = content.get("images")
        if isinstance(images, list) and images and isinstance(images[0], dict):
            url = images[0].get("url")
            return url if isinstance(url, str) else None
        return None
    if post_type_id == EVENT:
        header = content.get("headerImage")
        if isinstance(header, dict) and isinstance(header.get("url"), str):
            return header["url"]
    return None


def post_preview(post_type_id: int, content: Any) -> str:
    if not isinstance(content, dict):
        return ""
    key = "body" if post_type_id == WRITING else "description"
    return _text(content.get(key))[:PREVIEW_LENGTH]


def profile_preview(details: Any) -> str:
    if not isinstance(details, dict):
        return ""
    return _text(details.get("description"))
