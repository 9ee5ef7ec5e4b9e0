# -*- coding: utf-8 -*-
# @file params.py
# @brief Lenient parsing of path and query parameters
# @author sailing-innocent
# @date 2025-04-21

from typing import Iterable, List, Optional

from bha_server.errors import InvalidRequestError

MAX_SEARCH_LENGTH = 100


def _is_number(value: str) -> bool:
    # str.isdigit also accepts characters such as superscripts that int() rejects
    return value.isascii() and value.isdecimal()


def parse_id(raw: str, label: str) -> int:
    """Parse a positive integer path id or raise 400 'Invalid <label> ID'"""
    value = (raw or "").strip()
    if not _is_number(value) or int(value) < 1:
        raise InvalidRequestError(f"Invalid {label} ID")
    return int(value)


def parse_limit(raw: Optional[str], default: int = 50, maximum: int = 100) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))


def parse_offset(raw: Optional[str]) -> int:
    try:
        offset = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(0, offset)


def parse_choice(raw: Optional[str], allowed: Iterable[str], default: str) -> str:
    return raw if raw in tuple(allowed) else default


def parse_id_list(raw: Optional[str], valid: Iterable[int]) -> List[int]:
    """Comma separated ids; anything not in `valid` is dropped"""
    if not raw:
        return []
    valid = set(valid)
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if _is_number(part.lstrip("-")) and int(part) in valid and int(part) not in ids:
            ids.append(int(part))
    return ids


def normalize_search(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    search = raw.strip()[:MAX_SEARCH_LENGTH]
    return search or None


def like_pattern(search: str) -> str:
    """Substring LIKE pattern with wildcards escaped (use escape='\\\\')"""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def parse_cursor(raw: Optional[str]) -> Optional[int]:
    """Id cursor for keyset paging; anything but a positive integer means no cursor"""
    value = (raw or "").strip()
    if not _is_number(value) or int(value) < 1:
        return None
    return int(value)
