# -*- coding: utf-8 -*-
# @file config.py
# @brief Web client settings read from environment variables
# @author sailing-innocent
# @date 2025-04-21

import os


def backend_url() -> str:
    return os.environ.get("BACKEND_URL", "http://localhost:8000").rstrip("/")


def auth_cookie_name() -> str:
    return os.environ.get("AUTH_COOKIE_NAME", "auth_token")


def cookie_secure() -> bool:
    return os.environ.get("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")


def cookie_max_age() -> int:
    # matches the API token lifetime
    return int(os.environ.get("JWT_EXPIRES_MINUTES", "60")) * 60


def backend_timeout() -> float:
    return float(os.environ.get("BACKEND_TIMEOUT", "30"))
