# -*- coding: utf-8 -*-
# @file config.py
# @brief Runtime configuration read from environment variables
# @author sailing-innocent
# @date 2025-04-21

import os
from pathlib import Path
from typing import List

# Environment is populated by python-dotenv in main.py before this is read,
# so every value is looked up lazily.


def database_uri() -> str:
    return (
        os.environ.get("DATABASE_URI")
        or os.environ.get("POSTGRE_URI")
        or "sqlite:///./bha.db"
    )


def jwt_secret() -> str:
    return os.environ.get("JWT_SECRET", "change-me-in-production")


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALGORITHM", "HS256")


def jwt_expires_minutes() -> int:
    return int(os.environ.get("JWT_EXPIRES_MINUTES", "60"))


def uploads_dir() -> Path:
    return Path(os.environ.get("UPLOADS_DIR", "./uploads"))


def cors_origins() -> List[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def bcrypt_rounds() -> int:
    return int(os.environ.get("BCRYPT_ROUNDS", "12"))
