# -*- coding: utf-8 -*-
# @file lookups.py
# @brief Type lookup tables: fixed ids and YAML seed loading
# @author sailing-innocent
# @date 2025-04-21

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

LOOKUPS_PATH = Path(__file__).parent / "lookups.yaml"

# profile types
CHARACTER = 1
ITEM = 2
KINSHIP = 3
ORGANIZATION = 4
LOCATION = 5
PROFILE_TYPE_IDS = (CHARACTER, ITEM, KINSHIP, ORGANIZATION, LOCATION)

# profiles that hang off a character
CHILD_PROFILE_TYPES = (ITEM, KINSHIP, ORGANIZATION)
# profiles that may be credited as authors
AUTHOR_PROFILE_TYPES = (CHARACTER, KINSHIP, ORGANIZATION)

# post types
WRITING = 1
ART = 2
MEDIA = 3
EVENT = 4
POST_TYPE_IDS = (WRITING, ART, MEDIA, EVENT)

COLLECTION_TYPE_IDS = (1, 2, 3, 4, 5)


class LookupCatalog:
    """Reads lookups.yaml once and keeps the parsed rows"""

    def __init__(self, path: Path = LOOKUPS_PATH):
        self.path = path
        self._data: Optional[Dict[str, List[Dict[str, Any]]]] = None

    def load(self) -> Dict[str, List[Dict[str, Any]]]:
        if self._data is None:
            if not self.path.exists():
                raise FileNotFoundError(f"Lookup file not found: {self.path}")
            with open(self.path, "r", encoding="utf-8") as f:
                self._data = yaml.safe_load(f) or {}
        return self._data

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self.load().get(table, []))


g_lookups = LookupCatalog()


def seed_lookups(db: Session, catalog: LookupCatalog = g_lookups) -> None:
    """Insert or refresh lookup rows; safe to run on every startup"""
    from bha_server.model import CollectionType, PostType, ProfileType

    tables = (
        ("profile_types", ProfileType),
        ("post_types", PostType),
        ("collection_types", CollectionType),
    )
    for table, model in tables:
        for row in catalog.rows(table):
            existing = db.get(model, row["type_id"])
            if existing is None:
                db.add(model(**row))
            else:
                for key, value in row.items():
                    setattr(existing, key, value)
    db.commit()
    logger.info("Lookup tables seeded from %s", catalog.path.name)
