# -*- coding: utf-8 -*-
# @file access.py
# @brief Ownership and edit-permission checks shared by profiles, posts and collections
# @author sailing-innocent
# @date 2025-04-21

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from bha_server.data.lookups import AUTHOR_PROFILE_TYPES
from bha_server.model import (
    Collection,
    CollectionAuthor,
    CollectionEditor,
    Post,
    PostAuthor,
    PostEditor,
    Profile,
    ProfileEditor,
)


@dataclass(frozen=True)
class ContentKind:
    """Describes one editable entity table and its satellite tables"""

    label: str
    model: Any
    id_attr: str
    editor_model: Any
    author_model: Any = None

    @property
    def id_column(self):
        return getattr(self.model, self.id_attr)

    @property
    def editor_fk(self):
        return getattr(self.editor_model, self.id_attr)

    @property
    def author_fk(self):
        return getattr(self.author_model, self.id_attr)

    @property
    def title(self) -> str:
        return self.label.capitalize()


PROFILE = ContentKind("profile", Profile, "profile_id", ProfileEditor)
POST = ContentKind("post", Post, "post_id", PostEditor, PostAuthor)
COLLECTION = ContentKind("collection", Collection, "collection_id", CollectionEditor, CollectionAuthor)


def get_live(db: Session, kind: ContentKind, entity_id: int):
    """Fetch a non-deleted row of the given kind"""
    return (
        db.query(kind.model)
        .filter(kind.id_column == entity_id, kind.model.is_deleted.is_(False))
        .first()
    )


def is_editor(db: Session, kind: ContentKind, entity_id: int, account_id: int) -> bool:
    return (
        db.query(kind.editor_model)
        .filter(
            kind.editor_fk == entity_id,
            kind.editor_model.account_id == account_id,
            kind.editor_model.is_deleted.is_(False),
        )
        .first()
        is not None
    )


def can_edit(db: Session, kind: ContentKind, entity, account_id: Optional[int]) -> bool:
    """Owners and active editors may edit a live entity"""
    if entity is None or account_id is None or entity.is_deleted:
        return False
    if entity.account_id == account_id:
        return True
    return is_editor(db, kind, getattr(entity, kind.id_attr), account_id)


def get_authorable_profile(db: Session, profile_id: int, account_id: int) -> Optional[Profile]:
    """A live character, kinship or organization owned by the account"""
    return (
        db.query(Profile)
        .filter(
            Profile.profile_id == profile_id,
            Profile.account_id == account_id,
            Profile.profile_type_id.in_(AUTHOR_PROFILE_TYPES),
            Profile.is_deleted.is_(False),
        )
        .first()
    )
