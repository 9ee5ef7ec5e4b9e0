# -*- coding: utf-8 -*-
# @file author_service.py
# @brief Profile author credits on posts and collections
# @author sailing-innocent
# @date 2025-04-21

from typing import List

from sqlalchemy.orm import Session

from bha_server.data.schemas import AuthorResponse
from bha_server.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from bha_server.model import Profile
from bha_server.service.access import ContentKind, can_edit, get_authorable_profile, get_live

AUTHOR_RULE = "Author must be a character, kinship, or organization that you own"


class AuthorService:
    def __init__(self, db: Session, kind: ContentKind):
        self.db = db
        self.kind = kind

    def list_authors(self, entity_id: int) -> List[AuthorResponse]:
        """Live credits, primary first"""
        author_model = self.kind.author_model
        rows = (
            self.db.query(author_model, Profile.name)
            .join(Profile, Profile.profile_id == author_model.profile_id)
            .filter(
                self.kind.author_fk == entity_id,
                author_model.is_deleted.is_(False),
                Profile.is_deleted.is_(False),
            )
            .order_by(author_model.is_primary.desc(), author_model.author_id.asc())
            .all()
        )
        return [
            AuthorResponse(
                author_id=author.author_id,
                profile_id=author.profile_id,
                profile_name=name,
                is_primary=author.is_primary,
            )
            for author, name in rows
        ]

    def add_primary(self, entity_id: int, profile: Profile):
        """Stage the primary credit; the caller commits"""
        author = self.kind.author_model(
            profile_id=profile.profile_id,
            is_primary=True,
            **{self.kind.id_attr: entity_id},
        )
        self.db.add(author)
        return author

    def add_author(self, entity_id: int, account_id: int, profile_id: int) -> AuthorResponse:
        entity = get_live(self.db, self.kind, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind.title} not found")
        if not can_edit(self.db, self.kind, entity, account_id):
            raise PermissionDeniedError(
                f"You do not have permission to modify this {self.kind.label}"
            )

        profile = get_authorable_profile(self.db, profile_id, account_id)
        if profile is None:
            raise InvalidRequestError(AUTHOR_RULE)

        author_model = self.kind.author_model
        author = (
            self.db.query(author_model)
            .filter(self.kind.author_fk == entity_id, author_model.profile_id == profile_id)
            .first()
        )
        if author is not None and not author.is_deleted:
            raise ConflictError(f"This profile is already an author of this {self.kind.label}")

        if author is None:
            author = author_model(
                profile_id=profile_id,
                is_primary=False,
                **{self.kind.id_attr: entity_id},
            )
            self.db.add(author)
        else:
            author.is_deleted = False
            author.is_primary = False
        self.db.commit()
        self.db.refresh(author)
        return AuthorResponse(
            author_id=author.author_id,
            profile_id=profile.profile_id,
            profile_name=profile.name,
            is_primary=author.is_primary,
        )

    def remove_author(self, entity_id: int, account_id: int, author_id: int) -> None:
        entity = get_live(self.db, self.kind, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind.title} not found")
        if not can_edit(self.db, self.kind, entity, account_id):
            raise PermissionDeniedError(
                f"You do not have permission to modify this {self.kind.label}"
            )

        author_model = self.kind.author_model
        author = (
            self.db.query(author_model)
            .filter(
                author_model.author_id == author_id,
                self.kind.author_fk == entity_id,
                author_model.is_deleted.is_(False),
            )
            .first()
        )
        if author is None:
            raise NotFoundError("Author not found")
        if author.is_primary:
            raise InvalidRequestError(
                "Cannot remove the primary author. Transfer primary status first."
            )

        author.is_deleted = True
        self.db.commit()
