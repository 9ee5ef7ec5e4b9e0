# -*- coding: utf-8 -*-
# @file editor_service.py
# @brief Editor delegation for profiles, posts and collections
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from bha_server.data.schemas import EditorResponse
from bha_server.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from bha_server.model import Account
from bha_server.service.access import ContentKind, get_live

logger = logging.getLogger(__name__)


class EditorService:
    """Grants and revokes edit rights on one kind of entity.

    Editors may change content but never delete it or manage other editors.
    Rows are soft-deleted and reactivated when the same account is invited
    again.
    """

    def __init__(self, db: Session, kind: ContentKind):
        self.db = db
        self.kind = kind

    def _require_entity(self, entity_id: int):
        entity = get_live(self.db, self.kind, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind.title} not found")
        return entity

    def _to_response(self, row) -> EditorResponse:
        editor, username, invited_by_username = row
        return EditorResponse(
            editor_id=editor.editor_id,
            account_id=editor.account_id,
            username=username,
            invited_by_account_id=editor.invited_by_account_id,
            invited_by_username=invited_by_username,
            created_at=editor.created_at,
        )

    def _editor_query(self):
        editor_model = self.kind.editor_model
        inviter = aliased(Account)
        return (
            self.db.query(editor_model, Account.username, inviter.username)
            .join(Account, Account.account_id == editor_model.account_id)
            .outerjoin(inviter, inviter.account_id == editor_model.invited_by_account_id)
        )

    def list_editors(self, entity_id: int) -> List[EditorResponse]:
        self._require_entity(entity_id)
        editor_model = self.kind.editor_model
        rows = (
            self._editor_query()
            .filter(self.kind.editor_fk == entity_id, editor_model.is_deleted.is_(False))
            .order_by(editor_model.created_at.asc(), editor_model.editor_id.asc())
            .all()
        )
        return [self._to_response(row) for row in rows]

    def add_editor(self, entity_id: int, account_id: int, username: str) -> EditorResponse:
        entity = self._require_entity(entity_id)
        if entity.account_id != account_id:
            raise PermissionDeniedError(f"Only the {self.kind.label} owner can add editors")

        target = (
            self.db.query(Account)
            .filter(
                func.lower(Account.username) == username.lower(),
                Account.is_deleted.is_(False),
            )
            .first()
        )
        if target is None:
            raise NotFoundError("User not found")
        if target.account_id == account_id:
            raise InvalidRequestError("You cannot add yourself as an editor - you are the owner")

        editor_model = self.kind.editor_model
        editor = (
            self.db.query(editor_model)
            .filter(
                self.kind.editor_fk == entity_id,
                editor_model.account_id == target.account_id,
            )
            .first()
        )
        if editor is not None and not editor.is_deleted:
            raise ConflictError("This user is already an editor")

        if editor is None:
            editor = editor_model(
                account_id=target.account_id,
                invited_by_account_id=account_id,
                **{self.kind.id_attr: entity_id},
            )
            self.db.add(editor)
        else:
            editor.is_deleted = False
            editor.invited_by_account_id = account_id
        self.db.commit()
        self.db.refresh(editor)
        logger.info(
            "Account %s granted edit rights on %s %s", target.account_id, self.kind.label, entity_id
        )

        row = self._editor_query().filter(editor_model.editor_id == editor.editor_id).one()
        return self._to_response(row)

    def remove_editor(self, entity_id: int, editor_id: int, account_id: int) -> None:
        """Owners may remove anyone; an editor may remove themself"""
        entity = self._require_entity(entity_id)
        editor_model = self.kind.editor_model
        editor = (
            self.db.query(editor_model)
            .filter(
                editor_model.editor_id == editor_id,
                self.kind.editor_fk == entity_id,
                editor_model.is_deleted.is_(False),
            )
            .first()
        )
        if editor is None:
            raise NotFoundError("Editor not found")
        if entity.account_id != account_id and editor.account_id != account_id:
            raise PermissionDeniedError("You do not have permission to remove this editor")

        editor.is_deleted = True
        self.db.commit()
