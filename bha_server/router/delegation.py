# -*- coding: utf-8 -*-
# @file delegation.py
# @brief Editor and author sub-routes shared by profiles, posts and collections
# @author sailing-innocent
# @date 2025-04-21

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id
from bha_server.data.schemas import (
    AuthorAdd,
    AuthorResponse,
    EditorAdd,
    EditorListResponse,
    EditorResponse,
    MessageResponse,
)
from bha_server.db import g_db_func
from bha_server.service.access import ContentKind
from bha_server.service.author_service import AuthorService
from bha_server.service.editor_service import EditorService
from bha_server.utils.params import parse_id


def make_editor_router(kind: ContentKind, prefix: str) -> APIRouter:
    """GET/POST {prefix}/{id}/editors and DELETE {prefix}/{id}/editors/{editor_id}"""
    router = APIRouter(prefix=prefix, tags=[f"{kind.label}-editors"])

    def get_editor_service(db: Session = Depends(g_db_func)):
        return EditorService(db, kind)

    @router.get("/{entity_id}/editors", response_model=EditorListResponse)
    def list_editors(entity_id: str, service: EditorService = Depends(get_editor_service)):
        """List active editors"""
        editors = service.list_editors(parse_id(entity_id, kind.label))
        return EditorListResponse(editors=editors)

    @router.post(
        "/{entity_id}/editors",
        response_model=EditorResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def add_editor(
        entity_id: str,
        body: EditorAdd,
        account_id: int = Depends(get_current_account_id),
        service: EditorService = Depends(get_editor_service),
    ):
        """Invite an account by username (owner only)"""
        return service.add_editor(parse_id(entity_id, kind.label), account_id, body.username)

    @router.delete("/{entity_id}/editors/{editor_id}", response_model=MessageResponse)
    def remove_editor(
        entity_id: str,
        editor_id: str,
        account_id: int = Depends(get_current_account_id),
        service: EditorService = Depends(get_editor_service),
    ):
        """Revoke edit rights (owner, or the editor themself)"""
        service.remove_editor(
            parse_id(entity_id, kind.label), parse_id(editor_id, "editor"), account_id
        )
        return MessageResponse(message="Editor removed successfully")

    return router


def make_author_router(kind: ContentKind, prefix: str) -> APIRouter:
    """POST {prefix}/{id}/authors and DELETE {prefix}/{id}/authors/{author_id}"""
    router = APIRouter(prefix=prefix, tags=[f"{kind.label}-authors"])

    def get_author_service(db: Session = Depends(g_db_func)):
        return AuthorService(db, kind)

    @router.post(
        "/{entity_id}/authors",
        response_model=AuthorResponse,
        status_code=status.HTTP_201_CREATED,
    )
    def add_author(
        entity_id: str,
        body: AuthorAdd,
        account_id: int = Depends(get_current_account_id),
        service: AuthorService = Depends(get_author_service),
    ):
        return service.add_author(parse_id(entity_id, kind.label), account_id, body.profile_id)

    @router.delete("/{entity_id}/authors/{author_id}", response_model=MessageResponse)
    def remove_author(
        entity_id: str,
        author_id: str,
        account_id: int = Depends(get_current_account_id),
        service: AuthorService = Depends(get_author_service),
    ):
        service.remove_author(
            parse_id(entity_id, kind.label), account_id, parse_id(author_id, "author")
        )
        return MessageResponse(message="Author removed successfully")

    return router
