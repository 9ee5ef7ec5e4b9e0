# -*- coding: utf-8 -*-
# @file dashboard_service.py
# @brief "My content" listings: owned and delegated entities with cursor paging
# @author sailing-innocent
# @date 2025-04-21

from typing import Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from bha_server.data.schemas import (
    MyCollectionsPage,
    MyPostsPage,
    MyProfilesPage,
    OwnedCollection,
    OwnedPost,
    OwnedProfile,
)
from bha_server.service.access import COLLECTION, POST, PROFILE, ContentKind
from bha_server.service.collection_service import CollectionService
from bha_server.service.post_service import PostService
from bha_server.service.profile_service import ProfileService

FILTERS = ("all", "owned", "editor")


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def _page(self, kind: ContentKind, query, account_id: int, filter_by: str,
              cursor: Optional[int], limit: int) -> Tuple[list, Optional[int]]:
        """Newest first by id; fetches one extra row to detect another page"""
        owned = kind.model.account_id == account_id
        delegated = kind.id_column.in_(
            select(kind.editor_fk).where(
                kind.editor_model.account_id == account_id,
                kind.editor_model.is_deleted.is_(False),
            )
        )
        if filter_by == "owned":
            query = query.filter(owned)
        elif filter_by == "editor":
            query = query.filter(delegated)
        else:
            query = query.filter(or_(owned, delegated))
        if cursor is not None:
            query = query.filter(kind.id_column < cursor)

        rows = query.order_by(kind.id_column.desc()).limit(limit + 1).all()
        next_cursor = None
        if len(rows) > limit:
            rows = rows[:limit]
            next_cursor = getattr(rows[-1][0], kind.id_attr)
        return rows, next_cursor

    def my_profiles(self, account_id: int, filter_by: str, cursor: Optional[int], limit: int) -> MyProfilesPage:
        service = ProfileService(self.db)
        rows, next_cursor = self._page(
            PROFILE, service.summary_query(), account_id, filter_by, cursor, limit
        )
        profiles = [
            OwnedProfile(
                **service.to_summary(row).model_dump(),
                is_owner=row[0].account_id == account_id,
            )
            for row in rows
        ]
        return MyProfilesPage(profiles=profiles, next_cursor=next_cursor)

    def my_posts(self, account_id: int, filter_by: str, cursor: Optional[int], limit: int) -> MyPostsPage:
        service = PostService(self.db)
        rows, next_cursor = self._page(
            POST, service.summary_query(), account_id, filter_by, cursor, limit
        )
        posts = [
            OwnedPost(
                **service.to_summary(row).model_dump(),
                is_owner=row[0].account_id == account_id,
            )
            for row in rows
        ]
        return MyPostsPage(posts=posts, next_cursor=next_cursor)

    def my_collections(
        self, account_id: int, filter_by: str, cursor: Optional[int], limit: int
    ) -> MyCollectionsPage:
        service = CollectionService(self.db)
        rows, next_cursor = self._page(
            COLLECTION, service.summary_query(), account_id, filter_by, cursor, limit
        )
        collections = [
            OwnedCollection(
                **service.to_summary(row).model_dump(),
                is_owner=row[0].account_id == account_id,
            )
            for row in rows
        ]
        return MyCollectionsPage(collections=collections, next_cursor=next_cursor)
