# -*- coding: utf-8 -*-
# @file archive_service.py
# @brief Unified public catalog of profiles and posts
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import Dict, List

from pydantic import ValidationError
from sqlalchemy import String, and_, cast, func, literal, null, select, union_all
from sqlalchemy.orm import Session, aliased

from bha_server.data.lookups import POST_TYPE_IDS, PROFILE_TYPE_IDS
from bha_server.data.schemas import ArchiveItem, ArchiveQuery, ArchiveResponse
from bha_server.errors import InvalidRequestError
from bha_server.model import Account, Post, PostAuthor, PostType, Profile, ProfileType
from bha_server.utils.content import post_preview, post_thumbnail, profile_preview
from bha_server.utils.params import like_pattern, parse_id_list

logger = logging.getLogger(__name__)

PROFILE_CATEGORY = "profile"
POST_CATEGORY = "post"


def parse_archive_query(params: Dict[str, str]) -> ArchiveQuery:
    try:
        return ArchiveQuery.model_validate(params)
    except ValidationError as e:
        logger.debug("Rejected archive query %s: %s", params, e)
        raise InvalidRequestError("Invalid query parameters")


class ArchiveService:
    """Profiles and posts merged into one sortable, pageable list.

    Both sides are projected onto the same columns and combined with
    UNION ALL so that sorting and paging happen in the database. Thumbnails
    and previews are derived from the JSON payload afterwards.
    """

    def __init__(self, db: Session):
        self.db = db

    def _profile_select(self, type_ids: List[int], search):
        query = (
            select(
                Profile.profile_id.label("id"),
                literal(PROFILE_CATEGORY, String).label("content_category"),
                Profile.profile_type_id.label("type_id"),
                ProfileType.type_name.label("type_name"),
                Profile.name.label("name"),
                Profile.details.label("payload"),
                cast(null(), String).label("author_name"),
                Account.username.label("username"),
                Profile.created_at.label("created_at"),
                Profile.updated_at.label("updated_at"),
            )
            .join(ProfileType, ProfileType.type_id == Profile.profile_type_id)
            .join(Account, Account.account_id == Profile.account_id)
            .where(Profile.is_deleted.is_(False), Profile.is_published.is_(True))
        )
        if type_ids:
            query = query.where(Profile.profile_type_id.in_(type_ids))
        if search:
            query = query.where(Profile.name.ilike(like_pattern(search), escape="\\"))
        return query

    def _post_select(self, type_ids: List[int], search):
        author_profile = aliased(Profile)
        query = (
            select(
                Post.post_id.label("id"),
                literal(POST_CATEGORY, String).label("content_category"),
                Post.post_type_id.label("type_id"),
                PostType.type_name.label("type_name"),
                Post.title.label("name"),
                Post.content.label("payload"),
                author_profile.name.label("author_name"),
                Account.username.label("username"),
                Post.created_at.label("created_at"),
                Post.updated_at.label("updated_at"),
            )
            .join(PostType, PostType.type_id == Post.post_type_id)
            .join(Account, Account.account_id == Post.account_id)
            .outerjoin(
                PostAuthor,
                and_(
                    PostAuthor.post_id == Post.post_id,
                    PostAuthor.is_primary.is_(True),
                    PostAuthor.is_deleted.is_(False),
                ),
            )
            .outerjoin(author_profile, author_profile.profile_id == PostAuthor.profile_id)
            .where(Post.is_deleted.is_(False), Post.is_published.is_(True))
        )
        if type_ids:
            query = query.where(Post.post_type_id.in_(type_ids))
        if search:
            query = query.where(Post.title.ilike(like_pattern(search), escape="\\"))
        return query

    @staticmethod
    def _to_item(row) -> ArchiveItem:
        if row.content_category == POST_CATEGORY:
            thumbnail = post_thumbnail(row.type_id, row.payload)
            preview = post_preview(row.type_id, row.payload)
        else:
            thumbnail = None
            preview = profile_preview(row.payload)
        return ArchiveItem(
            id=row.id,
            content_category=row.content_category,
            type_id=row.type_id,
            type_name=row.type_name,
            name=row.name,
            thumbnail=thumbnail,
            preview=preview,
            author_name=row.author_name,
            username=row.username,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def list_public(self, query: ArchiveQuery) -> ArchiveResponse:
        search = query.search.strip() if query.search else None
        parts = []
        if query.content_type in ("all", "profiles"):
            type_ids = parse_id_list(query.profile_types, PROFILE_TYPE_IDS)
            parts.append(self._profile_select(type_ids, search))
        if query.content_type in ("all", "posts"):
            type_ids = parse_id_list(query.post_types, POST_TYPE_IDS)
            parts.append(self._post_select(type_ids, search))

        combined = (union_all(*parts) if len(parts) > 1 else parts[0]).subquery("combined")
        total = self.db.execute(select(func.count()).select_from(combined)).scalar_one()

        sort_column = combined.c[query.sort_by]
        if query.order == "asc":
            ordering = (sort_column.asc(), combined.c.content_category.asc(), combined.c.id.asc())
        else:
            ordering = (sort_column.desc(), combined.c.content_category.desc(), combined.c.id.desc())
        rows = self.db.execute(
            select(combined).order_by(*ordering).limit(query.limit).offset(query.offset)
        ).all()

        items = [self._to_item(row) for row in rows]
        return ArchiveResponse(
            items=items,
            total=total,
            has_more=query.offset + len(items) < total,
        )
