# -*- coding: utf-8 -*-
# @file post_service.py
# @brief Service layer for typed posts
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session, aliased

from bha_server.data.schemas import (
    MyPostsResponse,
    PostCreate,
    PostCreatedResponse,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostSummary,
    PostUpdate,
    ProfileRef,
)
from bha_server.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from bha_server.model import Account, Post, PostAuthor, PostType, Profile
from bha_server.service.access import POST, can_edit, get_authorable_profile, get_live
from bha_server.service.author_service import AuthorService
from bha_server.utils.params import like_pattern

logger = logging.getLogger(__name__)

PRIMARY_AUTHOR_RULE = "Primary author must be a character, kinship, or organization that you own"

SORT_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
    "title": Post.title,
}


class PostService:
    """Service for writing, art, media and event posts"""

    def __init__(self, db: Session):
        self.db = db
        self.authors = AuthorService(db, POST)

    # ============ Helpers ============

    def summary_query(self):
        """Live posts with type name, owner username and primary author"""
        author_profile = aliased(Profile)
        return (
            self.db.query(
                Post,
                PostType.type_name,
                Account.username,
                author_profile.profile_id,
                author_profile.name,
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
            .filter(Post.is_deleted.is_(False))
        )

    @staticmethod
    def to_summary(row) -> PostSummary:
        post, type_name, username, author_id, author_name = row
        primary_author = None
        if author_id is not None:
            primary_author = ProfileRef(profile_id=author_id, name=author_name)
        return PostSummary(
            **PostResponse.model_validate(post).model_dump(),
            type_name=type_name,
            username=username,
            primary_author=primary_author,
        )

    # ============ Post Methods ============

    def create_post(self, account_id: int, post_data: PostCreate) -> PostCreatedResponse:
        """Create the post and its primary author credit in one transaction"""
        author = None
        if post_data.primary_author_profile_id is not None:
            author = get_authorable_profile(self.db, post_data.primary_author_profile_id, account_id)
            if author is None:
                raise InvalidRequestError(PRIMARY_AUTHOR_RULE)

        post = Post(
            account_id=account_id,
            **post_data.model_dump(exclude={"primary_author_profile_id"}),
        )
        try:
            self.db.add(post)
            self.db.flush()
            if author is not None:
                self.authors.add_primary(post.post_id, author)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        logger.info("Post %s created by account %s", post.post_id, account_id)

        return PostCreatedResponse(
            **PostResponse.model_validate(post).model_dump(),
            primary_author=ProfileRef.model_validate(author) if author else None,
        )

    def list_own_posts(self, account_id: int, post_type_id: Optional[int] = None) -> MyPostsResponse:
        query = self.summary_query().filter(Post.account_id == account_id)
        if post_type_id is not None:
            query = query.filter(Post.post_type_id == post_type_id)
        rows = query.order_by(Post.created_at.desc(), Post.post_id.desc()).all()
        return MyPostsResponse(posts=[self.to_summary(row) for row in rows])

    def list_public(
        self,
        type_ids: List[int],
        search: Optional[str],
        sort_by: str,
        order: str,
        limit: int,
        offset: int,
    ) -> PostListResponse:
        query = self.summary_query().filter(Post.is_published.is_(True))
        if type_ids:
            query = query.filter(Post.post_type_id.in_(type_ids))
        if search:
            query = query.filter(Post.title.ilike(like_pattern(search), escape="\\"))

        total = query.count()
        column = SORT_COLUMNS[sort_by]
        if order == "asc":
            query = query.order_by(column.asc(), Post.post_id.asc())
        else:
            query = query.order_by(column.desc(), Post.post_id.desc())

        posts = [self.to_summary(row) for row in query.offset(offset).limit(limit).all()]
        return PostListResponse(posts=posts, total=total, has_more=offset + len(posts) < total)

    def get_post(self, post_id: int, viewer_id: Optional[int] = None) -> Optional[PostDetailResponse]:
        row = self.summary_query().filter(Post.post_id == post_id).first()
        if row is None:
            return None
        post = row[0]
        editable = can_edit(self.db, POST, post, viewer_id)
        if not post.is_published and not editable:
            return None

        return PostDetailResponse(
            **self.to_summary(row).model_dump(),
            authors=self.authors.list_authors(post_id),
            can_edit=editable,
            is_owner=viewer_id is not None and post.account_id == viewer_id,
        )

    def update_post(self, post_id: int, account_id: int, update_data: PostUpdate) -> PostResponse:
        update_dict = update_data.model_dump(exclude_unset=True)
        if not update_dict:
            raise InvalidRequestError("No fields to update")

        post = get_live(self.db, POST, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if not can_edit(self.db, POST, post, account_id):
            raise PermissionDeniedError("You do not have permission to edit this post")

        for key, value in update_dict.items():
            setattr(post, key, value)
        self.db.commit()
        self.db.refresh(post)
        return PostResponse.model_validate(post)

    def delete_post(self, post_id: int, account_id: int) -> bool:
        post = get_live(self.db, POST, post_id)
        if post is None or post.account_id != account_id:
            return False

        post.is_deleted = True
        self.db.commit()
        logger.info("Post %s deleted by account %s", post_id, account_id)
        return True
