# -*- coding: utf-8 -*-
# @file comment_service.py
# @brief Threaded comments on posts, optionally spoken as a character
# @author sailing-innocent
# @date 2025-04-21

from typing import List, Optional

from sqlalchemy.orm import Session

from bha_server.data.lookups import CHARACTER
from bha_server.data.schemas import CommentCreate, CommentResponse, CommentUpdate
from bha_server.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from bha_server.model import Account, Comment, Profile
from bha_server.service.access import POST, can_edit, get_live


class CommentService:
    def __init__(self, db: Session):
        self.db = db

    def _require_post(self, post_id: int, viewer_id: Optional[int] = None):
        """Draft posts exist only for accounts that can edit them"""
        post = get_live(self.db, POST, post_id)
        if post is None or (not post.is_published and not can_edit(self.db, POST, post, viewer_id)):
            raise NotFoundError("Post not found")
        return post

    def _get_comment(self, post_id: int, comment_id: int) -> Comment:
        comment = (
            self.db.query(Comment)
            .filter(Comment.comment_id == comment_id, Comment.post_id == post_id)
            .first()
        )
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def _to_response(self, comment: Comment, username: str, profile_name: Optional[str]) -> CommentResponse:
        # deleted comments keep their place in the thread but lose their text
        return CommentResponse(
            comment_id=comment.comment_id,
            post_id=comment.post_id,
            account_id=comment.account_id,
            username=username,
            profile_id=comment.profile_id,
            profile_name=profile_name,
            parent_comment_id=comment.parent_comment_id,
            content=None if comment.is_deleted else comment.content,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    def _hydrate(self, comment: Comment) -> CommentResponse:
        profile_name = comment.profile.name if comment.profile is not None else None
        return self._to_response(comment, comment.account.username, profile_name)

    def list_comments(self, post_id: int, viewer_id: Optional[int] = None) -> List[CommentResponse]:
        self._require_post(post_id, viewer_id)
        rows = (
            self.db.query(Comment, Account.username, Profile.name)
            .join(Account, Account.account_id == Comment.account_id)
            .outerjoin(Profile, Profile.profile_id == Comment.profile_id)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.comment_id.asc())
            .all()
        )
        return [self._to_response(*row) for row in rows]

    def create_comment(self, post_id: int, account_id: int, data: CommentCreate) -> CommentResponse:
        self._require_post(post_id, account_id)

        if data.profile_id is not None:
            profile = (
                self.db.query(Profile)
                .filter(
                    Profile.profile_id == data.profile_id,
                    Profile.account_id == account_id,
                    Profile.profile_type_id == CHARACTER,
                    Profile.is_deleted.is_(False),
                )
                .first()
            )
            if profile is None:
                raise InvalidRequestError("Comments can only be made as a character that you own")

        if data.parent_comment_id is not None:
            parent = (
                self.db.query(Comment)
                .filter(
                    Comment.comment_id == data.parent_comment_id,
                    Comment.post_id == post_id,
                    Comment.is_deleted.is_(False),
                )
                .first()
            )
            if parent is None:
                raise InvalidRequestError("Parent comment not found on this post")

        comment = Comment(post_id=post_id, account_id=account_id, **data.model_dump())
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return self._hydrate(comment)

    def update_comment(
        self, post_id: int, comment_id: int, account_id: int, data: CommentUpdate
    ) -> CommentResponse:
        self._require_post(post_id, account_id)
        comment = self._get_comment(post_id, comment_id)
        if comment.account_id != account_id:
            raise PermissionDeniedError("You can only edit your own comments")
        if comment.is_deleted:
            raise InvalidRequestError("Cannot edit a deleted comment")

        comment.content = data.content
        self.db.commit()
        self.db.refresh(comment)
        return self._hydrate(comment)

    def delete_comment(self, post_id: int, comment_id: int, account_id: int) -> None:
        self._require_post(post_id, account_id)
        comment = self._get_comment(post_id, comment_id)
        if comment.account_id != account_id:
            raise PermissionDeniedError("You can only delete your own comments")
        if comment.is_deleted:
            raise InvalidRequestError("Comment is already deleted")

        comment.is_deleted = True
        self.db.commit()
