# -*- coding: utf-8 -*-
# @file collection_service.py
# @brief Service layer for typed collections of posts
# @author sailing-innocent
# @date 2025-11-08

import logging
from typing import List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, aliased

from bha_server.data.schemas import (
    CollectionCreate,
    CollectionCreatedResponse,
    CollectionDetailResponse,
    CollectionListResponse,
    CollectionPostEntry,
    CollectionPostResponse,
    CollectionResponse,
    CollectionSummary,
    CollectionUpdate,
    MyCollectionsResponse,
    ProfileRef,
)
from bha_server.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from bha_server.model import (
    Account,
    Collection,
    CollectionAuthor,
    CollectionPost,
    CollectionType,
    Post,
    PostType,
    Profile,
)
from bha_server.service.access import COLLECTION, can_edit, get_authorable_profile, get_live
from bha_server.service.author_service import AuthorService
from bha_server.utils.params import like_pattern

logger = logging.getLogger(__name__)

PRIMARY_AUTHOR_RULE = "Primary author must be a character, kinship, or organization that you own"
NO_PERMISSION = "You do not have permission to modify this collection"

SORT_COLUMNS = {
    "created_at": Collection.created_at,
    "updated_at": Collection.updated_at,
    "title": Collection.title,
}


class CollectionService:
    """Service for collections, chronicles, albums, galleries and event series"""

    def __init__(self, db: Session):
        self.db = db
        self.authors = AuthorService(db, COLLECTION)

    # ============ Helpers ============

    def summary_query(self):
        author_profile = aliased(Profile)
        post_count = (
            select(func.count(CollectionPost.collection_post_id))
            .join(Post, Post.post_id == CollectionPost.post_id)
            .where(
                CollectionPost.collection_id == Collection.collection_id,
                CollectionPost.is_deleted.is_(False),
                Post.is_deleted.is_(False),
            )
            .correlate(Collection)
            .scalar_subquery()
        )
        return (
            self.db.query(
                Collection,
                CollectionType.type_name,
                Account.username,
                author_profile.profile_id,
                author_profile.name,
                post_count,
            )
            .join(CollectionType, CollectionType.type_id == Collection.collection_type_id)
            .join(Account, Account.account_id == Collection.account_id)
            .outerjoin(
                CollectionAuthor,
                and_(
                    CollectionAuthor.collection_id == Collection.collection_id,
                    CollectionAuthor.is_primary.is_(True),
                    CollectionAuthor.is_deleted.is_(False),
                ),
            )
            .outerjoin(author_profile, author_profile.profile_id == CollectionAuthor.profile_id)
            .filter(Collection.is_deleted.is_(False))
        )

    @staticmethod
    def to_summary(row) -> CollectionSummary:
        collection, type_name, username, author_id, author_name, post_count = row
        primary_author = None
        if author_id is not None:
            primary_author = ProfileRef(profile_id=author_id, name=author_name)
        return CollectionSummary(
            **CollectionResponse.model_validate(collection).model_dump(),
            type_name=type_name,
            username=username,
            primary_author=primary_author,
            post_count=post_count or 0,
        )

    def _require_editable(self, collection_id: int, account_id: int) -> Collection:
        collection = get_live(self.db, COLLECTION, collection_id)
        if collection is None:
            raise NotFoundError("Collection not found")
        if not can_edit(self.db, COLLECTION, collection, account_id):
            raise PermissionDeniedError(NO_PERMISSION)
        return collection

    def _entries(self, collection_id: int) -> List[CollectionPostEntry]:
        rows = (
            self.db.query(CollectionPost, Post.title, Post.post_type_id, PostType.type_name)
            .join(Post, Post.post_id == CollectionPost.post_id)
            .join(PostType, PostType.type_id == Post.post_type_id)
            .filter(
                CollectionPost.collection_id == collection_id,
                CollectionPost.is_deleted.is_(False),
                Post.is_deleted.is_(False),
            )
            .order_by(CollectionPost.sort_order.asc(), CollectionPost.collection_post_id.asc())
            .all()
        )
        return [
            CollectionPostEntry(
                collection_post_id=entry.collection_post_id,
                post_id=entry.post_id,
                sort_order=entry.sort_order,
                title=title,
                post_type_id=post_type_id,
                type_name=type_name,
            )
            for entry, title, post_type_id, type_name in rows
        ]

    # ============ Collection Methods ============

    def create_collection(
        self, account_id: int, collection_data: CollectionCreate
    ) -> CollectionCreatedResponse:
        author = None
        if collection_data.primary_author_profile_id is not None:
            author = get_authorable_profile(
                self.db, collection_data.primary_author_profile_id, account_id
            )
            if author is None:
                raise InvalidRequestError(PRIMARY_AUTHOR_RULE)

        collection = Collection(
            account_id=account_id,
            **collection_data.model_dump(exclude={"primary_author_profile_id"}),
        )
        try:
            self.db.add(collection)
            self.db.flush()
            if author is not None:
                self.authors.add_primary(collection.collection_id, author)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(collection)
        logger.info("Collection %s created by account %s", collection.collection_id, account_id)

        return CollectionCreatedResponse(
            **CollectionResponse.model_validate(collection).model_dump(),
            primary_author=ProfileRef.model_validate(author) if author else None,
        )

    def list_own_collections(
        self, account_id: int, collection_type_id: Optional[int] = None
    ) -> MyCollectionsResponse:
        query = self.summary_query().filter(Collection.account_id == account_id)
        if collection_type_id is not None:
            query = query.filter(Collection.collection_type_id == collection_type_id)
        rows = query.order_by(Collection.created_at.desc(), Collection.collection_id.desc()).all()
        return MyCollectionsResponse(collections=[self.to_summary(row) for row in rows])

    def list_public(
        self,
        type_ids: List[int],
        search: Optional[str],
        sort_by: str,
        order: str,
        limit: int,
        offset: int,
    ) -> CollectionListResponse:
        query = self.summary_query().filter(Collection.is_published.is_(True))
        if type_ids:
            query = query.filter(Collection.collection_type_id.in_(type_ids))
        if search:
            query = query.filter(Collection.title.ilike(like_pattern(search), escape="\\"))

        total = query.count()
        column = SORT_COLUMNS[sort_by]
        if order == "asc":
            query = query.order_by(column.asc(), Collection.collection_id.asc())
        else:
            query = query.order_by(column.desc(), Collection.collection_id.desc())

        collections = [self.to_summary(row) for row in query.offset(offset).limit(limit).all()]
        return CollectionListResponse(
            collections=collections,
            total=total,
            has_more=offset + len(collections) < total,
        )

    def get_collection(
        self, collection_id: int, viewer_id: Optional[int] = None
    ) -> Optional[CollectionDetailResponse]:
        row = self.summary_query().filter(Collection.collection_id == collection_id).first()
        if row is None:
            return None
        collection = row[0]
        editable = can_edit(self.db, COLLECTION, collection, viewer_id)
        if not collection.is_published and not editable:
            return None

        return CollectionDetailResponse(
            **self.to_summary(row).model_dump(),
            authors=self.authors.list_authors(collection_id),
            posts=self._entries(collection_id),
            allowed_post_types=collection.collection_type.allowed_post_types,
            can_edit=editable,
            is_owner=viewer_id is not None and collection.account_id == viewer_id,
        )

    def update_collection(
        self, collection_id: int, account_id: int, update_data: CollectionUpdate
    ) -> CollectionResponse:
        update_dict = update_data.model_dump(exclude_unset=True)
        if not update_dict:
            raise InvalidRequestError("No fields to update")

        collection = get_live(self.db, COLLECTION, collection_id)
        if collection is None:
            raise NotFoundError("Collection not found")
        if not can_edit(self.db, COLLECTION, collection, account_id):
            raise PermissionDeniedError("You do not have permission to edit this collection")

        for key, value in update_dict.items():
            setattr(collection, key, value)
        self.db.commit()
        self.db.refresh(collection)
        return CollectionResponse.model_validate(collection)

    def delete_collection(self, collection_id: int, account_id: int) -> bool:
        collection = get_live(self.db, COLLECTION, collection_id)
        if collection is None or collection.account_id != account_id:
            return False

        collection.is_deleted = True
        self.db.commit()
        logger.info("Collection %s deleted by account %s", collection_id, account_id)
        return True

    # ============ Collection Post Methods ============

    def add_post(self, collection_id: int, account_id: int, post_id: int) -> CollectionPostResponse:
        """Append a post, enforcing the collection type's allowed post types"""
        collection = self._require_editable(collection_id, account_id)

        post = (
            self.db.query(Post)
            .filter(Post.post_id == post_id, Post.is_deleted.is_(False))
            .first()
        )
        if post is None:
            raise InvalidRequestError("Post not found")

        collection_type = collection.collection_type
        if not collection_type.accepts(post.post_type_id):
            raise InvalidRequestError(
                f"{collection_type.type_name} collections only accept specific post types. "
                f"{post.post_type.type_name} posts are not allowed."
            )

        entry = (
            self.db.query(CollectionPost)
            .filter(
                CollectionPost.collection_id == collection_id,
                CollectionPost.post_id == post_id,
            )
            .first()
        )
        if entry is not None and not entry.is_deleted:
            raise ConflictError("This post is already in the collection")

        max_order = (
            self.db.query(func.max(CollectionPost.sort_order))
            .filter(
                CollectionPost.collection_id == collection_id,
                CollectionPost.is_deleted.is_(False),
            )
            .scalar()
        )
        next_order = (max_order if max_order is not None else -1) + 1

        if entry is None:
            entry = CollectionPost(
                collection_id=collection_id, post_id=post_id, sort_order=next_order
            )
            self.db.add(entry)
        else:
            entry.is_deleted = False
            entry.sort_order = next_order
        self.db.commit()
        self.db.refresh(entry)
        return CollectionPostResponse(
            collection_post_id=entry.collection_post_id,
            post_id=entry.post_id,
            sort_order=entry.sort_order,
        )

    def remove_post(self, collection_id: int, account_id: int, post_id: int) -> None:
        self._require_editable(collection_id, account_id)
        entry = (
            self.db.query(CollectionPost)
            .filter(
                CollectionPost.collection_id == collection_id,
                CollectionPost.post_id == post_id,
                CollectionPost.is_deleted.is_(False),
            )
            .first()
        )
        if entry is None:
            raise NotFoundError("Post not found in collection")

        entry.is_deleted = True
        self.db.commit()

    def reorder_posts(
        self, collection_id: int, account_id: int, post_ids: List[int]
    ) -> List[CollectionPostEntry]:
        """Set sort_order to each post's index in `post_ids`, all or nothing"""
        self._require_editable(collection_id, account_id)
        if len(set(post_ids)) != len(post_ids):
            raise InvalidRequestError("post_ids must not contain duplicates")

        entries = {
            entry.post_id: entry
            for entry in self.db.query(CollectionPost).filter(
                CollectionPost.collection_id == collection_id,
                CollectionPost.post_id.in_(post_ids),
                CollectionPost.is_deleted.is_(False),
            )
        }
        missing = [post_id for post_id in post_ids if post_id not in entries]
        if missing:
            raise InvalidRequestError(
                f"Posts not in collection: {', '.join(str(post_id) for post_id in missing)}"
            )

        try:
            for index, post_id in enumerate(post_ids):
                entries[post_id].sort_order = index
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self._entries(collection_id)
