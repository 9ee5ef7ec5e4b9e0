# -*- coding: utf-8 -*-
# @file collection.py
# @brief ORM models for collections of posts
# @author sailing-innocent
# @date 2025-11-08

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bha_server.data.orm import ORMBase, JSONType, utcnow


class Collection(ORMBase):
    """Typed, ordered grouping of posts (chronicle, album, gallery, ...)"""

    __tablename__ = "collections"

    collection_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    collection_type_id = Column(Integer, ForeignKey("collection_types.type_id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    content = Column(JSONType)
    is_published = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    account = relationship("Account")
    collection_type = relationship("CollectionType")

    __table_args__ = (Index("ix_collections_account", "account_id"),)


class CollectionAuthor(ORMBase):
    __tablename__ = "collection_authors"

    author_id = Column(Integer, primary_key=True, autoincrement=True)
    collection_id = Column(Integer, ForeignKey("collections.collection_id"), nullable=False)
    profile_id = Column(Integer, ForeignKey("profiles.profile_id"), nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    profile = relationship("Profile")

    __table_args__ = (
        UniqueConstraint("collection_id", "profile_id", name="uq_collection_author"),
    )


class CollectionEditor(ORMBase):
    __tablename__ = "collection_editors"

    editor_id = Column(Integer, primary_key=True, autoincrement=True)
    collection_id = Column(Integer, ForeignKey("collections.collection_id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    invited_by_account_id = Column(Integer, ForeignKey("accounts.account_id"))
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("collection_id", "account_id", name="uq_collection_editor"),
    )


class CollectionPost(ORMBase):
    """Membership of a post in a collection"""

    __tablename__ = "collection_posts"

    collection_post_id = Column(Integer, primary_key=True, autoincrement=True)
    collection_id = Column(Integer, ForeignKey("collections.collection_id"), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    post = relationship("Post")

    __table_args__ = (
        UniqueConstraint("collection_id", "post_id", name="uq_collection_post"),
    )
