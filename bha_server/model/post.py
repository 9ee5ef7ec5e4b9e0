# -*- coding: utf-8 -*-
# @file post.py
# @brief ORM models for posts, their author credits and editors
# @author sailing-innocent
# @date 2025-04-21

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from bha_server.data.orm import ORMBase, JSONType, utcnow


class Post(ORMBase):
    __tablename__ = "posts"

    post_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    post_type_id = Column(Integer, ForeignKey("post_types.type_id"), nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(JSONType)
    is_published = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    account = relationship("Account")
    post_type = relationship("PostType")

    __table_args__ = (Index("ix_posts_account", "account_id"),)


class PostAuthor(ORMBase):
    """Profile credited on a post; exactly one live row per post may be primary"""

    __tablename__ = "post_authors"

    author_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False)
    profile_id = Column(Integer, ForeignKey("profiles.profile_id"), nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    profile = relationship("Profile")

    __table_args__ = (
        UniqueConstraint("post_id", "profile_id", name="uq_post_author"),
    )


class PostEditor(ORMBase):
    __tablename__ = "post_editors"

    editor_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    invited_by_account_id = Column(Integer, ForeignKey("accounts.account_id"))
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("post_id", "account_id", name="uq_post_editor"),
    )
