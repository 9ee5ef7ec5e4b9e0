# -*- coding: utf-8 -*-
# @file comment.py
# @brief ORM model for post comments
# @author sailing-innocent
# @date 2025-04-21

from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from bha_server.data.orm import ORMBase, utcnow


class Comment(ORMBase):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.post_id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    profile_id = Column(Integer, ForeignKey("profiles.profile_id"))  # speaking character
    parent_comment_id = Column(Integer, ForeignKey("comments.comment_id"))
    content = Column(Text, nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    account = relationship("Account")
    profile = relationship("Profile")

    __table_args__ = (Index("ix_comments_post", "post_id"),)
