# -*- coding: utf-8 -*-
# @file profile.py
# @brief ORM models for profiles and profile editors
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
    text,
)
from sqlalchemy.orm import relationship

from bha_server.data.orm import ORMBase, JSONType, utcnow


class Profile(ORMBase):
    __tablename__ = "profiles"

    profile_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    profile_type_id = Column(Integer, ForeignKey("profile_types.type_id"), nullable=False)
    parent_profile_id = Column(Integer, ForeignKey("profiles.profile_id"))
    name = Column(String(100), nullable=False)
    details = Column(JSONType)
    is_published = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    account = relationship("Account")
    profile_type = relationship("ProfileType")
    parent = relationship("Profile", remote_side=[profile_id])

    # Name uniqueness only counts live rows
    __table_args__ = (
        Index(
            "uq_profiles_character_name",
            "name",
            unique=True,
            postgresql_where=text("profile_type_id = 1 AND is_deleted = false"),
            sqlite_where=text("profile_type_id = 1 AND is_deleted = 0"),
        ),
        Index(
            "uq_profiles_account_type_name",
            "account_id",
            "profile_type_id",
            "name",
            unique=True,
            postgresql_where=text("profile_type_id <> 1 AND is_deleted = false"),
            sqlite_where=text("profile_type_id <> 1 AND is_deleted = 0"),
        ),
        Index("ix_profiles_account", "account_id"),
    )


class ProfileEditor(ORMBase):
    __tablename__ = "profile_editors"

    editor_id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Integer, ForeignKey("profiles.profile_id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    invited_by_account_id = Column(Integer, ForeignKey("accounts.account_id"))
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("profile_id", "account_id", name="uq_profile_editor"),
    )
