# -*- coding: utf-8 -*-
# @file account.py
# @brief ORM model for user accounts
# @author sailing-innocent
# @date 2025-04-21

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from bha_server.data.orm import ORMBase, utcnow


class Account(ORMBase):
    __tablename__ = "accounts"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(50), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    avatar_url = Column(String(500))
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
