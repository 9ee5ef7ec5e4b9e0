# -*- coding: utf-8 -*-
# @file lookup.py
# @brief ORM models for the fixed type tables
# @author sailing-innocent
# @date 2025-04-21

from sqlalchemy import Column, Integer, String

from bha_server.data.orm import ORMBase, JSONType


class ProfileType(ORMBase):
    __tablename__ = "profile_types"

    type_id = Column(Integer, primary_key=True, autoincrement=False)
    type_name = Column(String(50), nullable=False, unique=True)


class PostType(ORMBase):
    __tablename__ = "post_types"

    type_id = Column(Integer, primary_key=True, autoincrement=False)
    type_name = Column(String(50), nullable=False, unique=True)


class CollectionType(ORMBase):
    __tablename__ = "collection_types"

    type_id = Column(Integer, primary_key=True, autoincrement=False)
    type_name = Column(String(50), nullable=False, unique=True)
    allowed_post_types = Column(JSONType)  # list of post type ids, null = any

    def accepts(self, post_type_id: int) -> bool:
        return self.allowed_post_types is None or post_type_id in self.allowed_post_types
