# -*- coding: utf-8 -*-
# @file lookup_service.py
# @brief Read access to the type tables
# @author sailing-innocent
# @date 2025-04-21

from sqlalchemy.orm import Session

from bha_server.data.schemas import CollectionTypeEntry, TypeEntry, TypesResponse
from bha_server.model import CollectionType, PostType, ProfileType


class LookupService:
    def __init__(self, db: Session):
        self.db = db

    def list_types(self) -> TypesResponse:
        return TypesResponse(
            profile_types=[
                TypeEntry.model_validate(t)
                for t in self.db.query(ProfileType).order_by(ProfileType.type_id)
            ],
            post_types=[
                TypeEntry.model_validate(t)
                for t in self.db.query(PostType).order_by(PostType.type_id)
            ],
            collection_types=[
                CollectionTypeEntry.model_validate(t)
                for t in self.db.query(CollectionType).order_by(CollectionType.type_id)
            ],
        )
