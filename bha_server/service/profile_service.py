# -*- coding: utf-8 -*-
# @file profile_service.py
# @brief Service layer for typed profiles
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bha_server.data.lookups import CHARACTER, CHILD_PROFILE_TYPES
from bha_server.data.schemas import (
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileRef,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
)
from bha_server.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from bha_server.model import Account, Profile, ProfileType
from bha_server.service.access import PROFILE, can_edit, get_live
from bha_server.utils.params import like_pattern

logger = logging.getLogger(__name__)

NAME_TAKEN = "There is already a profile with this name"

SORT_COLUMNS = {
    "created_at": Profile.created_at,
    "updated_at": Profile.updated_at,
    "name": Profile.name,
}


class ProfileService:
    """Service for characters, items, kinships, organizations and locations"""

    def __init__(self, db: Session):
        self.db = db

    # ============ Helpers ============

    def summary_query(self):
        return (
            self.db.query(Profile, ProfileType.type_name, Account.username)
            .join(ProfileType, ProfileType.type_id == Profile.profile_type_id)
            .join(Account, Account.account_id == Profile.account_id)
            .filter(Profile.is_deleted.is_(False))
        )

    @staticmethod
    def to_summary(row) -> ProfileSummary:
        profile, type_name, username = row
        return ProfileSummary(
            **ProfileResponse.model_validate(profile).model_dump(),
            type_name=type_name,
            username=username,
        )

    def name_taken(
        self,
        account_id: int,
        profile_type_id: int,
        name: str,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Characters are unique site-wide; other types per account and type"""
        query = self.db.query(Profile.profile_id).filter(
            Profile.name == name,
            Profile.profile_type_id == profile_type_id,
            Profile.is_deleted.is_(False),
        )
        if profile_type_id != CHARACTER:
            query = query.filter(Profile.account_id == account_id)
        if exclude_id is not None:
            query = query.filter(Profile.profile_id != exclude_id)
        return query.first() is not None

    def _check_parent(self, data: ProfileCreate, account_id: int) -> None:
        if data.profile_type_id not in CHILD_PROFILE_TYPES:
            if data.parent_profile_id is not None:
                raise InvalidRequestError("Characters and locations cannot have a parent profile")
            return

        if data.parent_profile_id is None:
            raise InvalidRequestError("Items, kinships and organizations must belong to a character")
        parent = get_live(self.db, PROFILE, data.parent_profile_id)
        if parent is None or parent.profile_type_id != CHARACTER:
            raise InvalidRequestError("Parent profile must be an existing character")
        if parent.account_id != account_id:
            raise PermissionDeniedError("Parent profile must be a character that you own")

    # ============ Profile Methods ============

    def create_profile(self, account_id: int, profile_data: ProfileCreate) -> ProfileResponse:
        self._check_parent(profile_data, account_id)
        if self.name_taken(account_id, profile_data.profile_type_id, profile_data.name):
            raise ConflictError(NAME_TAKEN)

        profile = Profile(account_id=account_id, **profile_data.model_dump())
        self.db.add(profile)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(NAME_TAKEN)
        self.db.refresh(profile)
        logger.info("Profile %s created by account %s", profile.profile_id, account_id)
        return ProfileResponse.model_validate(profile)

    def list_public(
        self,
        type_ids: List[int],
        search: Optional[str],
        sort_by: str,
        order: str,
        limit: int,
        offset: int,
    ) -> ProfileListResponse:
        query = self.summary_query().filter(Profile.is_published.is_(True))
        if type_ids:
            query = query.filter(Profile.profile_type_id.in_(type_ids))
        if search:
            query = query.filter(Profile.name.ilike(like_pattern(search), escape="\\"))

        total = query.count()
        column = SORT_COLUMNS[sort_by]
        if order == "asc":
            query = query.order_by(column.asc(), Profile.profile_id.asc())
        else:
            query = query.order_by(column.desc(), Profile.profile_id.desc())

        profiles = [self.to_summary(row) for row in query.offset(offset).limit(limit).all()]
        return ProfileListResponse(
            profiles=profiles,
            total=total,
            has_more=offset + len(profiles) < total,
        )

    def get_profile(
        self, profile_id: int, viewer_id: Optional[int] = None
    ) -> Optional[ProfileDetailResponse]:
        """Drafts are only visible to accounts that can edit them"""
        row = self.summary_query().filter(Profile.profile_id == profile_id).first()
        if row is None:
            return None
        profile = row[0]
        editable = can_edit(self.db, PROFILE, profile, viewer_id)
        if not profile.is_published and not editable:
            return None

        parent = None
        if profile.parent_profile_id is not None:
            parent_row = get_live(self.db, PROFILE, profile.parent_profile_id)
            if parent_row is not None:
                parent = ProfileRef.model_validate(parent_row)

        return ProfileDetailResponse(
            **self.to_summary(row).model_dump(),
            parent=parent,
            can_edit=editable,
            is_owner=viewer_id is not None and profile.account_id == viewer_id,
        )

    def update_profile(
        self, profile_id: int, account_id: int, update_data: ProfileUpdate
    ) -> ProfileResponse:
        update_dict = update_data.model_dump(exclude_unset=True)
        if not update_dict:
            raise InvalidRequestError("No fields to update")

        profile = get_live(self.db, PROFILE, profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        if not can_edit(self.db, PROFILE, profile, account_id):
            raise PermissionDeniedError("You do not have permission to edit this profile")

        name = update_dict.get("name")
        renaming = name is not None and name != profile.name
        if renaming and self.name_taken(
            profile.account_id, profile.profile_type_id, name, exclude_id=profile_id
        ):
            raise ConflictError(NAME_TAKEN)

        for key, value in update_dict.items():
            setattr(profile, key, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # a concurrent insert can still win the partial unique index
            if renaming:
                raise ConflictError(NAME_TAKEN)
            raise
        self.db.refresh(profile)
        return ProfileResponse.model_validate(profile)

    def delete_profile(self, profile_id: int, account_id: int) -> bool:
        """Soft delete; only the owner may delete"""
        profile = get_live(self.db, PROFILE, profile_id)
        if profile is None or profile.account_id != account_id:
            return False

        profile.is_deleted = True
        self.db.commit()
        logger.info("Profile %s deleted by account %s", profile_id, account_id)
        return True
