# -*- coding: utf-8 -*-
# @file profiles.py
# @brief API routes for profiles
# @author sailing-innocent
# @date 2025-04-21

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id, get_optional_account_id
from bha_server.data.lookups import PROFILE_TYPE_IDS
from bha_server.data.schemas import (
    MessageResponse,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from bha_server.db import g_db_func
from bha_server.service.profile_service import SORT_COLUMNS, ProfileService
from bha_server.utils.params import (
    normalize_search,
    parse_choice,
    parse_id,
    parse_id_list,
    parse_limit,
    parse_offset,
)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


def get_profile_service(db: Session = Depends(g_db_func)):
    return ProfileService(db)


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_profile(
    profile: ProfileCreate,
    account_id: int = Depends(get_current_account_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Create a new profile"""
    return service.create_profile(account_id, profile)


@router.get("/public", response_model=ProfileListResponse)
def list_public_profiles(
    profile_type_id: Optional[str] = None,
    search: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: ProfileService = Depends(get_profile_service),
):
    """Browse published profiles; bad paging values fall back to defaults"""
    return service.list_public(
        type_ids=parse_id_list(profile_type_id, PROFILE_TYPE_IDS),
        search=normalize_search(search),
        sort_by=parse_choice(sortBy, SORT_COLUMNS, "created_at"),
        order=parse_choice(order, ("asc", "desc"), "desc"),
        limit=parse_limit(limit, default=50),
        offset=parse_offset(offset),
    )


@router.get("/{profile_id}", response_model=ProfileDetailResponse)
def get_profile(
    profile_id: str,
    viewer_id: Optional[int] = Depends(get_optional_account_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Get profile by ID"""
    profile = service.get_profile(parse_id(profile_id, "profile"), viewer_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/{profile_id}", response_model=ProfileResponse)
def update_profile(
    profile_id: str,
    update_data: ProfileUpdate,
    account_id: int = Depends(get_current_account_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Update profile (owner or editor)"""
    return service.update_profile(parse_id(profile_id, "profile"), account_id, update_data)


@router.delete("/{profile_id}", response_model=MessageResponse)
def delete_profile(
    profile_id: str,
    account_id: int = Depends(get_current_account_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete profile (owner only)"""
    if not service.delete_profile(parse_id(profile_id, "profile"), account_id):
        raise HTTPException(status_code=404, detail="Profile not found or not authorized")
    return MessageResponse(message="Profile deleted successfully")
