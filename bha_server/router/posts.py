# -*- coding: utf-8 -*-
# @file posts.py
# @brief API routes for posts
# @author sailing-innocent
# @date 2025-04-21

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id, get_optional_account_id
from bha_server.data.lookups import POST_TYPE_IDS
from bha_server.data.schemas import (
    MessageResponse,
    MyPostsResponse,
    PostCreate,
    PostCreatedResponse,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from bha_server.db import g_db_func
from bha_server.service.post_service import SORT_COLUMNS, PostService
from bha_server.utils.params import (
    normalize_search,
    parse_choice,
    parse_id,
    parse_id_list,
    parse_limit,
    parse_offset,
)

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_post_service(db: Session = Depends(g_db_func)):
    return PostService(db)


@router.post("", response_model=PostCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post: PostCreate,
    account_id: int = Depends(get_current_account_id),
    service: PostService = Depends(get_post_service),
):
    """Create a post, optionally crediting a primary author profile"""
    return service.create_post(account_id, post)


@router.get("", response_model=MyPostsResponse)
def list_my_posts(
    type: Optional[str] = None,
    account_id: int = Depends(get_current_account_id),
    service: PostService = Depends(get_post_service),
):
    """List the caller's own posts"""
    type_ids = parse_id_list(type, POST_TYPE_IDS)
    return service.list_own_posts(account_id, type_ids[0] if type_ids else None)


@router.get("/public", response_model=PostListResponse)
def list_public_posts(
    post_type_id: Optional[str] = None,
    search: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: PostService = Depends(get_post_service),
):
    return service.list_public(
        type_ids=parse_id_list(post_type_id, POST_TYPE_IDS),
        search=normalize_search(search),
        sort_by=parse_choice(sortBy, SORT_COLUMNS, "created_at"),
        order=parse_choice(order, ("asc", "desc"), "desc"),
        limit=parse_limit(limit, default=50),
        offset=parse_offset(offset),
    )


@router.get("/{post_id}", response_model=PostDetailResponse)
def get_post(
    post_id: str,
    viewer_id: Optional[int] = Depends(get_optional_account_id),
    service: PostService = Depends(get_post_service),
):
    """Get post by ID with its author credits"""
    post = service.get_post(parse_id(post_id, "post"), viewer_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    update_data: PostUpdate,
    account_id: int = Depends(get_current_account_id),
    service: PostService = Depends(get_post_service),
):
    return service.update_post(parse_id(post_id, "post"), account_id, update_data)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    account_id: int = Depends(get_current_account_id),
    service: PostService = Depends(get_post_service),
):
    if not service.delete_post(parse_id(post_id, "post"), account_id):
        raise HTTPException(status_code=404, detail="Post not found or not authorized")
    return MessageResponse(message="Post deleted successfully")
