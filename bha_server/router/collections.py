# -*- coding: utf-8 -*-
# @file collections.py
# @brief API routes for collections and their post membership
# @author sailing-innocent
# @date 2025-11-08

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id, get_optional_account_id
from bha_server.data.lookups import COLLECTION_TYPE_IDS
from bha_server.data.schemas import (
    CollectionCreate,
    CollectionCreatedResponse,
    CollectionDetailResponse,
    CollectionListResponse,
    CollectionPostAdd,
    CollectionPostEntry,
    CollectionPostResponse,
    CollectionResponse,
    CollectionUpdate,
    MessageResponse,
    MyCollectionsResponse,
    ReorderRequest,
)
from bha_server.db import g_db_func
from bha_server.service.collection_service import SORT_COLUMNS, CollectionService
from bha_server.utils.params import (
    normalize_search,
    parse_choice,
    parse_id,
    parse_id_list,
    parse_limit,
    parse_offset,
)

router = APIRouter(prefix="/api/collections", tags=["collections"])


def get_collection_service(db: Session = Depends(g_db_func)):
    return CollectionService(db)


# ============ Collection Endpoints ============


@router.post("", response_model=CollectionCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    collection: CollectionCreate,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    """Create a new collection"""
    return service.create_collection(account_id, collection)


@router.get("", response_model=MyCollectionsResponse)
def list_my_collections(
    type: Optional[str] = None,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    type_ids = parse_id_list(type, COLLECTION_TYPE_IDS)
    return service.list_own_collections(account_id, type_ids[0] if type_ids else None)


@router.get("/public", response_model=CollectionListResponse)
def list_public_collections(
    collection_type_id: Optional[str] = None,
    search: Optional[str] = None,
    sortBy: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: CollectionService = Depends(get_collection_service),
):
    return service.list_public(
        type_ids=parse_id_list(collection_type_id, COLLECTION_TYPE_IDS),
        search=normalize_search(search),
        sort_by=parse_choice(sortBy, SORT_COLUMNS, "created_at"),
        order=parse_choice(order, ("asc", "desc"), "desc"),
        limit=parse_limit(limit, default=50),
        offset=parse_offset(offset),
    )


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
def get_collection(
    collection_id: str,
    viewer_id: Optional[int] = Depends(get_optional_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    """Get collection by ID with authors and ordered posts"""
    collection = service.get_collection(parse_id(collection_id, "collection"), viewer_id)
    if not collection:
        raise HTTPException(status_code=404, detail="Collection not found")
    return collection


@router.put("/{collection_id}", response_model=CollectionResponse)
def update_collection(
    collection_id: str,
    update_data: CollectionUpdate,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    return service.update_collection(parse_id(collection_id, "collection"), account_id, update_data)


@router.delete("/{collection_id}", response_model=MessageResponse)
def delete_collection(
    collection_id: str,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    if not service.delete_collection(parse_id(collection_id, "collection"), account_id):
        raise HTTPException(status_code=404, detail="Collection not found or not authorized")
    return MessageResponse(message="Collection deleted successfully")


# ============ Collection Post Endpoints ============


@router.post(
    "/{collection_id}/posts",
    response_model=CollectionPostResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_post(
    collection_id: str,
    body: CollectionPostAdd,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    """Append a post to the collection"""
    return service.add_post(parse_id(collection_id, "collection"), account_id, body.post_id)


@router.put("/{collection_id}/posts/reorder", response_model=List[CollectionPostEntry])
def reorder_posts(
    collection_id: str,
    body: ReorderRequest,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    """Rewrite the order of the collection's posts"""
    return service.reorder_posts(parse_id(collection_id, "collection"), account_id, body.post_ids)


@router.delete("/{collection_id}/posts/{post_id}", response_model=MessageResponse)
def remove_post(
    collection_id: str,
    post_id: str,
    account_id: int = Depends(get_current_account_id),
    service: CollectionService = Depends(get_collection_service),
):
    service.remove_post(parse_id(collection_id, "collection"), account_id, parse_id(post_id, "post"))
    return MessageResponse(message="Post removed from collection")
