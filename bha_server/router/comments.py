# -*- coding: utf-8 -*-
# @file comments.py
# @brief API routes for comments on posts
# @author sailing-innocent
# @date 2025-04-21

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id, get_optional_account_id
from bha_server.data.schemas import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
    MessageResponse,
)
from bha_server.db import g_db_func
from bha_server.service.comment_service import CommentService
from bha_server.utils.params import parse_id

router = APIRouter(prefix="/api/posts/{post_id}/comments", tags=["comments"])


def get_comment_service(db: Session = Depends(g_db_func)):
    return CommentService(db)


@router.get("", response_model=CommentListResponse)
def list_comments(
    post_id: str,
    viewer_id: Optional[int] = Depends(get_optional_account_id),
    service: CommentService = Depends(get_comment_service),
):
    comments = service.list_comments(parse_id(post_id, "post"), viewer_id)
    return CommentListResponse(comments=comments)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    post_id: str,
    comment: CommentCreate,
    account_id: int = Depends(get_current_account_id),
    service: CommentService = Depends(get_comment_service),
):
    return service.create_comment(parse_id(post_id, "post"), account_id, comment)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    post_id: str,
    comment_id: str,
    update_data: CommentUpdate,
    account_id: int = Depends(get_current_account_id),
    service: CommentService = Depends(get_comment_service),
):
    return service.update_comment(
        parse_id(post_id, "post"), parse_id(comment_id, "comment"), account_id, update_data
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    post_id: str,
    comment_id: str,
    account_id: int = Depends(get_current_account_id),
    service: CommentService = Depends(get_comment_service),
):
    service.delete_comment(parse_id(post_id, "post"), parse_id(comment_id, "comment"), account_id)
    return MessageResponse(message="Comment deleted successfully")
