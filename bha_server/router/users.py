# -*- coding: utf-8 -*-
# @file users.py
# @brief API routes for the caller's own and delegated content
# @author sailing-innocent
# @date 2025-04-21

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id
from bha_server.data.schemas import MyCollectionsPage, MyPostsPage, MyProfilesPage
from bha_server.db import g_db_func
from bha_server.service.dashboard_service import FILTERS, DashboardService
from bha_server.utils.params import parse_choice, parse_cursor, parse_limit

router = APIRouter(prefix="/api/users/me", tags=["users"])


def get_dashboard_service(db: Session = Depends(g_db_func)):
    return DashboardService(db)


@router.get("/profiles", response_model=MyProfilesPage)
def my_profiles(
    filter: Optional[str] = None,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    account_id: int = Depends(get_current_account_id),
    service: DashboardService = Depends(get_dashboard_service),
):
    return service.my_profiles(
        account_id, parse_choice(filter, FILTERS, "all"), parse_cursor(cursor), parse_limit(limit, default=20)
    )


@router.get("/posts", response_model=MyPostsPage)
def my_posts(
    filter: Optional[str] = None,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    account_id: int = Depends(get_current_account_id),
    service: DashboardService = Depends(get_dashboard_service),
):
    return service.my_posts(
        account_id, parse_choice(filter, FILTERS, "all"), parse_cursor(cursor), parse_limit(limit, default=20)
    )


@router.get("/collections", response_model=MyCollectionsPage)
def my_collections(
    filter: Optional[str] = None,
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    account_id: int = Depends(get_current_account_id),
    service: DashboardService = Depends(get_dashboard_service),
):
    return service.my_collections(
        account_id, parse_choice(filter, FILTERS, "all"), parse_cursor(cursor), parse_limit(limit, default=20)
    )
