# -*- coding: utf-8 -*-
# @file archive.py
# @brief API routes for the unified public archive
# @author sailing-innocent
# @date 2025-04-21

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from bha_server.data.schemas import ArchiveResponse
from bha_server.db import g_db_func
from bha_server.service.archive_service import ArchiveService, parse_archive_query

router = APIRouter(prefix="/api", tags=["archive"])


def get_archive_service(db: Session = Depends(g_db_func)):
    return ArchiveService(db)


@router.get("/archive/public", response_model=ArchiveResponse)
@router.get("/catalog/public", response_model=ArchiveResponse)
def list_archive(request: Request, service: ArchiveService = Depends(get_archive_service)):
    """Published profiles and posts in one list"""
    query = parse_archive_query(dict(request.query_params))
    return service.list_public(query)
