# -*- coding: utf-8 -*-
# @file lookups.py
# @brief API route listing profile, post and collection types
# @author sailing-innocent
# @date 2025-04-21

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bha_server.data.schemas import TypesResponse
from bha_server.db import g_db_func
from bha_server.service.lookup_service import LookupService

router = APIRouter(prefix="/api", tags=["types"])


def get_lookup_service(db: Session = Depends(g_db_func)):
    return LookupService(db)


@router.get("/types", response_model=TypesResponse)
def list_types(service: LookupService = Depends(get_lookup_service)):
    return service.list_types()
