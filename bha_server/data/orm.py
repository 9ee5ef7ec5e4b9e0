# -*- coding: utf-8 -*-
# @file orm.py
# @brief The ORM Base Class
# @author sailing-innocent
# @date 2025-04-21
# @version 1.0
# ---------------------------------

from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# JSONB on PostgreSQL, plain JSON elsewhere (sqlite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Base class for ORM
class ORMBase(DeclarativeBase):
    pass
