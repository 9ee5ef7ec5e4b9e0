# -*- coding: utf-8 -*-
# @file db.py
# @brief Database engine singleton and session dependency
# @author sailing-innocent
# @date 2025-04-21

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from bha_server import config
from bha_server.data.lookups import seed_lookups
from bha_server.data.orm import ORMBase

# import all ORM models so create_all sees every table
import bha_server.model  # noqa: F401

__all__ = ["Database", "g_db_func"]

logger = logging.getLogger(__name__)


class Database:
    __instance = None

    @staticmethod
    def get_instance() -> "Database":
        if Database.__instance is None:
            Database()
        return Database.__instance

    def __init__(self, uri: Optional[str] = None):
        if Database.__instance is not None:
            raise Exception("This class is a singleton!")
        Database.__instance = self

        self.__uri = uri or config.database_uri()
        logger.info("Connecting to %s", self.__uri.split("@")[-1])
        connect_args = {}
        if self.__uri.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.__engine = create_engine(self.__uri, connect_args=connect_args)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.__engine
        )
        self.create_all()

    def create_all(self):
        ORMBase.metadata.create_all(bind=self.__engine)
        db = self.SessionLocal()
        try:
            seed_lookups(db)
        finally:
            db.close()

    def get_db(self) -> Generator[Session, None, None]:
        if self.__engine is None:
            raise Exception("Database engine is not initialized")
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def __str__(self):
        return "database at " + str(self.__uri)


def g_db_func() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session from the shared Database"""
    yield from Database.get_instance().get_db()

