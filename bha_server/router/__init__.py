# -*- coding: utf-8 -*-
# @file __init__.py
# @brief API router package
# @author sailing-innocent
# @date 2025-04-21

from bha_server.router.archive import router as archive_router
from bha_server.router.auth import router as auth_router
from bha_server.router.collections import router as collections_router
from bha_server.router.comments import router as comments_router
from bha_server.router.delegation import make_author_router, make_editor_router
from bha_server.router.lookups import router as lookups_router
from bha_server.router.posts import router as posts_router
from bha_server.router.profiles import router as profiles_router
from bha_server.router.uploads import router as uploads_router
from bha_server.router.users import router as users_router
from bha_server.service.access import COLLECTION, POST, PROFILE

profile_editors_router = make_editor_router(PROFILE, "/api/profiles")
post_editors_router = make_editor_router(POST, "/api/posts")
post_authors_router = make_author_router(POST, "/api/posts")
collection_editors_router = make_editor_router(COLLECTION, "/api/collections")
collection_authors_router = make_author_router(COLLECTION, "/api/collections")

__all__ = [
    "archive_router",
    "auth_router",
    "collections_router",
    "comments_router",
    "lookups_router",
    "posts_router",
    "profiles_router",
    "uploads_router",
    "users_router",
    "profile_editors_router",
    "post_editors_router",
    "post_authors_router",
    "collection_editors_router",
    "collection_authors_router",
]
