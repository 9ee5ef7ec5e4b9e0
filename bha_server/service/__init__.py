# -*- coding: utf-8 -*-
# @file __init__.py
# @brief Service layer package
# @author sailing-innocent
# @date 2025-04-21

from bha_server.service.account_service import AccountService
from bha_server.service.archive_service import ArchiveService
from bha_server.service.author_service import AuthorService
from bha_server.service.collection_service import CollectionService
from bha_server.service.comment_service import CommentService
from bha_server.service.dashboard_service import DashboardService
from bha_server.service.editor_service import EditorService
from bha_server.service.lookup_service import LookupService
from bha_server.service.post_service import PostService
from bha_server.service.profile_service import ProfileService
from bha_server.service.upload_service import UploadService

__all__ = [
    "AccountService",
    "ArchiveService",
    "AuthorService",
    "CollectionService",
    "CommentService",
    "DashboardService",
    "EditorService",
    "LookupService",
    "PostService",
    "ProfileService",
    "UploadService",
]
