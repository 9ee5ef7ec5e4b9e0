# -*- coding: utf-8 -*-
# @file __init__.py
# @brief ORM models package
# @author sailing-innocent
# @date 2025-04-21

from bha_server.model.account import Account
from bha_server.model.lookup import ProfileType, PostType, CollectionType
from bha_server.model.profile import Profile, ProfileEditor
from bha_server.model.post import Post, PostAuthor, PostEditor
from bha_server.model.collection import (
    Collection,
    CollectionAuthor,
    CollectionEditor,
    CollectionPost,
)
from bha_server.model.comment import Comment

__all__ = [
    "Account",
    "ProfileType",
    "PostType",
    "CollectionType",
    "Profile",
    "ProfileEditor",
    "Post",
    "PostAuthor",
    "PostEditor",
    "Collection",
    "CollectionAuthor",
    "CollectionEditor",
    "CollectionPost",
    "Comment",
]
