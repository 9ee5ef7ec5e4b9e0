# -*- coding: utf-8 -*-
# @file schemas.py
# @brief Pydantic request and response models
# @author sailing-innocent
# @date 2025-04-21

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_PASSWORD_BYTES = 72


def _trimmed(value: Optional[str], field: str, max_length: int) -> str:
    if value is None:
        raise ValueError(f"{field} is required")
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty")
    if len(value) > max_length:
        raise ValueError(f"{field} must be at most {max_length} characters")
    return value


def _not_null(value: Any, field: str) -> Any:
    # only runs for values the client sent; omitted fields stay unset
    if value is None:
        raise ValueError(f"{field} cannot be null")
    return value


# ============ Base Response Models ============


class MessageResponse(BaseModel):
    message: str


class PagedResponse(BaseModel):
    """Offset pagination envelope; serialized with `hasMore`"""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    has_more: bool = Field(default=False, alias="hasMore")


class ProfileRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: int
    name: str


# ============ Account Schemas ============


class SignupRequest(BaseModel):
    email: str
    username: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = _trimmed(v, "email", 255).lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("email is not a valid address")
        return v

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        v = _trimmed(v, "username", 50)
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("password must be at least 8 characters")
        # bcrypt only accepts up to 72 bytes
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    user: str
    password: str

    @field_validator("user")
    @classmethod
    def check_user(cls, v: str) -> str:
        return _trimmed(v, "user", 255)


class TokenResponse(BaseModel):
    token: str


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account_id: int
    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class AccountUpdate(BaseModel):
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: Optional[str]) -> str:
        v = _trimmed(v, "username", 50)
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v


# ============ Type Schemas ============


class TypeEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type_id: int
    type_name: str


class CollectionTypeEntry(TypeEntry):
    allowed_post_types: Optional[List[int]] = None


class TypesResponse(BaseModel):
    profile_types: List[TypeEntry]
    post_types: List[TypeEntry]
    collection_types: List[CollectionTypeEntry]


# ============ Editor / Author Schemas ============


class EditorAdd(BaseModel):
    username: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return _trimmed(v, "username", 50)


class EditorResponse(BaseModel):
    editor_id: int
    account_id: int
    username: str
    invited_by_account_id: Optional[int] = None
    invited_by_username: Optional[str] = None
    created_at: datetime


class EditorListResponse(BaseModel):
    editors: List[EditorResponse]


class AuthorAdd(BaseModel):
    profile_id: int


class AuthorResponse(BaseModel):
    author_id: int
    profile_id: int
    profile_name: str
    is_primary: bool


# ============ Profile Schemas ============


class ProfileCreate(BaseModel):
    profile_type_id: int = Field(ge=1, le=5)
    name: str
    details: Any = None
    parent_profile_id: Optional[int] = None
    is_published: bool = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _trimmed(v, "name", 100)


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    details: Any = None
    is_published: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> str:
        return _trimmed(v, "name", 100)

    @field_validator("is_published")
    @classmethod
    def check_is_published(cls, v: Optional[bool]) -> bool:
        return _not_null(v, "is_published")


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: int
    account_id: int
    profile_type_id: int
    parent_profile_id: Optional[int] = None
    name: str
    details: Any = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class ProfileSummary(ProfileResponse):
    type_name: str
    username: str


class ProfileDetailResponse(ProfileSummary):
    parent: Optional[ProfileRef] = None
    can_edit: bool = False
    is_owner: bool = False


class ProfileListResponse(PagedResponse):
    profiles: List[ProfileSummary]


# ============ Post Schemas ============


class PostCreate(BaseModel):
    post_type_id: int = Field(ge=1, le=4)
    title: str
    content: Any = None
    primary_author_profile_id: Optional[int] = None
    is_published: bool = True

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return _trimmed(v, "title", 200)


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Any = None
    is_published: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: Optional[str]) -> str:
        return _trimmed(v, "title", 200)

    @field_validator("is_published")
    @classmethod
    def check_is_published(cls, v: Optional[bool]) -> bool:
        return _not_null(v, "is_published")


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    post_id: int
    account_id: int
    post_type_id: int
    title: str
    content: Any = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class PostCreatedResponse(PostResponse):
    primary_author: Optional[ProfileRef] = None


class PostSummary(PostCreatedResponse):
    type_name: str
    username: str


class PostDetailResponse(PostSummary):
    authors: List[AuthorResponse] = []
    can_edit: bool = False
    is_owner: bool = False


class PostListResponse(PagedResponse):
    posts: List[PostSummary]


class MyPostsResponse(BaseModel):
    posts: List[PostSummary]


# ============ Comment Schemas ============


class CommentCreate(BaseModel):
    content: str
    profile_id: Optional[int] = None
    parent_comment_id: Optional[int] = None

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _trimmed(v, "content", 10000)


class CommentUpdate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _trimmed(v, "content", 10000)


class CommentResponse(BaseModel):
    comment_id: int
    post_id: int
    account_id: int
    username: str
    profile_id: Optional[int] = None
    profile_name: Optional[str] = None
    parent_comment_id: Optional[int] = None
    content: Optional[str] = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime


class CommentListResponse(BaseModel):
    comments: List[CommentResponse]


# ============ Collection Schemas ============


class CollectionCreate(BaseModel):
    collection_type_id: int = Field(ge=1, le=5)
    title: str
    description: Optional[str] = None
    content: Any = None
    primary_author_profile_id: Optional[int] = None
    is_published: bool = True

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return _trimmed(v, "title", 200)


class CollectionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Any = None
    is_published: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: Optional[str]) -> str:
        return _trimmed(v, "title", 200)

    @field_validator("is_published")
    @classmethod
    def check_is_published(cls, v: Optional[bool]) -> bool:
        return _not_null(v, "is_published")


class CollectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    collection_id: int
    account_id: int
    collection_type_id: int
    title: str
    description: Optional[str] = None
    content: Any = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class CollectionCreatedResponse(CollectionResponse):
    primary_author: Optional[ProfileRef] = None


class CollectionSummary(CollectionCreatedResponse):
    type_name: str
    username: str
    post_count: int = 0


class CollectionPostEntry(BaseModel):
    collection_post_id: int
    post_id: int
    sort_order: int
    title: str
    post_type_id: int
    type_name: str


class CollectionDetailResponse(CollectionSummary):
    authors: List[AuthorResponse] = []
    posts: List[CollectionPostEntry] = []
    allowed_post_types: Optional[List[int]] = None
    can_edit: bool = False
    is_owner: bool = False


class CollectionListResponse(PagedResponse):
    collections: List[CollectionSummary]


class MyCollectionsResponse(BaseModel):
    collections: List[CollectionSummary]


class CollectionPostAdd(BaseModel):
    post_id: int


class CollectionPostResponse(BaseModel):
    collection_post_id: int
    post_id: int
    sort_order: int


class ReorderRequest(BaseModel):
    post_ids: List[int] = Field(min_length=1)


# ============ Archive Schemas ============


class ArchiveQuery(BaseModel):
    """Query string of the public archive; strictly validated"""

    model_config = ConfigDict(populate_by_name=True)

    content_type: Literal["all", "profiles", "posts"] = Field(default="all", alias="contentType")
    profile_types: Optional[str] = Field(default=None, alias="profileTypes")
    post_types: Optional[str] = Field(default=None, alias="postTypes")
    search: Optional[str] = Field(default=None, max_length=100)
    sort_by: Literal["created_at", "updated_at", "name"] = Field(default="created_at", alias="sortBy")
    order: Literal["asc", "desc"] = "desc"
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ArchiveItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    content_category: str  # profile | post
    type_id: int
    type_name: str
    name: str
    thumbnail: Optional[str] = None
    preview: str = ""
    author_name: Optional[str] = None
    username: str
    created_at: datetime
    updated_at: datetime


class ArchiveResponse(PagedResponse):
    items: List[ArchiveItem]


# ============ Dashboard Schemas ============


class OwnedProfile(ProfileSummary):
    is_owner: bool


class OwnedPost(PostSummary):
    is_owner: bool


class OwnedCollection(CollectionSummary):
    is_owner: bool


class MyProfilesPage(BaseModel):
    profiles: List[OwnedProfile]
    next_cursor: Optional[int] = None


class MyPostsPage(BaseModel):
    posts: List[OwnedPost]
    next_cursor: Optional[int] = None


class MyCollectionsPage(BaseModel):
    collections: List[OwnedCollection]
    next_cursor: Optional[int] = None


# ============ Upload Schemas ============


class UploadedFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    original_name: str = Field(alias="originalName")
    size: int
    mimetype: str
    url: str


class UploadResponse(BaseModel):
    message: str
    files: List[UploadedFile]


class AvatarResponse(BaseModel):
    message: str
    avatar_url: str
