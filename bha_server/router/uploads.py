# -*- coding: utf-8 -*-
# @file uploads.py
# @brief API routes for image and avatar uploads
# @author sailing-innocent
# @date 2025-04-21

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from bha_server.auth import get_current_account_id
from bha_server.data.schemas import AvatarResponse, MessageResponse, UploadResponse
from bha_server.db import g_db_func
from bha_server.errors import InvalidRequestError
from bha_server.service.account_service import AccountService
from bha_server.service.upload_service import (
    MAX_AVATAR_BYTES,
    MAX_IMAGE_BYTES,
    UploadService,
)

router = APIRouter(prefix="/api/uploads", tags=["uploads"])

CHUNK_SIZE = 1024 * 1024


async def read_limited(upload: UploadFile, max_bytes: int, too_large: str) -> bytes:
    """Read an upload in chunks, giving up as soon as it passes `max_bytes`"""
    chunks = []
    size = 0
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise InvalidRequestError(too_large)
        chunks.append(chunk)
    return b"".join(chunks)


def get_upload_service():
    return UploadService()


def get_account_service(db: Session = Depends(g_db_func)):
    return AccountService(db)


@router.post("/images", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_images(
    images: List[UploadFile] = File(...),
    account_id: int = Depends(get_current_account_id),
    service: UploadService = Depends(get_upload_service),
):
    """Store up to 10 images and return their public urls"""
    service.check_batch(len(images))
    files = []
    for upload in images:
        name = upload.filename or "image"
        data = await read_limited(upload, MAX_IMAGE_BYTES, f"{name} exceeds the 10MB size limit")
        files.append((name, upload.content_type or "", data))
    saved = service.save_images(files)
    return UploadResponse(message=f"{len(saved)} file(s) uploaded successfully", files=saved)


@router.delete("/images/{filename}", response_model=MessageResponse)
def delete_image(
    filename: str,
    account_id: int = Depends(get_current_account_id),
    service: UploadService = Depends(get_upload_service),
):
    service.delete_image(filename)
    return MessageResponse(message="File deleted successfully")


@router.post("/avatar", response_model=AvatarResponse)
async def upload_avatar(
    avatar: UploadFile = File(...),
    account_id: int = Depends(get_current_account_id),
    service: UploadService = Depends(get_upload_service),
    accounts: AccountService = Depends(get_account_service),
):
    """Resize and store the caller's avatar"""
    data = await read_limited(avatar, MAX_AVATAR_BYTES, "Avatar exceeds the 5MB size limit")
    avatar_url = service.save_avatar(account_id, avatar.content_type or "", data)
    accounts.set_avatar(account_id, avatar_url)
    return AvatarResponse(message="Avatar updated successfully", avatar_url=avatar_url)
