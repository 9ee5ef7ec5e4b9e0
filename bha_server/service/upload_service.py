# -*- coding: utf-8 -*-
# @file upload_service.py
# @brief Image and avatar storage on the local filesystem
# @author sailing-innocent
# @date 2025-04-21

import io
import logging
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from bha_server import config
from bha_server.data.schemas import UploadedFile
from bha_server.errors import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
MAX_IMAGE_BYTES = 10 * 1024 * 1024
MAX_IMAGES_PER_REQUEST = 10
MAX_AVATAR_BYTES = 5 * 1024 * 1024
AVATAR_SIZE = (256, 256)

IMAGES_SUBDIR = "images"
AVATARS_SUBDIR = "avatars"
URL_PREFIX = "/uploads"


class UploadService:
    """Writes uploads under UPLOADS_DIR; files are served back from /uploads"""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else config.uploads_dir()

    def _dir(self, subdir: str) -> Path:
        path = self.root / subdir
        path.mkdir(parents=True, exist_ok=True)
        return path

    def check_batch(self, count: int) -> None:
        if count == 0:
            raise InvalidRequestError("No files uploaded")
        if count > MAX_IMAGES_PER_REQUEST:
            raise InvalidRequestError(f"At most {MAX_IMAGES_PER_REQUEST} images per upload")

    def save_images(self, files: List[Tuple[str, str, bytes]]) -> List[UploadedFile]:
        """`files` holds (original name, content type, data) triples"""
        self.check_batch(len(files))

        # validate everything before writing anything
        for original_name, content_type, data in files:
            if content_type not in IMAGE_TYPES:
                raise InvalidRequestError(
                    f"Invalid file type for {original_name}. Only JPEG, PNG, GIF and WebP images are allowed."
                )
            if len(data) > MAX_IMAGE_BYTES:
                raise InvalidRequestError(f"{original_name} exceeds the 10MB size limit")

        target = self._dir(IMAGES_SUBDIR)
        saved = []
        for original_name, content_type, data in files:
            filename = f"{uuid.uuid4().hex}{IMAGE_TYPES[content_type]}"
            (target / filename).write_bytes(data)
            saved.append(
                UploadedFile(
                    filename=filename,
                    original_name=original_name,
                    size=len(data),
                    mimetype=content_type,
                    url=f"{URL_PREFIX}/{IMAGES_SUBDIR}/{filename}",
                )
            )
        logger.info("Stored %d uploaded image(s)", len(saved))
        return saved

    def delete_image(self, filename: str) -> None:
        if (
            not filename
            or filename != Path(filename).name
            or ".." in filename
            or "/" in filename
            or "\\" in filename
        ):
            raise InvalidRequestError("Invalid filename")

        images_dir = self._dir(IMAGES_SUBDIR).resolve()
        path = (images_dir / filename).resolve()
        if path.parent != images_dir:
            raise InvalidRequestError("Invalid filename")
        if not path.is_file():
            raise NotFoundError("File not found")
        path.unlink()

    def save_avatar(self, account_id: int, content_type: str, data: bytes) -> str:
        """Center-crop and resize to a square PNG; returns the public url"""
        if content_type not in IMAGE_TYPES:
            raise InvalidRequestError("Avatar must be a JPEG, PNG, GIF or WebP image")
        if len(data) > MAX_AVATAR_BYTES:
            raise InvalidRequestError("Avatar exceeds the 5MB size limit")

        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                avatar = ImageOps.fit(img.convert("RGBA"), AVATAR_SIZE, Image.Resampling.LANCZOS)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
            raise InvalidRequestError("Invalid image file")

        filename = f"{account_id}_{uuid.uuid4().hex}.png"
        avatar.save(self._dir(AVATARS_SUBDIR) / filename, format="PNG")
        return f"{URL_PREFIX}/{AVATARS_SUBDIR}/{filename}"
