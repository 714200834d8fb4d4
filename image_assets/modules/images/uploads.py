"""Reading multipart uploads into image payloads."""

from __future__ import annotations

import os

from fastapi import UploadFile

from .exceptions import ImageValidationError
from .models import ImagePayload

FILE_REQUIRED = "file required"
FILE_TOO_LARGE = "file too large"
DEFAULT_IMAGE_NAME = "image"


async def read_upload(
    upload: UploadFile | None,
    *,
    max_bytes: int,
    chunk_size: int,
    default_content_type: str,
) -> ImagePayload:
    """Buffer ``upload`` into memory, stopping as soon as it exceeds ``max_bytes``."""
    if upload is None:
        raise ImageValidationError(FILE_REQUIRED)

    buffer = bytearray()
    try:
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            buffer.extend(chunk)
            if len(buffer) > max_bytes:
                raise ImageValidationError(FILE_TOO_LARGE)
    finally:
        await upload.close()

    if not buffer:
        raise ImageValidationError(FILE_REQUIRED)

    return ImagePayload(
        name=sanitize_filename(upload.filename) or DEFAULT_IMAGE_NAME,
        data=bytes(buffer),
        content_type=(upload.content_type or "").strip() or default_content_type,
    )


def sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    # Clients on Windows may send a full path.
    name = os.path.basename(filename.replace("\\", "/"))
    return name.replace("\0", "").strip()
