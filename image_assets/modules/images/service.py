"""Image asset service: validation, persistence and lookup."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from image_assets.core.config import Settings, UploadSettings, get_settings
from image_assets.db.models import utcnow

from .exceptions import ImageNotFoundError, ImageStoreError, ImageValidationError
from .models import ImageAsset, ImagePayload
from .repository import ImageRepository
from .uploads import FILE_REQUIRED, FILE_TOO_LARGE, read_upload

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255
MAX_CONTENT_TYPE_LENGTH = 100


@dataclass(slots=True)
class ImageAssetService:
    """Runs every operation as one transaction on the request's session.

    Uploads are buffered before any statement is issued, so no database
    lock is held while the client is still sending bytes.
    """

    session: AsyncSession
    repository: ImageRepository
    uploads: UploadSettings

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "ImageAssetService":
        # Deferred: the SQL repository imports this package's models.
        from image_assets.infrastructure.database.repositories.image_repository import SqlImageRepository

        settings = settings or get_settings()
        return cls(session, SqlImageRepository(session), settings.uploads)

    async def store_upload(self, upload: UploadFile | None) -> ImageAsset:
        return await self.create_image(await self._read(upload))

    async def replace_upload(self, image_id: int, upload: UploadFile | None) -> ImageAsset:
        try:
            payload = await self._read(upload)
        except ImageValidationError:
            await self._ensure_exists(image_id)
            raise
        return await self.replace_image(image_id, payload)

    async def create_image(self, payload: ImagePayload) -> ImageAsset:
        self.validate_payload(payload)
        async with self._transaction("create image"):
            image = await self.repository.create(
                name=payload.name,
                data=payload.data,
                content_type=payload.content_type,
                created_at=utcnow(),
            )
        logger.info("Stored image %s (%s, %d bytes)", image.id, image.name, image.size_bytes)
        return image

    async def list_images(self) -> list[ImageAsset]:
        async with self._transaction("list images"):
            images = await self.repository.list_all()
        return list(images)

    async def get_image(self, image_id: int) -> ImageAsset:
        async with self._transaction("get image"):
            image = await self.repository.get_by_id(image_id)
        if image is None:
            logger.warning("Image %s not found", image_id)
            raise ImageNotFoundError(image_id)
        return image

    async def replace_image(self, image_id: int, payload: ImagePayload) -> ImageAsset:
        try:
            self.validate_payload(payload)
        except ImageValidationError:
            await self._ensure_exists(image_id)
            raise
        async with self._transaction("replace image"):
            image = await self.repository.update(
                image_id,
                name=payload.name,
                data=payload.data,
                content_type=payload.content_type,
            )
        if image is None:
            logger.warning("Cannot replace image %s: not found", image_id)
            raise ImageNotFoundError(image_id)
        logger.info("Replaced image %s (%s, %d bytes)", image.id, image.name, image.size_bytes)
        return image

    async def delete_image(self, image_id: int) -> None:
        async with self._transaction("delete image"):
            deleted = await self.repository.delete(image_id)
        if not deleted:
            logger.warning("Cannot delete image %s: not found", image_id)
            raise ImageNotFoundError(image_id)
        logger.info("Deleted image %s", image_id)

    def validate_payload(self, payload: ImagePayload) -> None:
        reason: str | None = None
        if not payload.data:
            reason = FILE_REQUIRED
        elif len(payload.data) > self.uploads.max_bytes:
            reason = FILE_TOO_LARGE
        elif not payload.name:
            reason = "file name required"
        elif len(payload.name) > MAX_NAME_LENGTH:
            reason = "file name too long"
        elif not payload.content_type:
            reason = "content type required"
        elif len(payload.content_type) > MAX_CONTENT_TYPE_LENGTH:
            reason = "content type too long"

        if reason is not None:
            logger.warning("Rejected image payload %r: %s", payload.name, reason)
            raise ImageValidationError(reason)

    async def _ensure_exists(self, image_id: int) -> None:
        """Report a missing id ahead of a payload problem."""
        await self.get_image(image_id)

    async def _read(self, upload: UploadFile | None) -> ImagePayload:
        try:
            return await read_upload(
                upload,
                max_bytes=self.uploads.max_bytes,
                chunk_size=self.uploads.chunk_size,
                default_content_type=self.uploads.default_content_type,
            )
        except ImageValidationError as exc:
            logger.warning("Rejected upload: %s", exc)
            raise

    @asynccontextmanager
    async def _transaction(self, action: str) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to %s", action)
            raise ImageStoreError(f"failed to {action}") from exc
