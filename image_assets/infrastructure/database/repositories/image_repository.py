"""SQLAlchemy implementation for the image repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from image_assets.db.models import Image
from image_assets.modules.images.models import ImageAsset

_COLUMNS = (Image.id, Image.name, Image.data, Image.content_type, Image.created_at)


class SqlImageRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        name: str,
        data: bytes,
        content_type: str,
        created_at: datetime,
    ) -> ImageAsset:
        image = Image(
            name=name,
            data=data,
            content_type=content_type,
            created_at=created_at,
        )
        self.session.add(image)
        await self.session.flush()
        await self.session.refresh(image)
        return self._to_domain(image)

    async def list_all(self) -> Sequence[ImageAsset]:
        stmt = select(*_COLUMNS).order_by(Image.created_at.desc(), Image.id.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.all()]

    async def get_by_id(self, image_id: int) -> ImageAsset | None:
        stmt = select(*_COLUMNS).where(Image.id == image_id)
        result = await self.session.execute(stmt)
        row = result.first()
        return self._to_domain(row) if row else None

    async def update(
        self,
        image_id: int,
        *,
        name: str,
        data: bytes,
        content_type: str,
    ) -> ImageAsset | None:
        # Single UPDATE ... RETURNING: a row deleted concurrently yields nothing
        # rather than being written back.
        stmt = (
            update(Image)
            .where(Image.id == image_id)
            .values(name=name, data=data, content_type=content_type)
            .execution_options(synchronize_session=False)
            .returning(*_COLUMNS)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return self._to_domain(row) if row else None

    async def delete(self, image_id: int) -> bool:
        stmt = (
            delete(Image)
            .where(Image.id == image_id)
            .execution_options(synchronize_session=False)
            .returning(Image.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_domain(record: Any) -> ImageAsset:
        created_at = record.created_at
        # SQLite drops the offset; stored values are always UTC.
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return ImageAsset(
            id=record.id,
            name=record.name,
            data=bytes(record.data),
            content_type=record.content_type,
            created_at=created_at,
        )
