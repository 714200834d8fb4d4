"""Repository protocol for image asset persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import ImageAsset


class ImageRepository(Protocol):
    async def create(
        self,
        *,
        name: str,
        data: bytes,
        content_type: str,
        created_at: datetime,
    ) -> ImageAsset:
        ...

    async def list_all(self) -> Sequence[ImageAsset]:
        ...

    async def get_by_id(self, image_id: int) -> ImageAsset | None:
        ...

    async def update(
        self,
        image_id: int,
        *,
        name: str,
        data: bytes,
        content_type: str,
    ) -> ImageAsset | None:
        ...

    async def delete(self, image_id: int) -> bool:
        ...
