"""Domain models for image assets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class ImageAsset:
    id: int
    name: str
    data: bytes
    content_type: str
    created_at: datetime

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class ImagePayload:
    """Bytes and metadata received for an ingest or replace."""

    name: str
    data: bytes
    content_type: str
