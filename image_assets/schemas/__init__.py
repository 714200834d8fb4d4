"""Pydantic schemas used across the project."""
import base64
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from image_assets.modules.images.models import ImageAsset


class ImageResponse(BaseModel):
    """Wire shape of an image asset; ``data`` is the payload in standard base64."""

    id: int
    name: str
    data: str
    content_type: str = Field(alias="contentType")
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, image: ImageAsset) -> "ImageResponse":
        return cls(
            id=image.id,
            name=image.name,
            data=base64.b64encode(image.data).decode("ascii"),
            content_type=image.content_type,
            created_at=image.created_at,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
