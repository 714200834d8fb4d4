"""Image service dependency providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from image_assets.core.config import Settings, get_settings
from image_assets.modules.images import ImageAssetService

from .database import get_db_session


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_image_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> ImageAssetService:
    return ImageAssetService.with_session(db, settings)


__all__ = [
    "get_app_settings",
    "get_image_service",
]
