"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .images import get_app_settings, get_image_service

__all__ = [
    "get_app_settings",
    "get_db_session",
    "get_image_service",
]
