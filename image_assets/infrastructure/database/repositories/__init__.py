"""SQLAlchemy-backed repository implementations."""

from .image_repository import SqlImageRepository

__all__ = ["SqlImageRepository"]
