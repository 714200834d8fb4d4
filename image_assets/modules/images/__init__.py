"""Image asset domain exports."""

from .exceptions import ImageAssetError, ImageNotFoundError, ImageStoreError, ImageValidationError
from .models import ImageAsset, ImagePayload
from .service import ImageAssetService

__all__ = [
    "ImageAsset",
    "ImageAssetError",
    "ImageAssetService",
    "ImageNotFoundError",
    "ImagePayload",
    "ImageStoreError",
    "ImageValidationError",
]
