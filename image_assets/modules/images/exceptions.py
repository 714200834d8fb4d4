"""Image asset domain specific exceptions."""


class ImageAssetError(Exception):
    """Base class for image asset domain errors."""


class ImageValidationError(ImageAssetError):
    """Raised when an uploaded payload is missing, empty or out of bounds."""


class ImageNotFoundError(ImageAssetError):
    """Raised when no image exists for the requested id."""

    def __init__(self, image_id: int) -> None:
        super().__init__(f"image {image_id} not found")
        self.image_id = image_id


class ImageStoreError(ImageAssetError):
    """Raised when the database could not complete an operation."""
