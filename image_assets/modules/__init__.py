"""Feature modules."""

from . import images

__all__ = ["images"]
