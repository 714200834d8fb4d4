"""Image asset store service."""

__version__ = "0.1.0"
