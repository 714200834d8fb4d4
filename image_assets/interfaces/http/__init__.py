"""HTTP interface: routers and dependencies."""

from fastapi import APIRouter

from .routers import images


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(images.router, prefix="/images", tags=["images"])
    return router


__all__ = [
    "create_api_router",
]
