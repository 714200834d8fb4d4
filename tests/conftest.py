"""Pytest configuration and fixtures"""

import pytest
from httpx import ASGITransport, AsyncClient

from image_assets.core.config import Settings
from image_assets.infrastructure.database import dispose_engine, init_db
from image_assets.infrastructure.database.session import get_session_factory
from image_assets.main import create_app
from image_assets.modules.images import ImageAssetService, ImagePayload

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        environment="test",
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'images.db'}"},
    )


@pytest.fixture
async def database(settings):
    await init_db(settings)
    yield
    await dispose_engine()


@pytest.fixture
async def session(database):
    async with get_session_factory()() as session:
        yield session


@pytest.fixture
def service(session, settings) -> ImageAssetService:
    return ImageAssetService.with_session(session, settings)


@pytest.fixture
async def client(settings, database):
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def png_payload() -> ImagePayload:
    return ImagePayload(name="pixel.png", data=PNG_BYTES, content_type="image/png")


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
