from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from image_assets import __version__
from image_assets.core.config import Settings, get_settings
from image_assets.core.logging import configure_logging
from image_assets.infrastructure.database import dispose_engine, get_engine, init_db
from image_assets.interfaces.http import create_api_router
from image_assets.schemas import HealthResponse


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.database.create_all:
            await init_db(settings)
        else:
            get_engine(settings)
        yield
        await dispose_engine()

    app = FastAPI(
        title=settings.project_name,
        description="Stores named image files and serves them back byte for byte",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app


app = create_app()
