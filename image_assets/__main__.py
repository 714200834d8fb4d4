"""Run the service with uvicorn: ``python -m image_assets``."""

import uvicorn

from image_assets.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "image_assets.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
