"""Main entry point - runs the API server."""

import logging

import uvicorn

from lendlink.api.app import create_app
from lendlink.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point. uvicorn handles SIGINT/SIGTERM and runs the lifespan."""
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting LendLink...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
