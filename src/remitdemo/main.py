"""Main entry point - runs the API server."""

import logging

import uvicorn

from remitdemo.api.app import create_app
from remitdemo.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Configure root logging for the process."""
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting remittance demo...")
    logger.info(f"Environment: {settings.environment}")

    app = create_app()
    config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )
    server = uvicorn.Server(config)
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    main()
