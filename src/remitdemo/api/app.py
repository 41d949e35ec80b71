"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from remitdemo.config import get_settings
from remitdemo.identity.factory import get_identity_proxy, get_lv_auth_proxy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        f"Identity proxy: {get_identity_proxy().name}, LV Auth proxy: {get_lv_auth_proxy().name}"
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Remittance Demo API",
        description="UZ <-> KR corridor quoting with identity verification proxies",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from remitdemo.api.routes import health
    from remitdemo.web.controllers import identity_router, lvauth_router, quotes_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(quotes_router, prefix="/api")
    app.include_router(identity_router, prefix="/api")
    app.include_router(lvauth_router, prefix="/api")

    return app


# Default app instance
app = create_app()
