"""HTTP controllers for web API endpoints."""

from remitdemo.web.controllers.identity import router as identity_router
from remitdemo.web.controllers.lvauth import router as lvauth_router
from remitdemo.web.controllers.quotes import router as quotes_router

__all__ = [
    "quotes_router",
    "identity_router",
    "lvauth_router",
]
