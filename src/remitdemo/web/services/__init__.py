"""Business logic services for the web layer."""

from remitdemo.web.services.quote_service import QuoteService

__all__ = ["QuoteService"]
