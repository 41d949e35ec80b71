"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from remitdemo.web.contracts.identity import (
    LvAuthDeleteRequest,
    LvAuthFindRequest,
    LvAuthRegisterRequest,
)
from remitdemo.web.contracts.quotes import (
    CorridorQuoteRequest,
    CorridorQuoteResponse,
    EntityInfo,
    EntityListResponse,
    QuoteItem,
    QuoteRequest,
    QuoteResponse,
    RatesResponse,
)

__all__ = [
    # Quote contracts
    "QuoteRequest",
    "QuoteResponse",
    "QuoteItem",
    "CorridorQuoteRequest",
    "CorridorQuoteResponse",
    "EntityInfo",
    "EntityListResponse",
    "RatesResponse",
    # Identity contracts
    "LvAuthRegisterRequest",
    "LvAuthFindRequest",
    "LvAuthDeleteRequest",
]
