"""Quote API endpoints.

Pricing parameters are tied to the caller's session cookie, so repeated
quotes within a session are stable.
"""

from fastapi import APIRouter, Request, Response

from remitdemo.config import get_settings
from remitdemo.sessions import SessionStore
from remitdemo.web.contracts.quotes import (
    CorridorQuoteRequest,
    CorridorQuoteResponse,
    EntityListResponse,
    QuoteRequest,
    QuoteResponse,
    RatesResponse,
)
from remitdemo.web.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["quotes"])

# Service instance
_quote_service = QuoteService()


def get_quote_service() -> QuoteService:
    return _quote_service


def _session(request: Request, response: Response) -> SessionStore:
    cookie_name = get_settings().session_cookie_name
    store = _quote_service.session(request.cookies.get(cookie_name))
    response.set_cookie(cookie_name, store.session_id, httponly=True, samesite="lax")
    return store


@router.post("", response_model=QuoteResponse)
async def get_quotes(body: QuoteRequest, request: Request, response: Response) -> QuoteResponse:
    """Quote a transfer through every sending-side entity.

    Returns an empty list (not an error) for non-positive or unparseable
    amounts and unsupported currencies.
    """
    return _quote_service.get_quotes(body, _session(request, response))


@router.post("/corridor", response_model=CorridorQuoteResponse)
async def get_corridor_quote(
    body: CorridorQuoteRequest, request: Request, response: Response
) -> CorridorQuoteResponse:
    """Quote one explicit sender -> recipient entity pair."""
    return _quote_service.get_corridor_quote(body, _session(request, response))


@router.get("/entities", response_model=EntityListResponse)
async def list_entities(request: Request, response: Response) -> EntityListResponse:
    """List corridor entities."""
    return _quote_service.list_entities(_session(request, response))


@router.get("/rates", response_model=RatesResponse)
async def get_rates() -> RatesResponse:
    """Mid-market rates for all supported currency pairs."""
    return _quote_service.get_rates()
