"""Quote service: session-aware wrapper around the quoting engine."""

import logging
from typing import Optional

from remitdemo.config import get_settings
from remitdemo.pricing.context import PricingContext, load_or_initialize_pricing
from remitdemo.pricing.engine import Quote, quote, quote_corridor
from remitdemo.pricing.entities import ENTITIES
from remitdemo.pricing.fx import rate_table
from remitdemo.sessions import SessionRegistry, SessionStore
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

logger = logging.getLogger(__name__)


def _to_item(q: Quote) -> QuoteItem:
    return QuoteItem(**q.to_dict())


class QuoteService:
    """Prices corridors with the pricing parameters of the caller's session."""

    def __init__(
        self,
        sessions: Optional[SessionRegistry] = None,
        jitter: Optional[bool] = None,
        seed: Optional[int] = None,
    ):
        settings = get_settings()
        self.sessions = sessions if sessions is not None else SessionRegistry(settings.max_sessions)
        self.jitter = settings.pricing_jitter if jitter is None else jitter
        self.seed = settings.pricing_seed if seed is None else seed

    def session(self, session_id: Optional[str]) -> SessionStore:
        """Get the store for a session id, starting a new session if unknown."""
        return self.sessions.get_or_create(session_id)

    def pricing_for(self, store: SessionStore) -> PricingContext:
        """Pricing parameters for a session, generated on first use."""
        return load_or_initialize_pricing(store, seed=self.seed, jitter=self.jitter)

    def get_quotes(self, request: QuoteRequest, store: SessionStore) -> QuoteResponse:
        """Quote every sending-side entity for the request.

        Args:
            request: Quote request parameters
            store: Caller's session store

        Returns:
            QuoteResponse; unquotable input yields an empty list
        """
        context = self.pricing_for(store)
        quotes = quote(
            request.amount,
            request.sender_country,
            request.sender_currency,
            context,
            recipient_currency=request.recipient_currency,
        )
        items = [_to_item(q) for q in quotes]

        logger.debug(
            f"Quoted {request.amount} {request.sender_currency} from {request.sender_country}: "
            f"{len(items)} quotes"
        )
        return QuoteResponse(
            success=True,
            quotes=items,
            best_quote=items[0] if items else None,
        )

    def get_corridor_quote(self, request: CorridorQuoteRequest, store: SessionStore) -> CorridorQuoteResponse:
        """Quote one sender/recipient entity pair."""
        context = self.pricing_for(store)
        result = quote_corridor(
            request.amount,
            request.sender_entity,
            request.recipient_entity,
            request.sender_currency,
            context,
            recipient_currency=request.recipient_currency,
        )

        if result is None:
            return CorridorQuoteResponse(
                success=False,
                error=f"No fee model for corridor {request.sender_entity}->{request.recipient_entity}",
            )

        return CorridorQuoteResponse(success=True, quote=_to_item(result))

    def list_entities(self, store: SessionStore) -> EntityListResponse:
        """Reference entities, flagged by whether the session prices them."""
        context = self.pricing_for(store)
        return EntityListResponse(
            entities=[
                EntityInfo(
                    id=e.id,
                    name=e.name,
                    category=e.category.value,
                    country=e.country.value,
                    eta_minutes=e.eta_minutes,
                    priced=context.fee_model(e.id) is not None,
                )
                for e in ENTITIES.values()
            ]
        )

    def get_rates(self) -> RatesResponse:
        return RatesResponse(rates=rate_table())
