"""Quote request and response contracts."""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    """Request for quotes across all sending-side entities."""

    amount: Union[Decimal, str] = Field(..., description="Amount in sender currency (e.g. 2,000,000)")
    sender_country: str = Field(..., description="Sender country code (KR or UZ)")
    sender_currency: str = Field(..., description="Sender currency (KRW, UZS, USD)")
    recipient_currency: Optional[str] = Field(
        None, description="Payout currency (default: recipient country's currency)"
    )


class CorridorQuoteRequest(BaseModel):
    """Request for a quote through one explicit entity pair."""

    amount: Union[Decimal, str] = Field(..., description="Amount in sender currency")
    sender_entity: str = Field(..., description="Sending entity id (e.g. paynet-bank)")
    recipient_entity: str = Field(..., description="Receiving entity id (e.g. kookmin)")
    sender_currency: str = Field(..., description="Sender currency")
    recipient_currency: Optional[str] = Field(None, description="Payout currency")


class QuoteItem(BaseModel):
    """One priced corridor."""

    sender_entity: str
    recipient_entity: str
    amount: Decimal
    sender_currency: str
    fee: Decimal = Field(..., description="Fee in sender currency")
    fee_currency: str
    effective_rate: Decimal = Field(..., description="Mid-market rate less the entity's FX margin")
    recipient_gets: Decimal
    recipient_currency: str
    eta_minutes: int


class QuoteResponse(BaseModel):
    """Quotes ordered by fee ascending, payout descending."""

    success: bool
    quotes: list[QuoteItem] = Field(default_factory=list)
    best_quote: Optional[QuoteItem] = None
    error: Optional[str] = None


class CorridorQuoteResponse(BaseModel):
    """Quote for one corridor, or an explanation why none exists."""

    success: bool
    quote: Optional[QuoteItem] = None
    error: Optional[str] = None


class EntityInfo(BaseModel):
    id: str
    name: str
    category: str
    country: str
    eta_minutes: int
    priced: bool = Field(..., description="Whether a fee model exists for this entity")


class EntityListResponse(BaseModel):
    success: bool = True
    entities: list[EntityInfo] = Field(default_factory=list)


class RatesResponse(BaseModel):
    """Mid-market rates: rates[from][to] = units of `to` per unit of `from`."""

    success: bool = True
    rates: dict[str, dict[str, Decimal]]
