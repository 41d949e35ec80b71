"""Corridor quoting engine.

Prices a transfer for every provider on the sending side of the KR <-> UZ
corridor using the session's PricingContext. Bad input never raises:
it yields an empty result instead.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from remitdemo.pricing.context import PricingContext
from remitdemo.pricing.entities import (
    ALLOWED_CURRENCIES,
    ANCHOR_ENTITIES,
    HOME_CURRENCY,
    Currency,
    Entity,
    entities_for,
    get_entity,
    parse_country,
    parse_currency,
)
from remitdemo.pricing.fees import calc_fee
from remitdemo.pricing.fx import convert, mid_market_rate

logger = logging.getLogger(__name__)

CURRENCY_DECIMALS: dict[Currency, int] = {
    Currency.KRW: 0,
    Currency.UZS: 0,
    Currency.USD: 2,
}

# Largest quotable amount; bigger values would overflow Decimal precision
MAX_AMOUNT = Decimal("999999999999999")


@dataclass(frozen=True)
class Quote:
    """A priced transfer through one sender/recipient entity pair."""

    sender_entity: str
    recipient_entity: str
    amount: Decimal
    sender_currency: Currency
    fee: Decimal
    fee_currency: Currency
    effective_rate: Decimal
    recipient_gets: Decimal
    recipient_currency: Currency
    eta_minutes: int

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        data = asdict(self)
        for key in ("sender_currency", "fee_currency", "recipient_currency"):
            data[key] = data[key].value
        return data


def _quantize(value: Decimal, currency: Currency) -> Decimal:
    exp = Decimal(1).scaleb(-CURRENCY_DECIMALS[currency])
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def parse_amount(value) -> Decimal:
    """Parse user input like "2,000,000" into a Decimal.

    Anything that is not a finite number, or whose magnitude exceeds
    MAX_AMOUNT, parses as 0.
    """
    if value is None:
        return Decimal("0")

    text = str(value).replace(",", "").strip()
    if not text:
        return Decimal("0")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return Decimal("0")

    if not amount.is_finite():
        return Decimal("0")

    if abs(amount) > MAX_AMOUNT:
        logger.debug(f"Amount {text} exceeds {MAX_AMOUNT}, treating as unquotable")
        return Decimal("0")

    return amount


def _resolve_recipient_currency(recipient: Entity, requested) -> Optional[Currency]:
    if requested is None:
        return HOME_CURRENCY[recipient.country]
    currency = parse_currency(requested)
    if currency not in ALLOWED_CURRENCIES[recipient.country]:
        return None
    return currency


def _price(
    amount: Decimal,
    sender: Entity,
    recipient: Entity,
    sender_currency: Currency,
    recipient_currency: Currency,
    context: PricingContext,
) -> Optional[Quote]:
    model = context.fee_model(sender.id)
    if model is None:
        logger.debug(f"No fee model for {sender.id}, skipping")
        return None

    fee = calc_fee(convert(amount, sender_currency, model.currency), model)
    if model.currency is not sender_currency:
        fee = _quantize(convert(fee, model.currency, sender_currency), sender_currency)

    margin = context.fx_margin(sender.id)
    effective_rate = mid_market_rate(sender_currency, recipient_currency) * (Decimal("1") - margin)
    recipient_gets = max(Decimal("0"), (amount - fee) * effective_rate)

    return Quote(
        sender_entity=sender.id,
        recipient_entity=recipient.id,
        amount=amount,
        sender_currency=sender_currency,
        fee=fee,
        fee_currency=sender_currency,
        effective_rate=effective_rate,
        recipient_gets=recipient_gets.quantize(Decimal("1"), rounding=ROUND_HALF_UP),
        recipient_currency=recipient_currency,
        eta_minutes=max(sender.eta_minutes, recipient.eta_minutes),
    )


def sort_quotes(quotes: list[Quote]) -> list[Quote]:
    """Cheapest fee first; equal fees ordered by best payout."""
    return sorted(quotes, key=lambda q: (q.fee, -q.recipient_gets))


def quote(
    amount,
    sender_country,
    sender_currency,
    context: PricingContext,
    recipient_currency=None,
) -> list[Quote]:
    """Quote a transfer through every sending-side entity.

    Each entity in the sender's country is priced against the fixed anchor
    entity of the opposite country.

    Args:
        amount: Amount in sender currency (number or user text)
        sender_country: "KR" or "UZ"
        sender_currency: Currency the sender pays in
        context: Session pricing parameters
        recipient_currency: Payout currency (default: recipient's home currency)

    Returns:
        Quotes ordered by fee ascending, payout descending
    """
    amount = parse_amount(amount)
    if amount <= 0:
        return []

    country = parse_country(sender_country)
    currency = parse_currency(sender_currency)
    if country is None or currency not in ALLOWED_CURRENCIES[country]:
        logger.debug(f"Unsupported sender {sender_country}/{sender_currency}")
        return []

    anchor = get_entity(ANCHOR_ENTITIES[country.opposite])
    payout_currency = _resolve_recipient_currency(anchor, recipient_currency)
    if payout_currency is None:
        return []

    quotes = []
    for sender in entities_for(country):
        priced = _price(amount, sender, anchor, currency, payout_currency, context)
        if priced is not None:
            quotes.append(priced)

    return sort_quotes(quotes)


def quote_corridor(
    amount,
    sender_entity_id: str,
    recipient_entity_id: str,
    sender_currency,
    context: PricingContext,
    recipient_currency=None,
) -> Optional[Quote]:
    """Quote one explicit sender -> recipient corridor.

    Returns None for unknown entities, same-country pairs, unsupported
    currencies, non-positive amounts or entities without a fee model.
    """
    amount = parse_amount(amount)
    if amount <= 0:
        return None

    sender = get_entity(sender_entity_id)
    recipient = get_entity(recipient_entity_id)
    if sender is None or recipient is None or sender.country is recipient.country:
        return None

    currency = parse_currency(sender_currency)
    if currency not in ALLOWED_CURRENCIES[sender.country]:
        return None

    payout_currency = _resolve_recipient_currency(recipient, recipient_currency)
    if payout_currency is None:
        return None

    return _price(amount, sender, recipient, currency, payout_currency, context)
