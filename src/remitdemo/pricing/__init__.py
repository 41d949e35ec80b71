"""Quoting engine for the Uzbekistan <-> South Korea corridor.

- entities: reference institutions, countries and currencies
- fx: mid-market conversion
- fees: fee models and fee computation
- context: per-session (optionally randomized) pricing parameters
- engine: quote generation
"""

from remitdemo.pricing.context import (
    PricingContext,
    initialize_pricing,
    load_or_initialize_pricing,
)
from remitdemo.pricing.engine import Quote, parse_amount, quote, quote_corridor
from remitdemo.pricing.entities import Country, Currency, Entity
from remitdemo.pricing.fees import FeeModel, calc_fee
from remitdemo.pricing.fx import convert, mid_market_rate

__all__ = [
    "Country",
    "Currency",
    "Entity",
    "FeeModel",
    "PricingContext",
    "Quote",
    "calc_fee",
    "convert",
    "initialize_pricing",
    "load_or_initialize_pricing",
    "mid_market_rate",
    "parse_amount",
    "quote",
    "quote_corridor",
]
