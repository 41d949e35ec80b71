"""Mid-market FX rates for the corridor currencies.

All cross rates derive from one table of units per USD, so every pair is
reciprocal: 1 USD = 1400 KRW = 12600 UZS, hence 1 KRW = 9 UZS.
"""

import logging
from decimal import Decimal

from remitdemo.pricing.entities import Currency, parse_currency

logger = logging.getLogger(__name__)

UNITS_PER_USD: dict[Currency, Decimal] = {
    Currency.USD: Decimal("1"),
    Currency.KRW: Decimal("1400"),
    Currency.UZS: Decimal("12600"),
}


def convert(amount: Decimal, from_ccy, to_ccy) -> Decimal:
    """Convert an amount between two supported currencies at mid-market.

    Unsupported currencies are a silent no-op: the input is returned
    unchanged and a warning is logged.
    """
    amount = Decimal(amount)
    src = parse_currency(from_ccy)
    dst = parse_currency(to_ccy)

    if src is None or dst is None:
        logger.warning(f"Unsupported conversion {from_ccy} -> {to_ccy}, returning amount unchanged")
        return amount

    if src is dst:
        return amount

    return amount * UNITS_PER_USD[dst] / UNITS_PER_USD[src]


def mid_market_rate(from_ccy, to_ccy) -> Decimal:
    """Reference (no-margin) rate: units of to_ccy per unit of from_ccy."""
    return convert(Decimal("1"), from_ccy, to_ccy)


def rate_table() -> dict[str, dict[str, Decimal]]:
    """All pairwise mid-market rates, keyed by currency code."""
    return {
        src.value: {dst.value: mid_market_rate(src, dst) for dst in Currency if dst is not src}
        for src in Currency
    }
