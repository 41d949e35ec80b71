"""Reference data: corridor entities, countries and currencies."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Country(str, Enum):
    """Corridor countries."""

    KR = "KR"
    UZ = "UZ"

    @property
    def opposite(self) -> "Country":
        """The other side of the KR <-> UZ corridor."""
        return Country.UZ if self is Country.KR else Country.KR


class Currency(str, Enum):
    """Supported currencies."""

    KRW = "KRW"
    UZS = "UZS"
    USD = "USD"


class Category(str, Enum):
    """Kind of institution behind an entity."""

    BANK = "bank"
    FINTECH = "fintech"


@dataclass(frozen=True)
class Entity:
    """A sending or receiving institution in the corridor."""

    id: str
    name: str
    category: Category
    country: Country
    eta_minutes: int


UZ_ENTITIES: tuple[Entity, ...] = (
    Entity("paynet-bank", "Paynet Bank (mock)", Category.BANK, Country.UZ, 30),
    Entity("agrobank", "Agrobank (mock)", Category.BANK, Country.UZ, 60),
    Entity("qsystems-bank", "QSystems Bank (mock)", Category.BANK, Country.UZ, 45),
)

KR_ENTITIES: tuple[Entity, ...] = (
    Entity("kookmin", "KB Kookmin (mock)", Category.BANK, Country.KR, 30),
    Entity("shinhan", "Shinhan (mock)", Category.BANK, Country.KR, 45),
    Entity("toss", "Toss Payments (mock)", Category.FINTECH, Country.KR, 5),
    Entity("kakaopay", "KakaoPay (mock)", Category.FINTECH, Country.KR, 10),
)

ENTITIES: dict[str, Entity] = {e.id: e for e in UZ_ENTITIES + KR_ENTITIES}

# Counterparty each side is priced against when comparing providers
ANCHOR_ENTITIES: dict[Country, str] = {
    Country.UZ: "paynet-bank",
    Country.KR: "kookmin",
}

HOME_CURRENCY: dict[Country, Currency] = {
    Country.KR: Currency.KRW,
    Country.UZ: Currency.UZS,
}

# UZ customers may hold USD; KR side settles in KRW only
ALLOWED_CURRENCIES: dict[Country, tuple[Currency, ...]] = {
    Country.KR: (Currency.KRW,),
    Country.UZ: (Currency.UZS, Currency.USD),
}


def get_entity(entity_id: str) -> Optional[Entity]:
    """Look up an entity by id."""
    return ENTITIES.get(entity_id)


def entities_for(country: Country) -> tuple[Entity, ...]:
    """All entities registered in a country."""
    return UZ_ENTITIES if country is Country.UZ else KR_ENTITIES


def parse_country(value) -> Optional[Country]:
    """Coerce a country code, returning None when it is not part of the corridor."""
    if isinstance(value, Country):
        return value
    try:
        return Country(str(value).upper())
    except ValueError:
        return None


def parse_currency(value) -> Optional[Currency]:
    """Coerce a currency code, returning None when it is unsupported."""
    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value).upper())
    except ValueError:
        return None
