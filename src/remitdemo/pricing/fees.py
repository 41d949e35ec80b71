"""Fee models and fee computation."""

from dataclasses import asdict, dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

from remitdemo.pricing.entities import Currency

HUNDRED = Decimal("100")
MAX_PCT = Decimal("0.05")
MAX_FX_MARGIN = Decimal("0.05")


@dataclass(frozen=True)
class FeeModel:
    """Fee schedule for one entity, in whole units of `currency`."""

    base: Decimal
    pct: Decimal  # fraction of the amount, 0.006 = 0.6%
    min: Decimal
    max: Decimal
    currency: Currency

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        data = asdict(self)
        for key in ("base", "pct", "min", "max"):
            data[key] = str(data[key])
        data["currency"] = self.currency.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "FeeModel":
        """Rebuild from `to_dict` output."""
        return cls(
            base=Decimal(str(data["base"])),
            pct=Decimal(str(data["pct"])),
            min=Decimal(str(data["min"])),
            max=Decimal(str(data["max"])),
            currency=Currency(data["currency"]),
        )


def round_to_hundred(value: Decimal) -> Decimal:
    """Round half-up to the nearest 100."""
    return (Decimal(value) / HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP) * HUNDRED


def floor_to_hundred(value: Decimal) -> Decimal:
    """Round down to a multiple of 100."""
    return (Decimal(value) / HUNDRED).quantize(Decimal("1"), rounding=ROUND_FLOOR) * HUNDRED


def fee_bounds(model: FeeModel) -> tuple[Decimal, Decimal]:
    """Effective (min, max) a fee is clamped into."""
    low = max(floor_to_hundred(model.min), Decimal("0"))
    high = max(floor_to_hundred(model.max), low + HUNDRED)
    return low, high


def calc_fee(amount: Decimal, model: FeeModel) -> Decimal:
    """Compute the fee for an amount in the model's currency.

    base + pct * amount, rounded to the nearest 100 and clamped into
    the model's bounds.
    """
    raw = model.base + model.pct * Decimal(amount)
    low, high = fee_bounds(model)
    return min(max(round_to_hundred(raw), low), high)


# Reference fee schedules per entity, before any session jitter
REFERENCE_FEE_MODELS: dict[str, FeeModel] = {
    # KR side (KRW)
    "kookmin": FeeModel(Decimal("2500"), Decimal("0.006"), Decimal("3500"), Decimal("120000"), Currency.KRW),
    "shinhan": FeeModel(Decimal("3300"), Decimal("0.0045"), Decimal("3900"), Decimal("133000"), Currency.KRW),
    "toss": FeeModel(Decimal("1800"), Decimal("0.0075"), Decimal("3000"), Decimal("90000"), Currency.KRW),
    "kakaopay": FeeModel(Decimal("2200"), Decimal("0.0065"), Decimal("3500"), Decimal("100000"), Currency.KRW),
    # UZ side (UZS)
    "paynet-bank": FeeModel(Decimal("22500"), Decimal("0.006"), Decimal("31500"), Decimal("1080000"), Currency.UZS),
    "agrobank": FeeModel(Decimal("30000"), Decimal("0.0045"), Decimal("35000"), Decimal("1200000"), Currency.UZS),
    "qsystems-bank": FeeModel(Decimal("19800"), Decimal("0.0065"), Decimal("31500"), Decimal("900000"), Currency.UZS),
}

# Spread subtracted from the mid-market rate, per entity
REFERENCE_FX_MARGINS: dict[str, Decimal] = {
    "kookmin": Decimal("0.012"),
    "shinhan": Decimal("0.010"),
    "toss": Decimal("0.008"),
    "kakaopay": Decimal("0.009"),
    "paynet-bank": Decimal("0.011"),
    "agrobank": Decimal("0.013"),
    "qsystems-bank": Decimal("0.010"),
}


def clamp_margin(margin: Decimal) -> Decimal:
    """Clamp an FX margin into [0, 0.05]."""
    return min(max(Decimal(margin), Decimal("0")), MAX_FX_MARGIN)
