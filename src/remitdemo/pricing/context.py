"""Per-session pricing parameters.

A PricingContext is built once per client session, either from the
reference tables or with each entity's fee model and FX margin randomly
perturbed. The generated parameters are cached in the session store so
quotes stay reproducible for the whole session and differ between
sessions.
"""

import json
import logging
import random
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from remitdemo.pricing.fees import (
    HUNDRED,
    MAX_PCT,
    REFERENCE_FEE_MODELS,
    REFERENCE_FX_MARGINS,
    FeeModel,
    clamp_margin,
    round_to_hundred,
)
from remitdemo.sessions import SessionStore

logger = logging.getLogger(__name__)

# Session store keys; bump the version when the payload shape changes
FEE_MODELS_KEY = "remitdemo.pricing.fees.v1"
FX_MARGINS_KEY = "remitdemo.pricing.fx.v1"

AMOUNT_JITTER = 0.15
PCT_JITTER = 0.25
MARGIN_JITTER = 0.0020


@dataclass
class PricingContext:
    """Fee models and FX margins in effect for one session."""

    fee_models: dict[str, FeeModel] = field(default_factory=dict)
    fx_margins: dict[str, Decimal] = field(default_factory=dict)

    def fee_model(self, entity_id: str) -> Optional[FeeModel]:
        return self.fee_models.get(entity_id)

    def fx_margin(self, entity_id: str) -> Decimal:
        return self.fx_margins.get(entity_id, Decimal("0"))

    def to_json(self) -> tuple[str, str]:
        """Serialize as (fee models, FX margins) JSON payloads."""
        fees = json.dumps({k: m.to_dict() for k, m in self.fee_models.items()}, sort_keys=True)
        margins = json.dumps({k: str(v) for k, v in self.fx_margins.items()}, sort_keys=True)
        return fees, margins

    @classmethod
    def from_json(cls, fees: str, margins: str) -> "PricingContext":
        """Rebuild a context from `to_json` payloads."""
        fee_data = json.loads(fees)
        margin_data = json.loads(margins)
        return cls(
            fee_models={k: FeeModel.from_dict(v) for k, v in fee_data.items()},
            fx_margins={k: clamp_margin(Decimal(str(v))) for k, v in margin_data.items()},
        )


def _scale(rng: random.Random, spread: float) -> Decimal:
    return Decimal("1") + Decimal(str(rng.uniform(-spread, spread)))


def jitter_fee_model(model: FeeModel, rng: random.Random) -> FeeModel:
    """Perturb a fee model while keeping min <= max."""
    base = round_to_hundred(model.base * _scale(rng, AMOUNT_JITTER))
    low = round_to_hundred(model.min * _scale(rng, AMOUNT_JITTER))
    high = max(round_to_hundred(model.max * _scale(rng, AMOUNT_JITTER)), low + HUNDRED)
    pct = (model.pct * _scale(rng, PCT_JITTER)).quantize(Decimal("0.000001"))
    pct = min(max(pct, Decimal("0")), MAX_PCT)
    return FeeModel(base=base, pct=pct, min=low, max=high, currency=model.currency)


def jitter_margin(margin: Decimal, rng: random.Random) -> Decimal:
    """Shift an FX margin by up to +/-0.20 percentage points."""
    shift = Decimal(str(rng.uniform(-MARGIN_JITTER, MARGIN_JITTER)))
    return clamp_margin((margin + shift).quantize(Decimal("0.00001")))


def initialize_pricing(seed: Optional[int] = None, jitter: bool = True) -> PricingContext:
    """Build the pricing parameters for a new session.

    Args:
        seed: Seed for the random generator (None = nondeterministic)
        jitter: When False, use the reference tables untouched

    Returns:
        PricingContext for the session
    """
    if not jitter:
        return PricingContext(
            fee_models=dict(REFERENCE_FEE_MODELS),
            fx_margins=dict(REFERENCE_FX_MARGINS),
        )

    rng = random.Random(seed)
    fee_models = {
        entity_id: jitter_fee_model(model, rng)
        for entity_id, model in sorted(REFERENCE_FEE_MODELS.items())
    }
    fx_margins = {
        entity_id: jitter_margin(margin, rng)
        for entity_id, margin in sorted(REFERENCE_FX_MARGINS.items())
    }
    logger.info(f"Generated session pricing for {len(fee_models)} entities (seed={seed})")
    return PricingContext(fee_models=fee_models, fx_margins=fx_margins)


def save_pricing(store: SessionStore, context: PricingContext) -> None:
    """Persist a context into a session store."""
    fees, margins = context.to_json()
    store.set(FEE_MODELS_KEY, fees)
    store.set(FX_MARGINS_KEY, margins)


def load_pricing(store: SessionStore) -> Optional[PricingContext]:
    """Load a cached context, or None when absent or unreadable."""
    fees = store.get(FEE_MODELS_KEY)
    margins = store.get(FX_MARGINS_KEY)
    if fees is None or margins is None:
        return None

    try:
        return PricingContext.from_json(fees, margins)
    except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as e:
        logger.warning(f"Discarding unreadable pricing cache for session {store.session_id}: {e}")
        store.remove(FEE_MODELS_KEY)
        store.remove(FX_MARGINS_KEY)
        return None


def load_or_initialize_pricing(
    store: SessionStore,
    seed: Optional[int] = None,
    jitter: bool = True,
) -> PricingContext:
    """Reuse the session's cached pricing, generating it on first use."""
    cached = load_pricing(store)
    if cached is not None:
        logger.debug(f"Reusing cached pricing for session {store.session_id}")
        return cached

    context = initialize_pricing(seed=seed, jitter=jitter)
    save_pricing(store, context)
    return context
