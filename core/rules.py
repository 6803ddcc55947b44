# core/rules.py
# Pricing constants and the small numeric rules every calculator shares.

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class CurtainRates(BaseModel):
    """FCFA per m2 for each curtain quality; the first tier is the fallback."""

    model_config = ConfigDict(frozen=True)

    dubai: int = 6000
    quality2: int = 4500
    quality3: int = 4000

    def tiers(self) -> list[str]:
        return list(type(self).model_fields)

    def rate(self, quality: Any) -> int:
        tiers = self.tiers()
        return getattr(self, quality if quality in tiers else tiers[0])


class PricingRates(BaseModel):
    """Rate table in FCFA. Frozen: rates never change during a process."""

    model_config = ConfigDict(frozen=True)

    base_mattress_price: int = 130000
    base_mattress_length: int = 190  # cm
    max_mattress_length: int = 240  # cm

    arm_price: int = 48000
    default_arm_count: int = 2

    small_table_price: int = 50000
    big_table_price: int = 130000

    transport_fee: int = 500000
    profit_per_salon: int = 500000

    delivery_fee: int = 75000
    delivery_city: str = "bamako"

    carpet_price_per_sqm: int = 13000
    curtain_prices: CurtainRates = Field(default_factory=CurtainRates)


DEFAULT_RATES = PricingRates()


def data_dir() -> Path:
    """data/ at the project root, unless QUOTE_BUILDER_DATA_DIR points elsewhere."""
    override = os.environ.get("QUOTE_BUILDER_DATA_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / "data"


def load_rates(path: Path) -> PricingRates:
    """Read a rate table from JSON; missing keys keep their defaults."""
    if not path.exists():
        logger.info("No rate file at %s, using default rates", path)
        return DEFAULT_RATES
    raw = json.loads(path.read_text(encoding="utf-8"))
    return PricingRates.model_validate(raw)


def soft_number(value: Any) -> float:
    """Finite number > 0, otherwise 0.0. Accepts "1 900" and "2,5"."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = "".join(value.split()).replace(",", ".", 1)
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(x) or x <= 0:
        return 0.0
    return x


def round_half_up(x: float) -> int:
    """Round to the nearest currency unit, halves going up. Overflowed amounts give 0."""
    if not math.isfinite(x):
        return 0
    return int(math.floor(x + 0.5))


def floor_count(x: float) -> int:
    # stable floor: 3.8 / 1.9 must give 2
    if not math.isfinite(x):
        return 0
    return int(math.floor(x + 1e-9))


def is_delivery_city(location: str | None, rates: PricingRates = DEFAULT_RATES) -> bool:
    return bool(location) and rates.delivery_city.lower() in location.lower()
