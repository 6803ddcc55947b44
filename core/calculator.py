from __future__ import annotations

import logging
from typing import Any

from .errors import InvalidDimension
from .layout import solve_layout_for
from .models import (
    CarpetConfig,
    CurtainConfig,
    PriceBreakdown,
    SeatingConfig,
    SeatingPricingInput,
    SeatingQuote,
)
from .rules import DEFAULT_RATES, PricingRates, is_delivery_city, round_half_up, soft_number

logger = logging.getLogger(__name__)


def delivery_fee(needs_delivery: bool, location: str | None, rates: PricingRates = DEFAULT_RATES) -> int:
    """Flat fee, only for deliveries inside the home city."""
    if needs_delivery and is_delivery_city(location, rates):
        return rates.delivery_fee
    return 0


def calculate_mattress_price(
    length: Any,
    thickness_multiplier: Any = 100,
    rates: PricingRates = DEFAULT_RATES,
) -> int:
    """
    Unit mattress price, linear in length from the 190 cm reference,
    then scaled by the thickness multiplier (percent, never below 1).
    """
    L = soft_number(length) or rates.base_mattress_length
    if L > rates.max_mattress_length:
        raise InvalidDimension(L, rates.max_mattress_length)

    unit = round_half_up(rates.base_mattress_price / rates.base_mattress_length * L)
    mult = max(1.0, soft_number(thickness_multiplier) or 100.0)
    return round_half_up(unit * mult / 100.0)


def calculate_corner_price(thickness_multiplier: Any = 100, rates: PricingRates = DEFAULT_RATES) -> int:
    """A corner costs a standard-length mattress, whatever the salon's length."""
    return calculate_mattress_price(rates.base_mattress_length, thickness_multiplier, rates)


def calculate_seating_price(req: SeatingPricingInput, rates: PricingRates = DEFAULT_RATES) -> PriceBreakdown:
    mattress_unit = calculate_mattress_price(req.mattress_length, req.thickness_multiplier, rates)
    corner_unit = calculate_corner_price(req.thickness_multiplier, rates)

    mattresses = max(1, int(req.mattress_count))
    corners = max(0, int(req.corner_count))
    arms = rates.default_arm_count if req.arm_count is None else int(req.arm_count)

    breakdown: dict[str, int] = {
        "mattresses": mattress_unit * mattresses,
        "corners": corner_unit * corners,
        "arms": rates.arm_price * arms,
    }
    if req.has_small_table:
        breakdown["small_table"] = rates.small_table_price
    if req.has_big_table:
        breakdown["big_table"] = rates.big_table_price

    breakdown["transport"] = rates.transport_fee
    breakdown["profit"] = rates.profit_per_salon

    result = PriceBreakdown.from_components(
        breakdown, delivery_fee(req.needs_delivery, req.delivery_location, rates)
    )
    logger.debug("salon: %d mattresses, %d corners, %d arms -> %d", mattresses, corners, arms, result.total)
    return result


def _area_price(area_sqm: float, rate: int) -> int:
    return round_half_up(area_sqm * rate)


def calculate_carpet_price(req: CarpetConfig, rates: PricingRates = DEFAULT_RATES) -> PriceBreakdown:
    area = req.length * req.width
    result = PriceBreakdown.from_components(
        {"carpet": _area_price(area, rates.carpet_price_per_sqm)},
        delivery_fee(req.needs_delivery, req.delivery_location, rates),
    )
    logger.debug("carpet: %.2f m2 -> %d", area, result.total)
    return result


def calculate_curtain_price(req: CurtainConfig, rates: PricingRates = DEFAULT_RATES) -> PriceBreakdown:
    area = req.length * req.width
    rate = rates.curtain_prices.rate(req.quality)
    result = PriceBreakdown.from_components(
        {"curtain": _area_price(area, rate)},
        delivery_fee(req.needs_delivery, req.delivery_location, rates),
    )
    logger.debug("curtain (%s): %.2f m2 -> %d", req.quality, area, result.total)
    return result


def quote_seating_from_sides(config: SeatingConfig, rates: PricingRates = DEFAULT_RATES) -> SeatingQuote:
    """Room sides -> layout suggestion -> salon price."""
    suggestion = solve_layout_for(config, rates)
    req = SeatingPricingInput(
        mattress_length=config.mattress_length,
        mattress_count=suggestion.mattress_count,
        corner_count=suggestion.corner_count,
        arm_count=config.arm_count,
        thickness_multiplier=config.thickness_multiplier,
        has_small_table=config.has_small_table,
        has_big_table=config.has_big_table,
        needs_delivery=config.needs_delivery,
        delivery_location=config.delivery_location,
    )
    return SeatingQuote(price=calculate_seating_price(req, rates), suggestion=suggestion)
