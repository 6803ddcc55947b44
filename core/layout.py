# core/layout.py
# Mattress layout for a custom salon: room sides -> mattresses per side.
#
# Each side loses the room taken by its corner pieces, then holds as many
# whole mattresses as fit in what is left. The solver never raises: while
# the customer is still typing, incomplete input simply yields zeros.

from __future__ import annotations

import math
from typing import Any

from .models import SIDES, LayoutResult, SeatingConfig
from .rules import DEFAULT_RATES, PricingRates, floor_count, soft_number

# metres taken from each side by the adjoining corners
CORNER_ALLOWANCE: dict[str, dict[str, float]] = {
    "L": {"A": 1.0, "B": 1.0},
    "U": {"A": 1.0, "B": 2.0, "C": 1.0},  # B touches both corners
}

CORNERS = {"L": 1, "U": 2}


def solve_layout(
    shape: Any,
    side_a: Any,
    side_b: Any,
    side_c: Any = 0,
    mattress_length_cm: Any = None,
    *,
    rates: PricingRates = DEFAULT_RATES,
) -> LayoutResult:
    shape = str(shape or "").strip().upper()
    if shape not in CORNER_ALLOWANCE:
        shape = "L"

    length_cm = soft_number(mattress_length_cm) or rates.base_mattress_length
    mattress_m = length_cm / 100.0
    if mattress_m <= 0:  # underflow of a subnormal length
        mattress_m = rates.base_mattress_length / 100.0

    raw = {"A": soft_number(side_a), "B": soft_number(side_b), "C": soft_number(side_c)}
    allowance = CORNER_ALLOWANCE[shape]

    usable: dict[str, float] = {}
    per_side: dict[str, int] = {}
    for side in SIDES:
        if side in allowance:
            usable[side] = max(0.0, raw[side] - allowance[side])
            per_side[side] = floor_count(usable[side] / mattress_m)
        else:
            usable[side] = 0.0
            per_side[side] = 0

    total = sum(usable.values())
    return LayoutResult(
        shape=shape,
        mattress_count=sum(per_side.values()),
        corner_count=CORNERS[shape],
        per_side=per_side,
        usable=usable,
        available_length=round(total, 2) if math.isfinite(total) else 0.0,
        mattress_length_m=mattress_m,
    )


def solve_layout_for(config: SeatingConfig, rates: PricingRates = DEFAULT_RATES) -> LayoutResult:
    return solve_layout(
        config.shape,
        config.side_a,
        config.side_b,
        config.side_c,
        config.mattress_length,
        rates=rates,
    )
