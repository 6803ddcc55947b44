"""Quick runtime checks for the quote calculators.
Run: python scripts/quickcheck.py
Exits with code 0 on success, non-zero on failure.
"""
from core.calculator import calculate_carpet_price, calculate_curtain_price, calculate_seating_price
from core.errors import InvalidDimension
from core.layout import solve_layout
from core.models import CarpetConfig, CurtainConfig, SeatingPricingInput


def main():
    carpet = calculate_carpet_price(CarpetConfig(length=5, width=4))
    assert carpet.subtotal == 260000
    assert carpet.total == 260000

    salon = SeatingPricingInput(mattress_length=190, mattress_count=3, corner_count=1, arm_count=2)
    res = calculate_seating_price(salon)
    assert res.breakdown["mattresses"] == 390000
    assert res.breakdown["corners"] == 130000
    assert res.breakdown["arms"] == 96000
    assert res.subtotal == 1616000
    assert res.total == 1616000

    delivered = salon.model_copy(update={"needs_delivery": True, "delivery_location": "Bamako centre"})
    res = calculate_seating_price(delivered)
    assert res.delivery_fee == 75000
    assert res.total == 1691000

    curtain = calculate_curtain_price(CurtainConfig(length=2.5, width=3, quality="dubai"))
    assert curtain.subtotal == 45000

    layout = solve_layout("L", 3.0, 2.5, mattress_length_cm=190)
    assert layout.per_side == {"A": 1, "B": 0, "C": 0}
    assert layout.mattress_count == 1
    assert layout.corner_count == 1

    try:
        calculate_seating_price(SeatingPricingInput(mattress_length=241, mattress_count=1, corner_count=0))
    except InvalidDimension:
        pass
    else:
        raise AssertionError("241 cm mattress must be rejected")

    print("Quickcheck OK")


if __name__ == '__main__':
    main()
