"""Tests for the salon, carpet and curtain price calculators."""

import pytest
from pydantic import ValidationError

from core.calculator import (
    calculate_carpet_price,
    calculate_corner_price,
    calculate_curtain_price,
    calculate_mattress_price,
    calculate_seating_price,
    delivery_fee,
    quote_seating_from_sides,
)
from core.errors import InvalidDimension
from core.models import CarpetConfig, CurtainConfig, PriceBreakdown, SeatingConfig, SeatingPricingInput
from core.rules import DEFAULT_RATES, PricingRates, load_rates, round_half_up, soft_number


def standard_salon(**overrides):
    fields = dict(mattress_length=190, mattress_count=3, corner_count=1, arm_count=2)
    fields.update(overrides)
    return SeatingPricingInput(**fields)


def assert_consistent(result: PriceBreakdown):
    assert result.subtotal == sum(result.breakdown.values())
    assert result.total == result.subtotal + result.delivery_fee
    assert all(isinstance(v, int) and v >= 0 for v in result.breakdown.values())


# ── Mattresses and corners ───────────────────────────────────────────────────


class TestMattressPrice:

    def test_base_length(self):
        assert calculate_mattress_price(190) == 130000

    def test_linear_in_length(self):
        # 130000 / 190 * 200 = 136842.1
        assert calculate_mattress_price(200) == 136842

    def test_thickness_surcharge(self):
        assert calculate_mattress_price(190, 120) == 156000

    def test_thickness_floored_at_one_percent(self):
        assert calculate_mattress_price(190, 0.5) == 1300

    def test_missing_thickness_is_normal(self):
        assert calculate_mattress_price(190, None) == 130000
        assert calculate_mattress_price(190, "abc") == 130000

    def test_missing_length_is_standard(self):
        assert calculate_mattress_price(0) == 130000

    def test_max_length_accepted(self):
        assert calculate_mattress_price(240) == 164211

    def test_over_max_length_rejected(self):
        with pytest.raises(InvalidDimension, match="240 cm or below") as exc:
            calculate_mattress_price(241)
        assert exc.value.max_length == 240
        assert exc.value.length == 241

    def test_invalid_dimension_is_a_value_error(self):
        with pytest.raises(ValueError):
            calculate_mattress_price(300)

    def test_corner_priced_at_base_length(self):
        assert calculate_corner_price() == 130000
        assert calculate_corner_price(120) == 156000


# ── Salon ────────────────────────────────────────────────────────────────────


class TestSeatingPrice:

    def test_standard_l_salon(self):
        r = calculate_seating_price(standard_salon())
        assert r.breakdown == {
            "mattresses": 390000,
            "corners": 130000,
            "arms": 96000,
            "transport": 500000,
            "profit": 500000,
        }
        assert r.subtotal == 1616000
        assert r.delivery_fee == 0
        assert r.total == 1616000

    def test_delivery_to_bamako(self):
        r = calculate_seating_price(
            standard_salon(needs_delivery=True, delivery_location="Bamako centre")
        )
        assert r.delivery_fee == 75000
        assert r.total == 1691000

    def test_tables(self):
        r = calculate_seating_price(standard_salon(has_small_table=True, has_big_table=True))
        assert r.breakdown["small_table"] == 50000
        assert r.breakdown["big_table"] == 130000
        assert r.subtotal == 1616000 + 180000

    def test_absent_tables_omitted(self):
        r = calculate_seating_price(standard_salon())
        assert "small_table" not in r.breakdown
        assert "big_table" not in r.breakdown

    def test_default_arm_pair(self):
        r = calculate_seating_price(SeatingPricingInput(mattress_length=190, mattress_count=3, corner_count=1))
        assert r.breakdown["arms"] == 96000

    def test_explicit_zero_arms(self):
        r = calculate_seating_price(standard_salon(arm_count=0))
        assert r.breakdown["arms"] == 0

    def test_at_least_one_mattress_billed(self):
        r = calculate_seating_price(standard_salon(mattress_count=0))
        assert r.breakdown["mattresses"] == 130000

    def test_fractional_counts_floored(self):
        r = calculate_seating_price(standard_salon(mattress_count=2.7, corner_count=1.9, arm_count=3.5))
        assert r.breakdown["mattresses"] == 260000
        assert r.breakdown["corners"] == 130000
        assert r.breakdown["arms"] == 144000

    def test_garbage_counts_soft_defaulted(self):
        r = calculate_seating_price(standard_salon(corner_count="abc", arm_count=-4))
        assert r.breakdown["corners"] == 0
        assert r.breakdown["arms"] == 0
        assert_consistent(r)

    def test_max_length_boundary(self):
        calculate_seating_price(standard_salon(mattress_length=240))
        with pytest.raises(InvalidDimension):
            calculate_seating_price(standard_salon(mattress_length=241))

    def test_deterministic(self):
        req = standard_salon(mattress_length=217, thickness_multiplier=115, has_big_table=True)
        assert calculate_seating_price(req) == calculate_seating_price(req)

    @pytest.mark.parametrize(
        "overrides",
        [
            dict(thickness_multiplier=1e308),
            dict(mattress_count=1e300, corner_count=1e300, arm_count=1e300),
            dict(mattress_length=1e-300),
        ],
    )
    def test_huge_finite_input_does_not_raise(self, overrides):
        assert_consistent(calculate_seating_price(standard_salon(**overrides)))

    def test_huge_sides_priced_from_sides(self):
        q = quote_seating_from_sides(SeatingConfig(side_a=1e308, side_b=1e308, mattress_length=1))
        assert q.suggestion.mattress_count == 0
        assert_consistent(q.price)

    def test_custom_rates(self):
        rates = PricingRates(transport_fee=0, profit_per_salon=0)
        r = calculate_seating_price(standard_salon(), rates)
        assert r.subtotal == 616000


# ── Carpet and curtain ───────────────────────────────────────────────────────


class TestCarpetPrice:

    def test_five_by_four(self):
        r = calculate_carpet_price(CarpetConfig(length=5, width=4))
        assert r.breakdown == {"carpet": 260000}
        assert r.subtotal == 260000
        assert r.total == 260000

    @pytest.mark.parametrize("length,expected", [(0.5, 1), (2.5, 3), (3.5, 4), (2.25, 2)])
    def test_halves_round_up(self, length, expected):
        r = calculate_carpet_price(CarpetConfig(length=length, width=1), PricingRates(carpet_price_per_sqm=1))
        assert r.subtotal == expected
        assert isinstance(r.subtotal, int)

    @pytest.mark.parametrize("length,width", [(1e200, 1e200), (1e308, 10), (1e308, 1e308)])
    def test_overflowing_area_degrades_to_zero(self, length, width):
        r = calculate_carpet_price(CarpetConfig(length=length, width=width))
        assert r.subtotal == 0
        assert_consistent(r)

    def test_huge_but_finite_area_still_priced(self):
        r = calculate_carpet_price(CarpetConfig(length=1e6, width=1e6))
        assert r.subtotal == 13000 * 10**12

    @pytest.mark.parametrize("length,width", [(-5, 4), ("abc", 4), (float("nan"), 4), (float("inf"), 4)])
    def test_bad_dimensions_are_zero(self, length, width):
        r = calculate_carpet_price(CarpetConfig(length=length, width=width))
        assert r.subtotal == 0

    def test_monotonic_in_length_and_width(self):
        sizes = [0, 0.5, 1, 1.3, 2, 2.75, 4]
        for w in sizes:
            totals = [calculate_carpet_price(CarpetConfig(length=l, width=w)).subtotal for l in sizes]
            assert totals == sorted(totals)
        for l in sizes:
            totals = [calculate_carpet_price(CarpetConfig(length=l, width=w)).subtotal for w in sizes]
            assert totals == sorted(totals)


class TestCurtainPrice:

    def test_dubai(self):
        r = calculate_curtain_price(CurtainConfig(length=2.5, width=3, quality="dubai"))
        assert r.breakdown == {"curtain": 45000}
        assert r.subtotal == 45000

    @pytest.mark.parametrize("quality,expected", [("quality2", 33750), ("quality3", 30000)])
    def test_tiers(self, quality, expected):
        r = calculate_curtain_price(CurtainConfig(length=2.5, width=3, quality=quality))
        assert r.subtotal == expected

    def test_unknown_quality_uses_first_tier(self):
        r = calculate_curtain_price(CurtainConfig(length=2.5, width=3, quality="silk"))
        assert r.subtotal == 45000

    def test_missing_quality_uses_first_tier(self):
        r = calculate_curtain_price(CurtainConfig(length=2.5, width=3))
        assert r.subtotal == 45000

    def test_overflowing_area_degrades_to_zero(self):
        r = calculate_curtain_price(CurtainConfig(length=1e200, width=1e200, quality="quality2"))
        assert r.subtotal == 0
        assert r.total == 0

    def test_monotonic(self):
        sizes = [0, 0.4, 1, 2.5, 3]
        for quality in ("dubai", "quality2", "quality3"):
            totals = [
                calculate_curtain_price(CurtainConfig(length=l, width=2, quality=quality)).subtotal
                for l in sizes
            ]
            assert totals == sorted(totals)


# ── Delivery ─────────────────────────────────────────────────────────────────


class TestDelivery:

    @pytest.mark.parametrize(
        "needs,location,expected",
        [
            (True, "Bamako centre", 75000),
            (True, "BAMAKO", 75000),
            (True, "quartier ACI 2000, bamako", 75000),
            (True, "Ségou", 0),
            (True, "", 0),
            (True, None, 0),
            (False, "Bamako", 0),
            (False, "Kayes", 0),
        ],
    )
    def test_gate(self, needs, location, expected):
        assert delivery_fee(needs, location) == expected

    def test_applies_to_every_product(self):
        opts = dict(needs_delivery=True, delivery_location="Bamako")
        carpet = calculate_carpet_price(CarpetConfig(length=5, width=4, **opts))
        curtain = calculate_curtain_price(CurtainConfig(length=1, width=1, **opts))
        assert carpet.total == 260000 + 75000
        assert curtain.total == 6000 + 75000


# ── Layout + pricing ─────────────────────────────────────────────────────────


class TestQuoteFromSides:

    def test_layout_feeds_price(self):
        config = SeatingConfig(shape="U", side_a=3, side_b=5, side_c=3, mattress_length=100)
        q = quote_seating_from_sides(config)
        assert q.suggestion.mattress_count == 7
        # 130000 / 190 * 100 = 68421.05
        assert q.price.breakdown["mattresses"] == 68421 * 7
        assert q.price.breakdown["corners"] == 130000 * 2
        assert_consistent(q.price)

    def test_over_max_length_rejected(self):
        with pytest.raises(InvalidDimension):
            quote_seating_from_sides(SeatingConfig(side_a=5, side_b=5, mattress_length=250))


# ── Breakdown invariants and helpers ─────────────────────────────────────────


class TestPriceBreakdown:

    def test_from_components(self):
        r = PriceBreakdown.from_components({"a": 1, "b": 2}, 3)
        assert (r.subtotal, r.delivery_fee, r.total) == (3, 3, 6)

    def test_inconsistent_subtotal_rejected(self):
        with pytest.raises(ValidationError, match="subtotal"):
            PriceBreakdown(breakdown={"a": 1}, subtotal=2, total=2)

    def test_inconsistent_total_rejected(self):
        with pytest.raises(ValidationError, match="total"):
            PriceBreakdown(breakdown={"a": 1}, subtotal=1, delivery_fee=5, total=1)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            PriceBreakdown.from_components({"a": -1})


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(float("inf")) == 0


class TestRates:

    def test_curtain_table_cannot_be_changed(self):
        with pytest.raises(TypeError):
            DEFAULT_RATES.curtain_prices["dubai"] = 1
        with pytest.raises(ValidationError):
            DEFAULT_RATES.curtain_prices.dubai = 1
        assert DEFAULT_RATES.curtain_prices.dubai == PricingRates().curtain_prices.dubai == 6000

    def test_rates_cannot_be_reassigned(self):
        with pytest.raises(ValidationError):
            DEFAULT_RATES.carpet_price_per_sqm = 1

    def test_curtain_tiers_in_order(self):
        assert DEFAULT_RATES.curtain_prices.tiers() == ["dubai", "quality2", "quality3"]

    def test_unknown_tier_rate_is_first_tier(self):
        assert DEFAULT_RATES.curtain_prices.rate("silk") == 6000
        assert DEFAULT_RATES.curtain_prices.rate(None) == 6000

    def test_loaded_from_json(self, tmp_path):
        path = tmp_path / "pricing.json"
        path.write_text('{"curtain_prices": {"dubai": 7000}, "delivery_fee": 80000}', encoding="utf-8")
        rates = load_rates(path)
        assert rates.curtain_prices.rate("dubai") == 7000
        assert rates.curtain_prices.rate("quality2") == 4500
        assert rates.delivery_fee == 80000

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_rates(tmp_path / "absent.json") is DEFAULT_RATES


@pytest.mark.parametrize(
    "raw,expected",
    [(5, 5.0), ("2,5", 2.5), ("1 900", 1900.0), (-3, 0.0), (None, 0.0), (True, 0.0), ("x", 0.0), ([], 0.0)],
)
def test_soft_number(raw, expected):
    assert soft_number(raw) == expected
