# cli/app.py
# CLI = a temporary UI for the shop counter. It can be replaced without touching core.

from __future__ import annotations

import logging
import math
import sys
from typing import Optional

from core.calculator import calculate_carpet_price, calculate_curtain_price, quote_seating_from_sides
from core.errors import InvalidDimension, QuoteNotFound
from core.models import (
    CarpetConfig,
    CurtainConfig,
    CustomerInfo,
    PriceBreakdown,
    QuoteItem,
    SeatingConfig,
)
from core.rules import PricingRates, data_dir, load_rates
from store.history import QuoteHistory

BREAKDOWN_LABELS = {
    "mattresses": "Mattresses",
    "corners": "Corners",
    "arms": "Arms",
    "small_table": "Small table",
    "big_table": "Big table",
    "transport": "Transport",
    "profit": "Profit",
    "carpet": "Carpet",
    "curtain": "Curtain",
}


# ---------- INPUT HELPERS ----------

def ask_float(prompt: str, *, min_value: float | None = None) -> float:
    """Keeps asking until a number is entered."""
    while True:
        raw = input(prompt).strip().replace(",", ".")
        try:
            value = float(raw)
        except ValueError:
            print("❌ Enter a number (example: 12.5)")
            continue
        if min_value is not None and value < min_value:
            print(f"❌ Value must be >= {min_value}")
            continue
        return value


def ask_float_default(prompt: str, default: float, *, min_value: float | None = None) -> float:
    """Number with a default: Enter -> default."""
    while True:
        raw = input(f"{prompt} [{default}]: ").strip()
        if raw == "":
            value = float(default)
        else:
            raw = raw.replace(",", ".")
            try:
                value = float(raw)
            except ValueError:
                print("❌ Enter a number or press Enter")
                continue

        if min_value is not None and value < min_value:
            print(f"❌ Value must be >= {min_value}")
            continue
        return value


def ask_yes_no(prompt: str) -> bool:
    while True:
        raw = input(prompt + " (y/n): ").strip().lower()
        if raw in ("y", "yes", "o", "oui"):
            return True
        if raw in ("n", "no", "non"):
            return False
        print("❌ Enter y or n")


def ask_choice(prompt: str, choices: list[str]) -> str:
    while True:
        raw = input(f"{prompt} ({'/'.join(choices)}): ").strip()
        if raw in choices:
            return raw
        print(f"❌ Choose one of: {', '.join(choices)}")


def money(amount: float) -> str:
    """1616000 -> '1 616 000 FCFA'."""
    a = amount if isinstance(amount, (int, float)) and math.isfinite(amount) else 0
    return f"{round(a):,} FCFA".replace(",", " ")


def ask_delivery() -> tuple[bool, str]:
    if ask_yes_no("Delivery needed?"):
        return True, input("Delivery location: ").strip()
    return False, ""


# ---------- OUTPUT ----------

def print_breakdown(result: PriceBreakdown) -> None:
    print("\n--- Breakdown ---")
    for key, amount in result.breakdown.items():
        label = BREAKDOWN_LABELS.get(key, key) + ":"
        print(f"{label:<23}{money(amount)}")
    print(f"{'Subtotal:':<23}{money(result.subtotal)}")
    if result.delivery_fee:
        print(f"{'Delivery:':<23}{money(result.delivery_fee)}")
    print(f"{'TOTAL:':<23}{money(result.total)}")
    print("-----------------\n")


# ---------- PRODUCT SCENARIOS ----------

def salon_item(rates: PricingRates) -> Optional[tuple[PriceBreakdown, QuoteItem]]:
    shape = ask_choice("Layout shape", ["L", "U"])
    side_a = ask_float("Side A (m): ", min_value=0)
    side_b = ask_float("Side B (m): ", min_value=0)
    side_c = ask_float("Side C (m): ", min_value=0) if shape == "U" else 0.0
    mattress_length = ask_float_default("Mattress length (cm)", rates.base_mattress_length, min_value=1)
    arm_count = ask_float_default("Arms", rates.default_arm_count, min_value=0)
    small_table = ask_yes_no("Small table?")
    big_table = ask_yes_no("Big table?")
    needs_delivery, location = ask_delivery()

    config = SeatingConfig(
        shape=shape,
        side_a=side_a,
        side_b=side_b,
        side_c=side_c,
        mattress_length=mattress_length,
        arm_count=arm_count,
        has_small_table=small_table,
        has_big_table=big_table,
        needs_delivery=needs_delivery,
        delivery_location=location,
    )
    try:
        quote = quote_seating_from_sides(config, rates)
    except InvalidDimension as e:
        print(f"❌ {e}")
        return None

    s = quote.suggestion
    print("\n--- Suggested layout ---")
    for side, count in s.per_side.items():
        if side in ("A", "B") or shape == "U":
            print(f"Side {side}: {count} mattress(es), usable {s.usable[side]:.2f} m")
    print(f"Mattresses: {s.mattress_count}   Corners: {s.corner_count}")

    item = QuoteItem(
        product_type="salon",
        product_name=f"Salon marocain sur mesure ({shape}-shape)",
        layout=shape,
        side_a=side_a,
        side_b=side_b,
        side_c=side_c if shape == "U" else None,
        mattress_length=round(mattress_length),
        mattress_count=s.mattress_count,
        corner_count=s.corner_count,
        arm_count=int(arm_count),
        per_side=s.per_side,
        has_small_table=small_table,
        has_big_table=big_table,
        needs_delivery=needs_delivery,
        delivery_location=location or None,
        unit_price=quote.price.subtotal,
        subtotal=quote.price.total,
    )
    return quote.price, item


def carpet_item(rates: PricingRates) -> tuple[PriceBreakdown, QuoteItem]:
    length = ask_float("Length (m): ", min_value=0)
    width = ask_float("Width (m): ", min_value=0)
    needs_delivery, location = ask_delivery()
    price = calculate_carpet_price(
        CarpetConfig(length=length, width=width, needs_delivery=needs_delivery, delivery_location=location),
        rates,
    )
    item = QuoteItem(
        product_type="tapis",
        product_name="Tapis sur mesure",
        length=length,
        width=width,
        needs_delivery=needs_delivery,
        delivery_location=location or None,
        unit_price=price.subtotal,
        subtotal=price.total,
    )
    return price, item


def curtain_item(rates: PricingRates) -> tuple[PriceBreakdown, QuoteItem]:
    length = ask_float("Length (m): ", min_value=0)
    width = ask_float("Width (m): ", min_value=0)
    quality = ask_choice("Quality", rates.curtain_prices.tiers())
    needs_delivery, location = ask_delivery()
    price = calculate_curtain_price(
        CurtainConfig(
            length=length,
            width=width,
            quality=quality,
            needs_delivery=needs_delivery,
            delivery_location=location,
        ),
        rates,
    )
    item = QuoteItem(
        product_type="rideau",
        product_name=f"Rideaux ({quality})",
        length=length,
        width=width,
        quality=quality,
        needs_delivery=needs_delivery,
        delivery_location=location or None,
        unit_price=price.subtotal,
        subtotal=price.total,
    )
    return price, item


# ---------- MAIN SCENARIOS ----------

def run_cli() -> None:
    print("\n=== Décor Mali Quote Calculator (CLI) ===\n")

    rates = load_rates(data_dir() / "pricing.json")
    product = ask_choice("Product", ["salon", "tapis", "rideau"])

    if product == "salon":
        computed = salon_item(rates)
        if computed is None:
            return
    elif product == "tapis":
        computed = carpet_item(rates)
    else:
        computed = curtain_item(rates)

    price, item = computed
    print_breakdown(price)

    if ask_yes_no("Send this quote?"):
        name = input("Customer name: ").strip()
        phone = input("Customer phone: ").strip()
        if not name or not phone:
            print("❌ Name and phone are required")
            return
        customer = CustomerInfo(
            name=name,
            phone=phone,
            email=input("Email (optional): ").strip() or None,
            address=input("Address (optional): ").strip() or None,
            notes=input("Notes (optional): ").strip() or None,
        )
        quote = QuoteHistory(data_dir() / "history").create(customer, [item])
        print(f"✅ Quote saved: {quote.id}\n")


def run_admin() -> None:
    """Review pending quotes one by one."""
    history = QuoteHistory(data_dir() / "history")
    reviewer = input("Reviewer name: ").strip() or "admin"

    pending = history.list("pending")
    if not pending:
        print("No pending quotes.")
        return

    for quote in pending:
        print(f"\n[{quote.id}] {quote.created_at:%Y-%m-%d %H:%M}  {quote.customer_name} ({quote.customer_phone})")
        for item in quote.items:
            print(f"   - {item.product_name}: {money(item.subtotal)}")
        print(f"   Total: {money(quote.total_amount)}")

        action = ask_choice("Action", ["validate", "reject", "skip"])
        try:
            if action == "validate":
                history.update_status(quote.id, "validated", reviewer)
            elif action == "reject":
                history.update_status(quote.id, "rejected")
            note = input("Admin note (optional): ").strip()
            if note:
                history.update_admin_notes(quote.id, note)
        except QuoteNotFound as e:
            print(f"❌ {e}")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.WARNING)
    argv = sys.argv[1:] if argv is None else argv
    if argv[:1] == ["admin"]:
        run_admin()
    else:
        run_cli()


if __name__ == "__main__":
    main()
