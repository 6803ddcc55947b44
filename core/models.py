from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .rules import soft_number

LayoutShape = Literal["L", "U"]
CurtainQuality = Literal["dubai", "quality2", "quality3"]
ProductType = Literal["salon", "tapis", "rideau", "moquette", "accessoire"]
QuoteStatus = Literal["pending", "validated", "rejected", "converted"]

SIDES = ("A", "B", "C")


def _soft_optional(v: Any) -> Optional[float]:
    return None if v is None else soft_number(v)


# ---------- CALCULATOR INPUTS (soft: garbage numbers become 0) ----------

class DeliveryOptions(BaseModel):
    needs_delivery: bool = False
    delivery_location: str = ""

    @field_validator("delivery_location", mode="before")
    @classmethod
    def _location(cls, v: Any) -> str:
        return "" if v is None else str(v)


class SeatingConfig(DeliveryOptions):
    """Room measurements plus options for a custom salon."""

    shape: LayoutShape = "L"
    side_a: float = 0  # m
    side_b: float = 0  # m
    side_c: float = 0  # m, U only
    mattress_length: float = 190  # cm
    arm_count: Optional[float] = None
    thickness_multiplier: float = 100  # %
    has_small_table: bool = False
    has_big_table: bool = False

    @field_validator("shape", mode="before")
    @classmethod
    def _shape(cls, v: Any) -> str:
        v = str(v or "").strip().upper()
        return v if v in ("L", "U") else "L"

    @field_validator("side_a", "side_b", "side_c", "mattress_length", "thickness_multiplier", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> float:
        return soft_number(v)

    @field_validator("arm_count", mode="before")
    @classmethod
    def _arms(cls, v: Any) -> Optional[float]:
        return _soft_optional(v)


class SeatingPricingInput(DeliveryOptions):
    mattress_length: float = 190  # cm
    mattress_count: float = 1
    corner_count: float = 0
    arm_count: Optional[float] = None  # None -> default pair
    thickness_multiplier: float = 100  # %
    has_small_table: bool = False
    has_big_table: bool = False

    @field_validator("mattress_length", "mattress_count", "corner_count", "thickness_multiplier", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> float:
        return soft_number(v)

    @field_validator("arm_count", mode="before")
    @classmethod
    def _arms(cls, v: Any) -> Optional[float]:
        return _soft_optional(v)


class CarpetConfig(DeliveryOptions):
    length: float = 0  # m
    width: float = 0  # m

    @field_validator("length", "width", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> float:
        return soft_number(v)


class CurtainConfig(CarpetConfig):
    quality: CurtainQuality = "dubai"

    @field_validator("quality", mode="before")
    @classmethod
    def _quality(cls, v: Any) -> str:
        return v if v in ("dubai", "quality2", "quality3") else "dubai"


# ---------- RESULTS ----------

class LayoutResult(BaseModel):
    shape: LayoutShape
    mattress_count: int
    corner_count: int
    per_side: dict[str, int]
    usable: dict[str, float]
    available_length: float  # m, rounded to 2 decimals
    mattress_length_m: float


class PriceBreakdown(BaseModel):
    """Itemized price in FCFA. subtotal = sum(breakdown), total = subtotal + delivery_fee."""

    breakdown: dict[str, int]
    subtotal: int
    delivery_fee: int = 0
    total: int

    @model_validator(mode="after")
    def _consistent(self) -> "PriceBreakdown":
        if any(v < 0 for v in self.breakdown.values()) or self.delivery_fee < 0:
            raise ValueError("amounts cannot be negative")
        if self.subtotal != sum(self.breakdown.values()):
            raise ValueError("subtotal must equal the sum of breakdown components")
        if self.total != self.subtotal + self.delivery_fee:
            raise ValueError("total must equal subtotal + delivery_fee")
        return self

    @classmethod
    def from_components(cls, breakdown: dict[str, int], delivery_fee: int = 0) -> "PriceBreakdown":
        subtotal = sum(breakdown.values())
        return cls(
            breakdown=breakdown,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
        )


class SeatingQuote(BaseModel):
    price: PriceBreakdown
    suggestion: LayoutResult


# ---------- QUOTES ----------

class CustomerInfo(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "phone")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class QuoteItem(BaseModel):
    product_type: ProductType
    product_name: str

    # salon
    layout: Optional[LayoutShape] = None
    side_a: Optional[float] = None
    side_b: Optional[float] = None
    side_c: Optional[float] = None
    mattress_length: Optional[int] = None
    mattress_count: Optional[int] = None
    corner_count: Optional[int] = None
    arm_count: Optional[int] = None
    per_side: Optional[dict[str, int]] = None
    thickness: Optional[int] = None
    has_small_table: bool = False
    has_big_table: bool = False

    # tapis / rideau / moquette
    length: Optional[float] = None
    width: Optional[float] = None
    quality: Optional[CurtainQuality] = None

    needs_delivery: bool = False
    delivery_location: Optional[str] = None

    unit_price: int = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    subtotal: int = Field(ge=0)


class Quote(BaseModel):
    id: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    status: QuoteStatus = "pending"
    total_amount: int = Field(ge=0)
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    items: list[QuoteItem] = []

    created_at: datetime
    updated_at: datetime
    validated_at: Optional[datetime] = None
    validated_by: Optional[str] = None
