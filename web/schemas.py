"""Request bodies for the API.

These are strict: malformed requests are rejected here with a 422 before
they reach the calculators, whose own coercion is only a last resort.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from core.models import (
    CarpetConfig,
    CurtainConfig,
    CurtainQuality,
    CustomerInfo,
    LayoutShape,
    QuoteItem,
    QuoteStatus,
    SeatingConfig,
    SeatingPricingInput,
)


# generous limits for a room side and a piece of fabric, in metres
MAX_SIDE = 50
MAX_SPAN = 100


class DeliveryRequest(BaseModel):
    needs_delivery: bool = False
    delivery_location: str = ""


class SalonOptions(DeliveryRequest):
    mattress_length: float = Field(default=190, ge=1, le=240)
    arm_count: Optional[int] = Field(default=None, ge=0, le=100)
    thickness_multiplier: Optional[float] = Field(default=None, gt=0, le=1000)
    has_small_table: bool = False
    has_big_table: bool = False


class SalonRequest(SalonOptions):
    mattress_count: int = Field(ge=1, le=1000)
    corner_count: int = Field(ge=0, le=100)

    def to_core(self) -> SeatingPricingInput:
        return SeatingPricingInput.model_validate(self.model_dump(exclude_none=True))


class LayoutRequest(BaseModel):
    shape: LayoutShape = "L"
    side_a: float = Field(ge=0, le=MAX_SIDE)
    side_b: float = Field(ge=0, le=MAX_SIDE)
    side_c: float = Field(default=0, ge=0, le=MAX_SIDE)
    mattress_length: float = Field(default=190, ge=1, le=240)


class SalonFromSidesRequest(SalonOptions, LayoutRequest):
    def to_core(self) -> SeatingConfig:
        return SeatingConfig.model_validate(self.model_dump(exclude_none=True))


class CarpetRequest(DeliveryRequest):
    length: float = Field(ge=0.1, le=MAX_SPAN)
    width: float = Field(ge=0.1, le=MAX_SPAN)

    def to_core(self) -> CarpetConfig:
        return CarpetConfig.model_validate(self.model_dump())


class CurtainRequest(CarpetRequest):
    quality: CurtainQuality

    def to_core(self) -> CurtainConfig:
        return CurtainConfig.model_validate(self.model_dump())


class QuoteCreateRequest(BaseModel):
    customer: CustomerInfo
    items: list[QuoteItem] = Field(min_length=1)


class QuoteCreated(BaseModel):
    id: str


class StatusUpdate(BaseModel):
    status: QuoteStatus
    validated_by: Optional[str] = None


class NotesUpdate(BaseModel):
    admin_notes: str
