from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from core.calculator import (
    calculate_carpet_price,
    calculate_curtain_price,
    calculate_seating_price,
    quote_seating_from_sides,
)
from core.errors import InvalidDimension, QuoteNotFound
from core.layout import solve_layout
from core.models import LayoutResult, PriceBreakdown, Quote, QuoteStatus, SeatingQuote
from core.rules import PricingRates, data_dir, load_rates
from store.history import QuoteHistory
from web.schemas import (
    CarpetRequest,
    CurtainRequest,
    LayoutRequest,
    NotesUpdate,
    QuoteCreated,
    QuoteCreateRequest,
    SalonFromSidesRequest,
    SalonRequest,
    StatusUpdate,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Décor Mali Quote API", version="1.0.0")

# the storefront is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_rates() -> PricingRates:
    return load_rates(data_dir() / "pricing.json")


@lru_cache
def get_history() -> QuoteHistory:
    return QuoteHistory(data_dir() / "history")


def _rejected(e: InvalidDimension) -> HTTPException:
    logger.warning("Rejected salon: %s", e)
    return HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ---- Pricing ----

@app.post("/pricing/layout", response_model=LayoutResult)
def layout(req: LayoutRequest = Body(...), rates: PricingRates = Depends(get_rates)) -> LayoutResult:
    return solve_layout(req.shape, req.side_a, req.side_b, req.side_c, req.mattress_length, rates=rates)


@app.post("/pricing/salon", response_model=PriceBreakdown)
def salon(req: SalonRequest = Body(...), rates: PricingRates = Depends(get_rates)) -> PriceBreakdown:
    try:
        return calculate_seating_price(req.to_core(), rates)
    except InvalidDimension as e:
        raise _rejected(e)


@app.post("/pricing/salon/from-sides", response_model=SeatingQuote)
def salon_from_sides(
    req: SalonFromSidesRequest = Body(...),
    rates: PricingRates = Depends(get_rates),
) -> SeatingQuote:
    """Derive the mattress layout from the room sides, then price it."""
    try:
        return quote_seating_from_sides(req.to_core(), rates)
    except InvalidDimension as e:
        raise _rejected(e)


@app.post("/pricing/carpet", response_model=PriceBreakdown)
def carpet(req: CarpetRequest = Body(...), rates: PricingRates = Depends(get_rates)) -> PriceBreakdown:
    return calculate_carpet_price(req.to_core(), rates)


@app.post("/pricing/curtain", response_model=PriceBreakdown)
def curtain(req: CurtainRequest = Body(...), rates: PricingRates = Depends(get_rates)) -> PriceBreakdown:
    return calculate_curtain_price(req.to_core(), rates)


# ---- Quotes ----

@app.post("/quotes", response_model=QuoteCreated, status_code=201)
def create_quote(
    req: QuoteCreateRequest = Body(...),
    history: QuoteHistory = Depends(get_history),
) -> QuoteCreated:
    quote = history.create(req.customer, req.items)
    return QuoteCreated(id=quote.id)


@app.get("/quotes", response_model=list[Quote])
def list_quotes(
    status: Optional[QuoteStatus] = None,
    history: QuoteHistory = Depends(get_history),
) -> list[Quote]:
    return history.list(status)


@app.get("/quotes/{quote_id}", response_model=Quote)
def get_quote(quote_id: str, history: QuoteHistory = Depends(get_history)) -> Quote:
    try:
        return history.get(quote_id)
    except QuoteNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.patch("/quotes/{quote_id}/status", response_model=Quote)
def update_status(
    quote_id: str,
    req: StatusUpdate = Body(...),
    history: QuoteHistory = Depends(get_history),
) -> Quote:
    try:
        return history.update_status(quote_id, req.status, req.validated_by)
    except QuoteNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.patch("/quotes/{quote_id}/notes", response_model=Quote)
def update_notes(
    quote_id: str,
    req: NotesUpdate = Body(...),
    history: QuoteHistory = Depends(get_history),
) -> Quote:
    try:
        return history.update_admin_notes(quote_id, req.admin_notes)
    except QuoteNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
