# store/history.py
# Quote history as JSON files: one file per quote under data/history/.

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from core.errors import QuoteNotFound
from core.models import CustomerInfo, Quote, QuoteItem, QuoteStatus

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class QuoteHistory:
    """Stores submitted quotes and their review state."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, quote_id: str) -> Path:
        return self.directory / f"{quote_id}.json"

    def _save(self, quote: Quote) -> None:
        self._path(quote.id).write_text(quote.model_dump_json(indent=2), encoding="utf-8")

    def create(self, customer: CustomerInfo, items: list[QuoteItem]) -> Quote:
        """Assign id and timestamps; the total is the sum of item subtotals."""
        created_at = _now()
        quote = Quote(
            id=uuid.uuid4().hex,
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_email=customer.email,
            customer_address=customer.address,
            notes=customer.notes,
            total_amount=sum(item.subtotal for item in items),
            items=items,
            created_at=created_at,
            updated_at=created_at,
        )
        self._save(quote)
        logger.info("Quote %s created for %s (%d FCFA)", quote.id, quote.customer_name, quote.total_amount)
        return quote

    def get(self, quote_id: str) -> Quote:
        path = self._path(quote_id)
        # ids are uuid hex; anything with a path separator cannot be ours
        if Path(quote_id).name != quote_id or not path.exists():
            raise QuoteNotFound(quote_id)
        return Quote.model_validate_json(path.read_text(encoding="utf-8"))

    def list(self, status: Optional[QuoteStatus] = None) -> list[Quote]:
        """All quotes, newest first, optionally filtered by status."""
        quotes = []
        for p in self.directory.glob("*.json"):
            try:
                quotes.append(Quote.model_validate_json(p.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError, ValidationError) as e:
                logger.warning("Skipping unreadable quote file %s: %s", p.name, e)
        if status is not None:
            quotes = [q for q in quotes if q.status == status]
        return sorted(quotes, key=lambda q: q.created_at, reverse=True)

    def update_status(self, quote_id: str, status: QuoteStatus, validated_by: Optional[str] = None) -> Quote:
        quote = self.get(quote_id)
        now = _now()
        changes: dict = {"status": status, "updated_at": now}
        if status == "validated" and validated_by:
            changes["validated_at"] = now
            changes["validated_by"] = validated_by
        quote = quote.model_copy(update=changes)
        self._save(quote)
        logger.info("Quote %s -> %s", quote_id, status)
        return quote

    def update_admin_notes(self, quote_id: str, admin_notes: str) -> Quote:
        quote = self.get(quote_id).model_copy(update={"admin_notes": admin_notes, "updated_at": _now()})
        self._save(quote)
        return quote
