# core/errors.py
# Error taxonomy. Only InvalidDimension aborts a price calculation.

from __future__ import annotations


class QuoteBuilderError(Exception):
    """Base class for all quote builder errors."""


class InvalidDimension(QuoteBuilderError, ValueError):
    """Mattress length above the allowed maximum."""

    def __init__(self, length: float, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Mattress length {length:g} cm exceeds the maximum; "
            f"reduce mattress length to {max_length} cm or below."
        )


class QuoteNotFound(QuoteBuilderError, KeyError):
    """A requested quote does not exist in the history."""

    def __init__(self, quote_id: str) -> None:
        self.quote_id = quote_id
        super().__init__(quote_id)

    def __str__(self) -> str:
        return f"Quote '{self.quote_id}' not found"
