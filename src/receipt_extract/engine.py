from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidInputError
from .extractors import (
    extract_merchant,
    extract_total,
    extract_date,
    TotalStrategy,
    UNKNOWN_MERCHANT,
    UNKNOWN_DATE,
)
from .extractors.base import Extraction


@dataclass(frozen=True)
class ExtractionResult:
    merchant: str
    total: float
    date: str
    details: tuple[Extraction, ...] = ()

    def _detail(self, field: str) -> Extraction | None:
        for e in self.details:
            if e.field == field:
                return e
        return None

    @property
    def merchant_resolved(self) -> bool:
        e = self._detail("merchant")
        return e is not None and e.resolved

    @property
    def total_resolved(self) -> bool:
        # separates "no total found" from a printed total of 0.00
        e = self._detail("total")
        return e is not None and e.resolved

    @property
    def date_resolved(self) -> bool:
        e = self._detail("date")
        return e is not None and e.resolved

    def to_dict(self) -> dict[str, Any]:
        return {
            "merchant": self.merchant,
            "total": self.total,
            "total_resolved": self.total_resolved,
            "date": self.date,
            "details": {
                e.field: {
                    "value": e.value,
                    "method": e.method,
                    "evidence": e.evidence,
                    "reasons": list(e.reasons),
                }
                for e in self.details
            },
        }

    def __str__(self) -> str:
        return f"merchant: {self.merchant}, total: {self.total:.2f}, date: {self.date}"


def _as_text(raw_text: Any) -> str:
    if isinstance(raw_text, str):
        return raw_text
    if raw_text is None:
        raise InvalidInputError("raw_text is None; short-circuit before extraction when OCR fails.")
    if isinstance(raw_text, (bytes, bytearray)):
        try:
            return bytes(raw_text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInputError(f"raw_text is not valid UTF-8: {e}") from e
    raise InvalidInputError(f"raw_text must be str or UTF-8 bytes, got {type(raw_text).__name__}")


def extract(raw_text: str | bytes, total_strategy: TotalStrategy = "first") -> ExtractionResult:
    """
    Pull merchant, total and date out of raw OCR text.

    Total function over text: a field with no evidence falls back to its
    sentinel ("Unknown Merchant", 0.0, "Unknown Date") and never affects the
    other two. Only non-text input raises InvalidInputError. An unknown
    total_strategy raises ValueError.
    """
    text = _as_text(raw_text)

    merchant = extract_merchant(text)
    total = extract_total(text, strategy=total_strategy)
    date = extract_date(text)

    total_val = 0.0
    if total.value is not None:
        try:
            total_val = float(total.value)
        except ValueError:
            total_val = 0.0

    return ExtractionResult(
        merchant=merchant.value or UNKNOWN_MERCHANT,
        total=total_val,
        date=date.value or UNKNOWN_DATE,
        details=(merchant, total, date),
    )
