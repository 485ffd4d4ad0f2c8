from __future__ import annotations
from .base import Extraction
from ..utils import extract_lines

UNKNOWN_MERCHANT = "Unknown Merchant"

def extract_merchant(text: str) -> Extraction:
    # receipts print the business name first; no header/logo detection
    lines = extract_lines(text)
    if not lines:
        return Extraction.missing("merchant", "merchant_no_text_lines")
    return Extraction("merchant", lines[0], "rule", lines[0], ("merchant_first_line",))
