from __future__ import annotations
import re
from .base import Extraction

UNKNOWN_DATE = "Unknown Date"

# Alternatives are tried in order at each position, so at the same start the
# mixed-separator shape (DD/MM/YY, MM-DD-YYYY, 1.2/24) beats ISO (YYYY-MM-DD).
# The leftmost match still wins overall. ASCII digits only.
DATE_RE = re.compile(r"(\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4})|(\d{4}-\d{2}-\d{2})", re.ASCII)

def extract_date(text: str) -> Extraction:
    m = DATE_RE.search(text)
    if not m:
        return Extraction.missing("date", "date_not_found")
    # verbatim, no calendar validation
    reason = "date_mixed_separator_match" if m.group(1) is not None else "date_iso_match"
    return Extraction("date", m.group(0), "rule", m.group(0), (reason,))
