from __future__ import annotations
import math
import re
from datetime import date
from dateutil import parser as dateparser

def normalize_date_iso(d: date) -> str:
    return d.isoformat()

def parse_amount(s: str) -> float | None:
    # US-style receipt amounts: 1,234.56
    s = re.sub(r"\s+", "", s.strip()).replace(",", "")
    try:
        val = float(s)
    except ValueError:
        return None
    if not math.isfinite(val) or val < 0:
        return None
    return round(val, 2)

def parse_receipt_date(raw: str, dayfirst: bool = False) -> date | None:
    """
    Interpret a verbatim date token as a calendar date.

    Only a convenience for callers: the extracted token itself is never
    rewritten. Returns None for tokens that are not real dates (31/02/2024).
    """
    try:
        dt = dateparser.parse(raw, dayfirst=dayfirst)
    except (ValueError, OverflowError):
        return None
    if not dt:
        return None
    return dt.date()
