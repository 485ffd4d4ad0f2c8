from __future__ import annotations

import re
from typing import Literal, get_args
from .base import Extraction
from ..validate import parse_amount

TotalStrategy = Literal["first", "last", "largest"]
TOTAL_STRATEGIES: tuple[str, ...] = get_args(TotalStrategy)

TOTAL_KEYWORDS = ["TOTAL", "AMOUNT", "BALANCE", "SUBTOTAL"]

# Keyword, any run of non-digits (may cross lines), then an amount with
# exactly two decimals. Thousands commas are allowed in the integer part:
# 12.50 | 1234.56 | 1,234.56 (ASCII digits only)
TOTAL_RE = re.compile(
    r"(" + "|".join(TOTAL_KEYWORDS) + r")[^\d]*(\d{1,3}(?:,\d{3})+\.\d{2}|\d+\.\d{2})",
    re.IGNORECASE | re.ASCII,
)

def check_strategy(strategy: str) -> TotalStrategy:
    if strategy not in TOTAL_STRATEGIES:
        raise ValueError(f"Unknown total strategy {strategy!r}; expected one of {', '.join(TOTAL_STRATEGIES)}.")
    return strategy

def _pick(text: str, strategy: TotalStrategy) -> tuple[re.Match[str] | None, int]:
    if strategy == "first":
        m = TOTAL_RE.search(text)
        return m, (1 if m else 0)

    matches = list(TOTAL_RE.finditer(text))
    if not matches:
        return None, 0
    if strategy == "last":
        return matches[-1], len(matches)

    # largest; ties keep the earliest pair
    best = matches[0]
    best_val = parse_amount(best.group(2))
    for m in matches[1:]:
        val = parse_amount(m.group(2))
        if val is not None and (best_val is None or val > best_val):
            best, best_val = m, val
    return best, len(matches)

def extract_total(text: str, strategy: TotalStrategy = "first") -> Extraction:
    """
    Keyword-anchored total. The default "first" strategy takes the first
    keyword+amount pair in document order, so a SUBTOTAL printed above the
    TOTAL wins. "last" and "largest" are opt-in alternatives.
    """
    check_strategy(strategy)
    m, n = _pick(text, strategy)
    if m is None:
        return Extraction.missing("total", "total_not_found")

    val = parse_amount(m.group(2))
    if val is None:
        return Extraction("total", None, "missing", m.group(0), ("total_keyword_match", "total_parse_failed"))

    reasons = ["total_keyword_match", f"total_strategy_{strategy}", f"total_keyword_{m.group(1).lower()}"]
    if n > 1:
        reasons.append("multiple_total_candidates")
    return Extraction("total", f"{val:.2f}", "rule", m.group(0), tuple(reasons))
