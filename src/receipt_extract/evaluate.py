from __future__ import annotations
from dataclasses import dataclass
from typing import Any
from rapidfuzz import fuzz

from .utils import normalize_whitespace

def _norm(s: str) -> str:
    return "".join(ch.lower() for ch in s.strip() if ch.isalnum() or ch.isspace())

def fuzzy_score(pred: str, gt: str) -> float:
    return fuzz.token_set_ratio(_norm(pred), _norm(gt)) / 100.0

def amount_close(pred: Any, gt: Any, tol: float = 0.01) -> bool:
    try:
        p = float(str(pred).replace(",", "").lstrip("$"))
        g = float(str(gt).replace(",", "").lstrip("$"))
    except ValueError:
        return False
    return abs(p - g) <= tol

@dataclass
class EvalRow:
    field: str
    ok: bool
    score: float

def evaluate_one(pred: dict[str, Any], gt_fields: dict[str, Any]) -> list[EvalRow]:
    """Score one extraction dict against ground-truth merchant/total/date."""
    rows: list[EvalRow] = []
    for field, gt in gt_fields.items():
        if gt is None or gt == "":
            continue
        if field not in ("merchant", "total", "date"):
            continue
        value = pred.get(field)

        if field == "total":
            # an unresolved total is a miss even if the label is 0.00
            ok = bool(pred.get("total_resolved", True)) and amount_close(value, gt)
            rows.append(EvalRow(field, ok, 1.0 if ok else 0.0))
        elif field == "date":
            ok = value is not None and normalize_whitespace(str(value)) == normalize_whitespace(str(gt))
            rows.append(EvalRow(field, ok, 1.0 if ok else 0.0))
        else:
            score = fuzzy_score(str(value or ""), str(gt))
            ok = score >= 0.85
            rows.append(EvalRow(field, ok, score))
    return rows
