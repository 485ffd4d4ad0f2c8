from __future__ import annotations
import json
import os
import re
from typing import Any, Iterable

def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def write_jsonl(path: str, rows: Iterable[dict[str, Any]]) -> None:
    ensure_dir(os.path.dirname(path) or ".")
    with open(path, "w", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

def normalize_whitespace(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()

def extract_lines(text: str) -> list[str]:
    """Trimmed, non-empty lines in document order."""
    raw = text.replace("\r\n", "\n").replace("\r", "\n")
    return [ln.strip() for ln in raw.split("\n") if ln.strip()]
