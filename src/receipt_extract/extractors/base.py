from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

Method = Literal["rule", "missing"]

@dataclass(frozen=True)
class Extraction:
    field: str
    value: str | None
    method: Method
    evidence: str | None
    reasons: tuple[str, ...]

    @property
    def resolved(self) -> bool:
        return self.method != "missing"

    @classmethod
    def missing(cls, field: str, *reasons: str) -> "Extraction":
        return cls(field, None, "missing", None, reasons)
