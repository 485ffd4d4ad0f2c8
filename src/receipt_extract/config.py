from __future__ import annotations
from dataclasses import dataclass
import os

from .extractors.totals import TotalStrategy, check_strategy

TARGET_FIELDS = ["merchant", "total", "date"]

@dataclass(frozen=True)
class Settings:
    output_path: str = "outputs/receipts.jsonl"
    debug_dir: str = "outputs/debug"
    save_debug: bool = False
    log_level: str = "INFO"

    # OCR / preprocess
    ocr_lang: str = "eng"
    tesseract_cmd: str | None = None
    max_width: int = 1600
    min_width: int = 800
    do_threshold: bool = False

    # Extraction
    total_strategy: TotalStrategy = "first"
    date_dayfirst: bool = False

def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None

def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip() == "1"

def load_settings() -> Settings:
    max_width = _env_int("MAX_WIDTH", 1600)
    min_width = _env_int("MIN_WIDTH", 800)
    if min_width > max_width:
        raise ValueError(f"MIN_WIDTH ({min_width}) must not exceed MAX_WIDTH ({max_width}).")

    return Settings(
        output_path=os.getenv("OUTPUT_PATH", "outputs/receipts.jsonl").strip(),
        debug_dir=os.getenv("DEBUG_DIR", "outputs/debug").strip(),
        save_debug=_env_flag("SAVE_DEBUG"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        ocr_lang=os.getenv("OCR_LANG", "eng").strip(),
        tesseract_cmd=os.getenv("TESSERACT_CMD", "").strip() or None,
        max_width=max_width,
        min_width=min_width,
        do_threshold=_env_flag("DO_THRESHOLD"),
        total_strategy=check_strategy(os.getenv("TOTAL_STRATEGY", "first").strip().lower()),
        date_dayfirst=_env_flag("DATE_DAYFIRST"),
    )
