from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

from loguru import logger

from .config import load_settings, Settings, TARGET_FIELDS
from .engine import extract
from .errors import OCRError
from .evaluate import evaluate_one
from .ocr import recognize
from .utils import ensure_dir, write_jsonl
from .validate import parse_receipt_date, normalize_date_iso


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Extract merchant, total and date from receipt images or OCR text files")
    p.add_argument("paths", nargs="+", help="Receipt images, or .txt files holding already-recognized text")
    p.add_argument("--labels", "-l", type=str, help="JSON object of ground truth keyed by receipt id (file stem)")
    return p


def _receipt_id(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _load_labels(path: str | None) -> dict[str, dict[str, Any]]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: labels must be a JSON object keyed by receipt id")
    return {str(k): v for k, v in data.items() if isinstance(v, dict)}


def _read_raw_text(path: str, settings: Settings) -> str:
    # pre-recognized text skips OCR entirely
    if path.lower().endswith(".txt"):
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise OCRError(path, f"cannot read text file ({e})") from e
    return recognize(path, settings).full_text


def process_receipt(path: str, settings: Settings) -> dict[str, Any]:
    receipt_id = _receipt_id(path)
    try:
        text = _read_raw_text(path, settings)
    except OCRError as e:
        logger.error(f"Skipping {receipt_id}: {e}")
        return {"receipt_id": receipt_id, "source": path, "error": str(e)}

    if settings.save_debug:
        ensure_dir(settings.debug_dir)
        with open(os.path.join(settings.debug_dir, f"{receipt_id}_ocr.txt"), "w", encoding="utf-8") as f:
            f.write(text)

    result = extract(text, total_strategy=settings.total_strategy)
    parsed = parse_receipt_date(result.date, dayfirst=settings.date_dayfirst) if result.date_resolved else None

    unresolved = [f for f, ok in (
        ("merchant", result.merchant_resolved),
        ("total", result.total_resolved),
        ("date", result.date_resolved),
    ) if not ok]
    if unresolved:
        logger.warning(f"{receipt_id}: unresolved fields {', '.join(unresolved)}")
    logger.info(f"{receipt_id}: {result}")

    row = {"receipt_id": receipt_id, "source": path}
    row.update(result.to_dict())
    row["date_iso"] = normalize_date_iso(parsed) if parsed else None
    return row


def main(argv: list[str] | None = None) -> None:
    args = build_arg_parser().parse_args(argv)
    settings = load_settings()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    paths: list[str] = args.paths
    labels = _load_labels(args.labels)

    outputs: list[dict[str, Any]] = []
    eval_rows_all: list[dict[str, Any]] = []

    for path in paths:
        out = process_receipt(path, settings)
        outputs.append(out)

        gt = labels.get(out["receipt_id"])
        if gt and "error" not in out:
            gt = {k: gt.get(k) for k in TARGET_FIELDS if k in gt}
            for r in evaluate_one(out, gt):
                eval_rows_all.append({
                    "receipt_id": out["receipt_id"],
                    "field": r.field,
                    "ok": r.ok,
                    "score": r.score,
                })

    write_jsonl(settings.output_path, outputs)
    failed = sum(1 for o in outputs if "error" in o)
    logger.info(f"Wrote {len(outputs)} rows to {settings.output_path} ({failed} failed)")

    if eval_rows_all:
        eval_path = os.path.join(os.path.dirname(settings.output_path) or ".", "eval_rows.jsonl")
        write_jsonl(eval_path, eval_rows_all)

        ok_count = sum(1 for r in eval_rows_all if r["ok"])
        total = len(eval_rows_all)
        logger.info(f"[EVAL] rows={total} ok={ok_count} acc={ok_count/total:.3f}")
        for field in TARGET_FIELDS:
            rows = [r for r in eval_rows_all if r["field"] == field]
            if rows:
                acc = sum(1 for r in rows if r["ok"]) / len(rows)
                logger.info(f"[EVAL] {field}: n={len(rows)} acc={acc:.3f}")


if __name__ == "__main__":
    main()
