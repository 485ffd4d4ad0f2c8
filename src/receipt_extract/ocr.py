from __future__ import annotations
from dataclasses import dataclass
from typing import Any
import cv2
import pytesseract
from pytesseract import Output
from PIL import Image, UnidentifiedImageError
from loguru import logger

from .config import Settings
from .errors import OCRError
from .preprocess import preprocess_pil
from .utils import normalize_whitespace

@dataclass
class OCRLine:
    text: str
    conf: float  # 0..1, mean over words

@dataclass
class OCRResult:
    full_text: str
    lines: list[OCRLine]
    avg_conf: float

def run_tesseract(img: Image.Image, lang: str = "eng") -> OCRResult:
    data: dict[str, Any] = pytesseract.image_to_data(img, lang=lang, output_type=Output.DICT)

    # Words keyed by tesseract's (block, paragraph, line) so the text keeps
    # one receipt line per output line; the merchant heuristic relies on it.
    grouped: dict[tuple[int, int, int], list[tuple[str, float]]] = {}
    confs: list[float] = []

    n = len(data.get("text", []))
    for i in range(n):
        txt = (data["text"][i] or "").strip()
        if not txt:
            continue

        # tesseract conf is often string; -1 for non-words
        try:
            c = float(data["conf"][i])
        except (TypeError, ValueError):
            c = -1.0
        if c < 0:
            continue
        c01 = max(0.0, min(1.0, c / 100.0))

        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        grouped.setdefault(key, []).append((txt, c01))
        confs.append(c01)

    lines: list[OCRLine] = []
    for key in sorted(grouped):
        words = grouped[key]
        text = normalize_whitespace(" ".join(w for w, _ in words))
        lines.append(OCRLine(text=text, conf=sum(c for _, c in words) / len(words)))

    full_text = "\n".join(ln.text for ln in lines)
    avg_conf = sum(confs) / len(confs) if confs else 0.0
    return OCRResult(full_text=full_text, lines=lines, avg_conf=avg_conf)

def _load_image(source: str | Image.Image) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    try:
        with Image.open(source) as im:
            im.load()
            return im.copy()
    except (UnidentifiedImageError, OSError) as e:
        raise OCRError(str(source), f"cannot open image ({e})") from e

def recognize(source: str | Image.Image, settings: Settings) -> OCRResult:
    """
    Image -> text. An image with no readable text gives an empty full_text,
    which is a valid result; backend failures raise OCRError.
    """
    name = source if isinstance(source, str) else "<image>"
    img = _load_image(source)

    if settings.tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd

    try:
        pre = preprocess_pil(
            img,
            max_width=settings.max_width,
            min_width=settings.min_width,
            do_threshold=settings.do_threshold,
        )
        result = run_tesseract(pre, lang=settings.ocr_lang)
    except cv2.error as e:
        raise OCRError(name, f"preprocessing failed ({e})") from e
    except pytesseract.TesseractNotFoundError as e:
        raise OCRError(name, "tesseract binary not found; install it or set TESSERACT_CMD") from e
    except pytesseract.TesseractError as e:
        raise OCRError(name, f"tesseract failed ({e.message})") from e

    logger.debug(f"OCR {name}: {len(result.lines)} lines, avg_conf={result.avg_conf:.3f}")
    return result
