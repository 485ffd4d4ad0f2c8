from __future__ import annotations
import numpy as np
import cv2
from PIL import Image

def preprocess_pil(
    img: Image.Image,
    max_width: int = 1600,
    min_width: int = 800,
    do_threshold: bool = False,
) -> Image.Image:
    """Grayscale, size-normalize and denoise a receipt photo for Tesseract."""
    gray = cv2.cvtColor(np.array(img.convert("RGB")), cv2.COLOR_RGB2GRAY)

    # Phone photos are large; cropped receipt scans are often too small for
    # Tesseract to read thermal-print glyphs.
    h, w = gray.shape[:2]
    if w > max_width:
        scale = max_width / float(w)
        gray = cv2.resize(gray, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA)
    elif 0 < w < min_width:
        scale = min_width / float(w)
        gray = cv2.resize(gray, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_CUBIC)

    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)

    if do_threshold:
        # receipts are mostly uniform paper, a global Otsu split works well
        _, gray = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

    return Image.fromarray(gray)
