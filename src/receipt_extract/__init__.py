from .engine import extract, ExtractionResult
from .errors import InvalidInputError, OCRError
from .extractors import UNKNOWN_MERCHANT, UNKNOWN_DATE, TOTAL_STRATEGIES

__all__ = [
    "extract",
    "ExtractionResult",
    "InvalidInputError",
    "OCRError",
    "UNKNOWN_MERCHANT",
    "UNKNOWN_DATE",
    "TOTAL_STRATEGIES",
]
