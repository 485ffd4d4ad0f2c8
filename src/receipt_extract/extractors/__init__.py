from .merchant import extract_merchant, UNKNOWN_MERCHANT
from .dates import extract_date, UNKNOWN_DATE
from .totals import extract_total, TotalStrategy, TOTAL_STRATEGIES

__all__ = [
    "extract_merchant",
    "extract_date",
    "extract_total",
    "TotalStrategy",
    "TOTAL_STRATEGIES",
    "UNKNOWN_MERCHANT",
    "UNKNOWN_DATE",
]
