"""Numeric helpers shared by the scoring agents."""
import math
from datetime import datetime


SECONDS_PER_DAY = 86400
DAYS_PER_MONTH = 30


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def log_scaled(count: float, saturation: float) -> float:
    """
    Log-scale a count to 0-100 with diminishing returns.

    ``saturation`` is the count that maps to 100.
    """
    if count <= 0:
        return 0.0
    return min(math.log10(count + 1) / math.log10(saturation), 1.0) * 100


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY
