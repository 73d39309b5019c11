"""
Confidence normalization.

Upstream products report confidence either as a percentage (MODIS) or as a
category (VIIRS). Both are mapped onto an integer percentage.
"""

import math
from typing import Optional

# Single-letter codes used in CSV payloads
CONFIDENCE_CODES = {
    "h": 80,
    "n": 60,
    "l": 40,
}

# Words used in KML descriptions
CONFIDENCE_WORDS = {
    "high": 80,
    "nominal": 60,
    "low": 40,
}

# Markup default when confidence is absent or unreadable
DEFAULT_MARKUP_CONFIDENCE = 60


def clamp_confidence(value: float) -> int:
    """Truncate and clamp a confidence value to 0..100."""
    # Never lift a fractional reading over an integer threshold
    return int(min(100, max(0, math.floor(value))))


def _parse_number(value: str) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_confidence(value: Optional[str]) -> int:
    """
    Normalize a CSV confidence cell.

    Numeric strings are used directly; the codes h, n and l map to 80, 60
    and 40; anything else maps to 0.
    """
    if value is None:
        return 0

    value = value.strip()
    number = _parse_number(value)
    if number is not None:
        return clamp_confidence(number)

    return CONFIDENCE_CODES.get(value.lower(), 0)


def normalize_confidence_text(value: Optional[str]) -> int:
    """
    Normalize a confidence phrase taken from a KML description.

    Accepts "75", "75%", "high", "nominal", "low" and the single-letter
    codes. Returns 60 when nothing usable is found.
    """
    if not value:
        return DEFAULT_MARKUP_CONFIDENCE

    value = value.strip().rstrip("%").strip()
    number = _parse_number(value)
    if number is not None:
        return clamp_confidence(number)

    lowered = value.lower()
    if lowered in CONFIDENCE_WORDS:
        return CONFIDENCE_WORDS[lowered]
    if lowered in CONFIDENCE_CODES:
        return CONFIDENCE_CODES[lowered]

    return DEFAULT_MARKUP_CONFIDENCE
