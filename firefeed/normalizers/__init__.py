"""
Record normalization utilities.

These modules map source-specific encodings (satellite names, confidence
codes, day/night flags, acquisition times) onto the canonical vocabulary.
Both parsers consult them inline.
"""

from typing import Optional

from .confidence import normalize_confidence, normalize_confidence_text
from .dates import canonical_timestamp, pad_time, parse_acquisition, parse_timestamp, utc_now
from .satellite import Satellite, lookup_satellite, normalize_satellite, satellite_from_sensor


def normalize_daynight(value: Optional[str]) -> str:
    """Map D/N codes and Day/Night words to "Day" or "Night"; default Day."""
    if value and value.strip().lower() in ("n", "night"):
        return "Night"
    return "Day"


__all__ = [
    'Satellite',
    'lookup_satellite',
    'normalize_satellite',
    'satellite_from_sensor',
    'normalize_confidence',
    'normalize_confidence_text',
    'normalize_daynight',
    'pad_time',
    'parse_acquisition',
    'parse_timestamp',
    'canonical_timestamp',
    'utc_now',
]
