"""
Canonical fire-detection record.

Both parsers produce FireDetection objects; everything downstream of the
parsers works on this shape only.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class FireDetection:
    """
    Standardized representation of a single active-fire detection.

    This is the common format all parsers should produce.
    """
    # Required fields
    latitude: float             # WGS84
    longitude: float            # WGS84
    acq_date: str               # YYYY-MM-DD (UTC)
    acq_time: str               # HHMM, zero padded
    acq_datetime: str           # ISO-8601 UTC, e.g. 2024-01-01T01:30:00Z
    satellite: str              # Canonical satellite label

    # Measurements
    brightness: float = 0.0     # Kelvin, primary channel
    brightness2: float = 0.0    # Kelvin, secondary channel
    scan: float = 0.0
    track: float = 0.0
    confidence: int = 0         # 0..100
    frp: float = 0.0            # MW
    daynight: str = "Day"
    version: str = ""

    # Key of the source that produced this record
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Plain dict view of the record."""
        return asdict(self)
