"""Geographic utility functions for the pipeline."""

import math


def is_valid_coordinates(lat: float, lon: float) -> bool:
    """Check if latitude and longitude are finite and in range.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid, False otherwise
    """
    if lat is None or lon is None:
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def parse_kml_coordinates(text: str) -> tuple[float | None, float | None]:
    """Parse a KML "lon,lat[,alt]" coordinate string.

    Only the first tuple is read when the string holds several.

    Returns:
        Tuple of (longitude, latitude) or (None, None) if parsing fails
    """
    if not text or not isinstance(text, str):
        return None, None

    first = text.strip().split()[0] if text.strip() else ""
    parts = first.split(",")
    if len(parts) < 2:
        return None, None

    try:
        lon = float(parts[0])
        lat = float(parts[1])
    except ValueError:
        return None, None

    return lon, lat
