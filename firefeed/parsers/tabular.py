"""
Tabular (CSV) record parser.

Handles the area API and WFS query-service CSV payloads. Column sets vary
by product: VIIRS carries bright_ti4/bright_ti5, MODIS carries
brightness/bright_t31, and the WFS service uses brightness_2.
"""

import csv
import math
from io import StringIO
from typing import Optional

from loguru import logger

from firefeed.models import FireDetection
from firefeed.normalizers import (
    canonical_timestamp,
    normalize_confidence,
    normalize_daynight,
    normalize_satellite,
    pad_time,
    parse_acquisition,
    parse_timestamp,
    utc_now,
)
from firefeed.utils.geo import is_valid_coordinates

# Sensor-specific channel names mapped onto canonical columns
COLUMN_ALIASES = {
    "bright_ti4": "brightness",
    "bright_ti5": "brightness2",
    "bright_t31": "brightness2",
    "brightness_2": "brightness2",
    "lat": "latitude",
    "lon": "longitude",
}

FLOAT_COLUMNS = ("latitude", "longitude", "brightness", "scan", "track", "brightness2", "frp")


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _canonical_header(name: str) -> str:
    name = name.strip().lower()
    return COLUMN_ALIASES.get(name, name)


def parse_row(row: dict[str, str], source: str) -> Optional[FireDetection]:
    """
    Build a FireDetection from one header-keyed CSV row.

    Returns None when latitude or longitude is missing or invalid.
    """
    values = {key: _to_float(row.get(key)) for key in FLOAT_COLUMNS}

    lat = values["latitude"]
    lon = values["longitude"]
    if not is_valid_coordinates(lat, lon):
        return None

    brightness = values["brightness"] if values["brightness"] is not None else 0.0
    brightness2 = values["brightness2"] if values["brightness2"] is not None else brightness

    acq_date = (row.get("acq_date") or "").strip()
    acq_time = pad_time(row.get("acq_time"))

    acquired = parse_acquisition(acq_date, acq_time) or parse_timestamp(row.get("acq_datetime"))
    if acquired is None:
        logger.debug(f"No usable acquisition time for {lat},{lon} from {source}; using now")
        acquired = utc_now()
    if not acq_date or acq_time is None:
        acq_date = acquired.strftime("%Y-%m-%d")
        acq_time = acquired.strftime("%H%M")

    return FireDetection(
        latitude=lat,
        longitude=lon,
        acq_date=acq_date,
        acq_time=acq_time,
        acq_datetime=canonical_timestamp(acquired),
        satellite=normalize_satellite(source, row.get("satellite")),
        brightness=brightness,
        brightness2=brightness2,
        scan=values["scan"] or 0.0,
        track=values["track"] or 0.0,
        confidence=normalize_confidence(row.get("confidence")),
        frp=values["frp"] if values["frp"] is not None else 0.0,
        daynight=normalize_daynight(row.get("daynight")),
        version=(row.get("version") or "").strip(),
        source=source,
    )


def parse_csv(text: str, source: str) -> list[FireDetection]:
    """
    Parse a CSV payload into fire detections.

    The first line is the header. Rows whose field count differs from the
    header are skipped, as are rows without valid coordinates.

    Args:
        text: Decoded CSV text
        source: Source identifier used for satellite-name mapping

    Returns:
        List of FireDetection objects (possibly empty)
    """
    lines = (text or "").lstrip("\ufeff").strip().splitlines()
    if len(lines) < 2:
        return []

    reader = csv.reader(StringIO("\n".join(lines)))
    headers = [_canonical_header(h) for h in next(reader)]

    detections = []
    skipped = 0

    for values in reader:
        if len(values) != len(headers):
            skipped += 1
            continue

        row = {header: value.strip() for header, value in zip(headers, values)}
        detection = parse_row(row, source)
        if detection is None:
            skipped += 1
            continue
        detections.append(detection)

    if skipped:
        logger.debug(f"{source}: skipped {skipped} unusable rows")

    return detections
