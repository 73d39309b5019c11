"""
KML (markup) record parser.

Fire footprint KML documents hold two placemarks per detection: the
footprint polygon and a "Detection Centroid" point. Only centroids are
read. Detection attributes are not structured; they sit as label/value
pairs inside the HTML description of each placemark, so they are pulled
out with regular expressions.
"""

import html
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Optional

from loguru import logger

from firefeed.config import BoundingBox
from firefeed.models import FireDetection
from firefeed.normalizers import (
    canonical_timestamp,
    normalize_confidence_text,
    normalize_daynight,
    normalize_satellite,
    satellite_from_sensor,
    utc_now,
)
from firefeed.utils.geo import is_valid_coordinates, parse_kml_coordinates

CENTROID_MARKER = "detection centroid"

# Default acquisition time when a description carries no timestamp
DEFAULT_ACQ_TIME = "1200"

_FLAGS = re.IGNORECASE | re.MULTILINE
_NUMBER = r"(-?\d+(?:\.\d+)?)"

DATETIME_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})[ T]+(\d{1,2}):?(\d{2})", _FLAGS)
DATE_PATTERN = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b", _FLAGS)
TIME_PATTERN = re.compile(r"^\s*[^:\n]*\btime\b[^:\n]*:\s*(\d{1,2}):?(\d{2})\b", _FLAGS)
SENSOR_PATTERN = re.compile(r"^\s*(?:sensor|satellite|instrument)\s*:\s*(.+?)\s*$", _FLAGS)
CONFIDENCE_PATTERN = re.compile(r"^\s*confidence[^:\n]*:\s*(\d+(?:\.\d+)?\s*%?|[a-z]+)", _FLAGS)
FRP_PATTERN = re.compile(r"^\s*(?:frp|fire radiative power)[^:\n]*:\s*" + _NUMBER, _FLAGS)
BRIGHTNESS_PATTERN = re.compile(r"^\s*bright(?:ness)?[^:\n]*:\s*" + _NUMBER, _FLAGS)
DAYNIGHT_PATTERN = re.compile(r"^\s*day\s*/?\s*night[^:\n]*:\s*(day|night|d|n)\b", _FLAGS)
SCAN_TRACK_PATTERN = re.compile(r"^\s*scan\s*/\s*track[^:\n]*:\s*" + _NUMBER + r"\s*/\s*" + _NUMBER, _FLAGS)
SCAN_PATTERN = re.compile(r"^\s*scan[^:\n/]*:\s*" + _NUMBER, _FLAGS)
TRACK_PATTERN = re.compile(r"^\s*track[^:\n]*:\s*" + _NUMBER, _FLAGS)


class MarkupParseError(Exception):
    """Raised when a markup document is not well-formed XML."""
    pass


@dataclass
class MarkupFields:
    """Fields captured from a placemark description. None means absent."""
    acq_date: Optional[str] = None
    acq_time: Optional[str] = None
    sensor: Optional[str] = None
    confidence: Optional[str] = None
    frp: Optional[float] = None
    brightness: Optional[float] = None
    daynight: Optional[str] = None
    scan: Optional[float] = None
    track: Optional[float] = None


def description_to_text(description: str) -> str:
    """Flatten an HTML description to one "label: value" pair per line."""
    text = re.sub(r"</t[dh]>\s*<t[dh][^>]*>", ": ", description, flags=re.IGNORECASE)
    text = re.sub(r"<br\s*/?>|</tr>|</p>|</div>|</li>", "\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = html.unescape(text)
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


def _search_float(pattern: re.Pattern, text: str) -> Optional[float]:
    match = pattern.search(text)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def _clock(hour: str, minute: str) -> Optional[str]:
    h, m = int(hour), int(minute)
    if h > 23 or m > 59:
        return None
    return f"{h:02d}{m:02d}"


def extract_fields(description: Optional[str]) -> MarkupFields:
    """
    Pull detection attributes out of a placemark description.

    Args:
        description: Raw (possibly HTML) description text

    Returns:
        MarkupFields with every field that could be found
    """
    fields = MarkupFields()
    if not description:
        return fields

    text = description_to_text(description)

    match = DATETIME_PATTERN.search(text)
    if match:
        fields.acq_date = match.group(1)
        fields.acq_time = _clock(match.group(2), match.group(3))
    else:
        date_match = DATE_PATTERN.search(text)
        time_match = TIME_PATTERN.search(text)
        if date_match and time_match:
            fields.acq_date = date_match.group(1)
            fields.acq_time = _clock(time_match.group(1), time_match.group(2))

    # A date without a usable clock time is treated as no timestamp
    if fields.acq_time is None:
        fields.acq_date = None
    elif fields.acq_date is not None:
        try:
            date.fromisoformat(fields.acq_date)
        except ValueError:
            fields.acq_date = None
            fields.acq_time = None

    match = SENSOR_PATTERN.search(text)
    if match:
        fields.sensor = match.group(1)

    match = CONFIDENCE_PATTERN.search(text)
    if match:
        fields.confidence = match.group(1)

    match = DAYNIGHT_PATTERN.search(text)
    if match:
        fields.daynight = match.group(1)

    fields.frp = _search_float(FRP_PATTERN, text)
    fields.brightness = _search_float(BRIGHTNESS_PATTERN, text)

    match = SCAN_TRACK_PATTERN.search(text)
    if match:
        fields.scan = float(match.group(1))
        fields.track = float(match.group(2))
    else:
        fields.scan = _search_float(SCAN_PATTERN, text)
        fields.track = _search_float(TRACK_PATTERN, text)

    return fields


def _child_text(elem: ET.Element, tag: str) -> Optional[str]:
    # Match on local name so namespaced and bare KML both work
    for child in elem.iter():
        if child.tag.endswith(tag):
            return child.text
    return None


def build_detection(
    fields: MarkupFields,
    lat: float,
    lon: float,
    source: str,
    today: date,
) -> FireDetection:
    """Apply markup defaults to extracted fields and build the record."""
    acq_date = fields.acq_date or today.isoformat()
    acq_time = fields.acq_time or DEFAULT_ACQ_TIME

    acquired = datetime.combine(
        date.fromisoformat(acq_date),
        time(int(acq_time[:2]), int(acq_time[2:])),
        tzinfo=timezone.utc,
    )

    sensor_match = satellite_from_sensor(fields.sensor)
    satellite = sensor_match.value if sensor_match else normalize_satellite(source)

    brightness = fields.brightness if fields.brightness is not None else 0.0

    return FireDetection(
        latitude=lat,
        longitude=lon,
        acq_date=acq_date,
        acq_time=acq_time,
        acq_datetime=canonical_timestamp(acquired),
        satellite=satellite,
        brightness=brightness,
        brightness2=brightness,
        scan=fields.scan if fields.scan is not None else 0.0,
        track=fields.track if fields.track is not None else 0.0,
        confidence=normalize_confidence_text(fields.confidence),
        frp=fields.frp if fields.frp is not None else 0.0,
        daynight=normalize_daynight(fields.daynight),
        source=source,
    )


def parse_kml(
    document: str,
    source: str,
    region: Optional[BoundingBox] = None,
    today: Optional[date] = None,
) -> list[FireDetection]:
    """
    Parse detection centroids out of a KML document.

    Args:
        document: KML text
        source: Source label used when the sensor text is not recognized
        region: Placemarks outside this box are skipped
        today: Date used when a description has no timestamp (UTC today by default)

    Returns:
        List of FireDetection objects

    Raises:
        MarkupParseError: If the document is not well-formed XML
    """
    if not document or not document.strip():
        return []

    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise MarkupParseError(f"Malformed KML from {source}: {e}") from e

    today = today or utc_now().date()
    detections = []
    outside = 0

    for placemark in root.iter():
        if not placemark.tag.endswith("Placemark"):
            continue

        name = _child_text(placemark, "name") or ""
        if CENTROID_MARKER not in name.lower():
            continue

        lon, lat = parse_kml_coordinates(_child_text(placemark, "coordinates"))
        if not is_valid_coordinates(lat, lon):
            continue
        if region is not None and not region.contains(lat, lon):
            outside += 1
            continue

        fields = extract_fields(_child_text(placemark, "description"))
        detections.append(build_detection(fields, lat, lon, source, today))

    if outside:
        logger.debug(f"{source}: {outside} centroids outside the configured region")

    return detections
