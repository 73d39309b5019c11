"""
Filtering and GeoJSON feature assembly.

Turns deduplicated detections into the FeatureCollection handed to the
submission sink.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from loguru import logger

from firefeed.models import FireDetection
from firefeed.normalizers import parse_acquisition, parse_timestamp, utc_now

FIRE_ICON = "bb4df0a6-ca8d-4ba8-bb9e-3deb97ff015e:Incidents/INC.35.Fire.png"
FEATURE_TYPE = "a-f-X-i"

# (upper bound in hours, label); the last label also covers anything older
RECENCY_BUCKETS = (
    (1, "< 1"),
    (3, "1-3"),
    (6, "3-6"),
    (12, "6-12"),
)
OLDEST_BUCKET = "12-24"


def passes_thresholds(record: FireDetection, min_confidence: float, min_frp: float) -> bool:
    """Both thresholds are inclusive."""
    return record.confidence >= min_confidence and record.frp >= min_frp


def feature_id(record: FireDetection) -> str:
    return f"{record.satellite}_{record.acq_date}_{record.acq_time}_{record.latitude}_{record.longitude}"


def acquisition_time(record: FireDetection) -> datetime:
    """
    Canonical UTC acquisition time of a record.

    Raises:
        ValueError: If neither date/time nor acq_datetime can be parsed
    """
    acquired = parse_acquisition(record.acq_date, record.acq_time) or parse_timestamp(record.acq_datetime)
    if acquired is None:
        raise ValueError(f"Unparseable acquisition time {record.acq_date!r} {record.acq_time!r}")
    return acquired


def recency_bucket(acquired: datetime, now: datetime) -> str:
    """
    Bucket the age of a detection in hours.

    Intervals are half-open: [0,1) "< 1", [1,3) "1-3", [3,6) "3-6",
    [6,12) "6-12", and everything from 12 hours on is "12-24", including
    detections older than a day. Timestamps in the future count as "< 1".
    """
    hours = (now - acquired).total_seconds() / 3600
    for upper, label in RECENCY_BUCKETS:
        if hours < upper:
            return label
    return OLDEST_BUCKET


def build_remarks(
    record: FireDetection,
    acquired: datetime,
    local_tz: ZoneInfo,
    recency: Optional[str] = None,
) -> str:
    """Human-readable multi-line summary of a detection."""
    local = acquired.astimezone(local_tz)

    lines = [f"Satellite: {record.satellite}"]
    if recency is not None:
        lines.append(f"Detected: {recency} hours ago")
    lines.extend([
        f"Acquisition (UTC): {acquired.strftime('%Y-%m-%d %H:%M')}",
        f"Acquisition ({local.strftime('%Z')}): {local.strftime('%Y-%m-%d %H:%M')}",
        f"Confidence: {record.confidence}%",
        f"Brightness temperature: {record.brightness} K",
        f"Fire Radiative Power (FRP): {record.frp} MW",
    ])
    return "\n".join(lines)


def build_feature(
    record: FireDetection,
    now: datetime,
    local_tz: ZoneInfo,
    include_recency: bool = True,
) -> dict[str, Any]:
    """
    Build one GeoJSON point feature.

    Raises:
        ValueError: If the record has no usable acquisition time
    """
    acquired = acquisition_time(record)
    timestamp = acquired.strftime("%Y-%m-%dT%H:%M:%SZ")
    recency = recency_bucket(acquired, now) if include_recency else None

    metadata = {
        "satellite": record.satellite,
        "acq_date": record.acq_date,
        "acq_time": record.acq_time,
        "acq_datetime": timestamp,
        "latitude": record.latitude,
        "longitude": record.longitude,
        "brightness": record.brightness,
        "brightness_2": record.brightness2,
        "scan": record.scan,
        "track": record.track,
        "confidence": record.confidence,
        "frp": record.frp,
        "daynight": record.daynight,
        "version": record.version,
    }
    if recency is not None:
        metadata["hours_since_detection"] = recency

    return {
        "id": feature_id(record),
        "type": "Feature",
        "properties": {
            "callsign": f"FIRMS Detection - FRP: {record.frp}",
            "type": FEATURE_TYPE,
            "icon": FIRE_ICON,
            "time": timestamp,
            "start": timestamp,
            "metadata": metadata,
            "remarks": build_remarks(record, acquired, local_tz, recency),
            "archived": False,
        },
        "geometry": {
            "type": "Point",
            "coordinates": [record.longitude, record.latitude],
        },
    }


def build_feature_collection(
    records: Iterable[FireDetection],
    min_confidence: float,
    min_frp: float,
    now: Optional[datetime] = None,
    local_timezone: str = "Pacific/Auckland",
    include_recency: bool = True,
) -> dict[str, Any]:
    """
    Filter records and assemble the output FeatureCollection.

    A record that fails during feature construction is logged and skipped;
    the remaining records are still emitted.

    Args:
        records: Deduplicated detections
        min_confidence: Minimum confidence (inclusive)
        min_frp: Minimum fire radiative power in MW (inclusive)
        now: Reference time for recency buckets (current UTC time by default)
        local_timezone: IANA zone used for the local time line in remarks
        include_recency: Embed the recency bucket in metadata and remarks

    Returns:
        Dict of the form {"type": "FeatureCollection", "features": [...]}
    """
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_tz = ZoneInfo(local_timezone)

    features = []
    filtered = 0
    failed = 0

    for record in records:
        try:
            if not passes_thresholds(record, min_confidence, min_frp):
                filtered += 1
                continue
            features.append(build_feature(record, now, local_tz, include_recency))
        except Exception as e:
            failed += 1
            logger.error(f"Error processing fire detection {record!r}: {e}")

    logger.info(
        f"Built {len(features)} features "
        f"({filtered} below thresholds, {failed} failed)"
    )

    return {"type": "FeatureCollection", "features": features}
