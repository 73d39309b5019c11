"""
Deduplication of fire detections gathered from overlapping sources.

The same physical fire can be reported by several endpoints for the same
instrument (area API, WFS service, KMZ footprints). Records are matched on
a spatial-temporal fingerprint instead of any cross-source identifier.
"""

from collections.abc import Iterable

from loguru import logger

from firefeed.models import FireDetection

# Decimal places kept when fingerprinting coordinates
COORDINATE_PRECISION = 5

Fingerprint = tuple[float, float, str, str]


def fingerprint(record: FireDetection) -> Fingerprint:
    """(lat, lon, acq_date, acq_time) with coordinates rounded to 5 places."""
    return (
        round(record.latitude, COORDINATE_PRECISION),
        round(record.longitude, COORDINATE_PRECISION),
        record.acq_date,
        record.acq_time,
    )


def deduplicate(records: Iterable[FireDetection]) -> list[FireDetection]:
    """
    Keep the first record seen for each fingerprint.

    Order of the retained records follows their first occurrence.
    """
    seen: set[Fingerprint] = set()
    unique = []
    total = 0

    for record in records:
        total += 1
        key = fingerprint(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    if total != len(unique):
        logger.info(f"Deduplication: dropped {total - len(unique)} duplicates from {total} records")

    return unique


__all__ = ["fingerprint", "deduplicate", "Fingerprint"]
