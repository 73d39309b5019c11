"""
Satellite and sensor name normalization.

A single alias table is shared by every parser. To support a new upstream
source name, add its alias to SATELLITE_ALIASES.
"""

from enum import Enum
from typing import Optional


class Satellite(str, Enum):
    """Canonical satellite/sensor labels."""

    MODIS = "MODIS"
    VIIRS_SNPP = "VIIRS S-NPP"
    VIIRS_NOAA20 = "VIIRS NOAA-20"
    VIIRS_NOAA21 = "VIIRS NOAA-21"
    VIIRS = "VIIRS"


# Every known upstream spelling, keyed by canonical satellite.
# Aliases are matched case-insensitively.
SATELLITE_ALIASES: dict[Satellite, tuple[str, ...]] = {
    Satellite.MODIS: (
        # Area API products
        "MODIS_NRT",
        "MODIS_SP",
        # WFS type names
        "fires_modis_24hrs",
        "fires_modis_48hrs",
        "fires_modis_7days",
        # KMZ products
        "c6.1",
        # CSV satellite column values
        "Aqua",
        "Terra",
        "A",
        "T",
        "MODIS",
    ),
    Satellite.VIIRS_SNPP: (
        "VIIRS_SNPP_NRT",
        "VIIRS_SNPP_SP",
        "fires_snpp_24hrs",
        "fires_snpp_48hrs",
        "fires_snpp_7days",
        "suomi-npp-viirs-c2",
        "N",
        "NPP",
        "S-NPP",
        "Suomi NPP",
    ),
    Satellite.VIIRS_NOAA20: (
        "VIIRS_NOAA20_NRT",
        "VIIRS_NOAA20_SP",
        "fires_noaa20_24hrs",
        "fires_noaa20_48hrs",
        "fires_noaa20_7days",
        "noaa-20-viirs-c2",
        "N20",
        "1",
        "J1",
        "NOAA-20",
    ),
    Satellite.VIIRS_NOAA21: (
        "VIIRS_NOAA21_NRT",
        "fires_noaa21_24hrs",
        "fires_noaa21_48hrs",
        "fires_noaa21_7days",
        "noaa-21-viirs-c2",
        "N21",
        "J2",
        "NOAA-21",
    ),
    Satellite.VIIRS: (
        "VIIRS",
    ),
}

# Reverse lookup built once from the table above
_ALIAS_LOOKUP: dict[str, Satellite] = {
    alias.lower(): satellite
    for satellite, aliases in SATELLITE_ALIASES.items()
    for alias in aliases
}

# Platform markers checked inside VIIRS sensor text, most specific first
_VIIRS_PLATFORMS: tuple[tuple[tuple[str, ...], Satellite], ...] = (
    (("NOAA-21", "NOAA 21", "NOAA21", "N21", "JPSS-2", "JPSS2"), Satellite.VIIRS_NOAA21),
    (("NOAA-20", "NOAA 20", "NOAA20", "N20", "JPSS-1", "JPSS1"), Satellite.VIIRS_NOAA20),
    (("S-NPP", "SNPP", "SUOMI", "NPP"), Satellite.VIIRS_SNPP),
)


def lookup_satellite(value: Optional[str]) -> Optional[Satellite]:
    """Look up an upstream identifier in the shared alias table."""
    if not value:
        return None
    return _ALIAS_LOOKUP.get(value.strip().lower())


def normalize_satellite(source: str, payload_value: Optional[str] = None) -> str:
    """
    Resolve the canonical satellite label for a record.

    The source identifier wins when it is a known alias; otherwise the
    payload's own satellite value is tried; otherwise the raw source
    identifier is returned unchanged.
    """
    satellite = lookup_satellite(source) or lookup_satellite(payload_value)
    if satellite is not None:
        return satellite.value
    return source


def satellite_from_sensor(sensor_text: Optional[str]) -> Optional[Satellite]:
    """
    Match free sensor text against known sensor families.

    Returns None when the text does not name a known family.
    """
    if not sensor_text:
        return None

    text = sensor_text.upper()
    if "MODIS" in text:
        return Satellite.MODIS

    if "VIIRS" in text:
        for markers, satellite in _VIIRS_PLATFORMS:
            if any(marker in text for marker in markers):
                return satellite
        return Satellite.VIIRS

    return None
