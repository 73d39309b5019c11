"""
Configuration management for the firefeed pipeline.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(ValueError):
    """Raised when configuration values cannot be interpreted."""
    pass


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box in WGS84 degrees."""

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @classmethod
    def from_string(cls, value: str) -> "BoundingBox":
        """
        Parse a "minLat,minLon,maxLat,maxLon" string.

        Raises:
            ConfigError: If the string does not hold four valid coordinates
        """
        parts = [p.strip() for p in (value or "").split(",")]
        if len(parts) != 4:
            raise ConfigError(f"BBOX must have 4 values (minLat,minLon,maxLat,maxLon), got {value!r}")

        try:
            min_lat, min_lon, max_lat, max_lon = (float(p) for p in parts)
        except ValueError as e:
            raise ConfigError(f"BBOX values must be numeric: {value!r}") from e

        if not (-90 <= min_lat <= 90 and -90 <= max_lat <= 90):
            raise ConfigError(f"BBOX latitudes out of range: {value!r}")
        if not (-180 <= min_lon <= 180 and -180 <= max_lon <= 180):
            raise ConfigError(f"BBOX longitudes out of range: {value!r}")
        if min_lat > max_lat or min_lon > max_lon:
            raise ConfigError(f"BBOX minimums exceed maximums: {value!r}")

        return cls(min_lat=min_lat, min_lon=min_lon, max_lat=max_lat, max_lon=max_lon)

    def contains(self, lat: float, lon: float) -> bool:
        """Check whether a point lies inside the box (edges included)."""
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon

    def as_area(self) -> str:
        """Area API order: west,south,east,north."""
        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"

    def as_wfs(self) -> str:
        """WFS order for EPSG:4326: minLat,minLon,maxLat,maxLon."""
        return f"{self.min_lat},{self.min_lon},{self.max_lat},{self.max_lon}"


class FirmsSettings(BaseSettings):
    """Provider access and filtering settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider map key from https://firms.modaps.eosdis.nasa.gov/api/map_key/
    map_key: str = ""
    base_url: str = "https://firms.modaps.eosdis.nasa.gov"
    wfs_base_url: str = "https://firms2.modaps.eosdis.nasa.gov"

    bbox: str = "-47.3,166.3,-34.4,178.6"
    min_confidence: float = 50
    min_frp: float = 20

    # Comma separated keys from SOURCE_CONFIG
    sources: str = "viirs_snpp_nrt,viirs_noaa20_nrt,viirs_noaa21_nrt,modis_nrt,modis_wfs,viirs_snpp_kmz"
    day_range: int = 1  # 1..10 days for the area API
    wfs_region: str = "Australia_NewZealand"
    kmz_region: str = "australia_newzealand"
    kmz_period: str = "24h"

    @field_validator("day_range")
    @classmethod
    def check_day_range(cls, v: int) -> int:
        """Area API accepts 1 to 10 days."""
        if not 1 <= v <= 10:
            raise ValueError("day_range must be between 1 and 10")
        return v

    @property
    def bounding_box(self) -> BoundingBox:
        """Parsed BBOX."""
        return BoundingBox.from_string(self.bbox)

    @property
    def source_keys(self) -> list[str]:
        """Configured source keys in processing order."""
        return [key.strip() for key in self.sources.split(",") if key.strip()]


class PipelineSettings(BaseSettings):
    """Runtime settings for a single pipeline run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[Path] = None

    # HTTP settings
    http_timeout: int = 30  # seconds

    # Processing settings
    max_workers: int = 4
    local_timezone: str = "Pacific/Auckland"
    include_recency: bool = True


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-settings
    firms: FirmsSettings = Field(default_factory=FirmsSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)

    # Optional default submission target
    submit_url: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()


# =============================================================================
# Data Source Configuration
# =============================================================================

# Upstream endpoints known to the pipeline. "kind" selects the source class.
SOURCE_CONFIG = {
    "viirs_snpp_nrt": {
        "name": "VIIRS S-NPP (area API)",
        "kind": "area",
        "product": "VIIRS_SNPP_NRT",
    },
    "viirs_noaa20_nrt": {
        "name": "VIIRS NOAA-20 (area API)",
        "kind": "area",
        "product": "VIIRS_NOAA20_NRT",
    },
    "viirs_noaa21_nrt": {
        "name": "VIIRS NOAA-21 (area API)",
        "kind": "area",
        "product": "VIIRS_NOAA21_NRT",
    },
    "modis_nrt": {
        "name": "MODIS (area API)",
        "kind": "area",
        "product": "MODIS_NRT",
    },
    "modis_wfs": {
        "name": "MODIS 24h (WFS query service)",
        "kind": "wfs",
        "product": "fires_modis_24hrs",
    },
    "viirs_snpp_wfs": {
        "name": "VIIRS S-NPP 24h (WFS query service)",
        "kind": "wfs",
        "product": "fires_snpp_24hrs",
    },
    "viirs_noaa20_wfs": {
        "name": "VIIRS NOAA-20 24h (WFS query service)",
        "kind": "wfs",
        "product": "fires_noaa20_24hrs",
    },
    "viirs_snpp_kmz": {
        "name": "VIIRS S-NPP footprints (KMZ)",
        "kind": "kmz",
        "product": "suomi-npp-viirs-c2",
    },
    "viirs_noaa20_kmz": {
        "name": "VIIRS NOAA-20 footprints (KMZ)",
        "kind": "kmz",
        "product": "noaa-20-viirs-c2",
    },
    "modis_kmz": {
        "name": "MODIS footprints (KMZ)",
        "kind": "kmz",
        "product": "c6.1",
    },
}
