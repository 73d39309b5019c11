# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for firefeed tests."""

import io
import os
import zipfile
from datetime import datetime, timezone

import httpx
import pytest

# Set test environment variables before importing the package
os.environ.setdefault("DISABLE_LOGGING", "1")

from firefeed.config import FirmsSettings, PipelineSettings, Settings  # noqa: E402
from firefeed.models import FireDetection  # noqa: E402


VIIRS_CSV = """latitude,longitude,bright_ti4,scan,track,acq_date,acq_time,satellite,instrument,confidence,version,bright_ti5,frp,daynight
-40.12345,172.5,330.5,0.39,0.36,2024-01-01,130,N,VIIRS,h,2.0NRT,290.1,25.3,D
-41.0,173.0,340.0,0.4,0.4,2024-01-01,0245,N,VIIRS,n,2.0NRT,295.0,12.0,N
"""

MODIS_WFS_CSV = """latitude,longitude,brightness,scan,track,acq_date,acq_time,satellite,confidence,version,brightness_2,frp,daynight
-40.123449,172.500001,335.0,1.0,1.0,2024-01-01,0130,A,85,6.1NRT,300.2,40.0,D
-38.5,176.1,320.0,1.2,1.1,2024-01-01,0210,T,45,6.1NRT,298.0,30.0,D
"""

CENTROID_DESCRIPTION = """<b>Detection Time:</b> 2024-01-01 01:30 UTC<br/>
<b>Sensor:</b> VIIRS NOAA-20<br/>
<b>Confidence:</b> high<br/>
<b>FRP:</b> 25.3 MW<br/>
<b>Brightness:</b> 330.5 K<br/>
<b>Day/Night:</b> Night<br/>
<b>Scan/Track:</b> 0.39/0.36"""


def kml_placemark(name: str, coordinates: str, description: str = "") -> str:
    """Render one placemark."""
    return (
        f"<Placemark><name>{name}</name>"
        f"<description><![CDATA[{description}]]></description>"
        f"<Point><coordinates>{coordinates}</coordinates></Point></Placemark>"
    )


def kml_document(*placemarks: str) -> str:
    """Wrap placemarks in a namespaced KML document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<kml xmlns="http://www.opengis.net/kml/2.2"><Document><Folder>'
        + "".join(placemarks)
        + "</Folder></Document></kml>"
    )


def kmz_bytes(entries: dict[str, str]) -> bytes:
    """Zip named text entries into KMZ bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, text in entries.items():
            zf.writestr(name, text)
    return buffer.getvalue()


class FakeFetcher:
    """Stands in for firefeed.utils.http.fetch; routes on URL substrings."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls = []

    def __call__(self, url, params=None, timeout=None, **kwargs):
        self.calls.append((url, params))
        for fragment, reply in self.routes.items():
            if fragment in url:
                if isinstance(reply, Exception):
                    raise reply
                if isinstance(reply, bytes):
                    return httpx.Response(200, content=reply)
                return httpx.Response(200, text=reply)
        raise AssertionError(f"Unexpected URL {url}")


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for recency computations."""
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_detection():
    """Factory for FireDetection records with sensible defaults."""
    def _make(**overrides) -> FireDetection:
        values = {
            "latitude": -40.0,
            "longitude": 172.0,
            "acq_date": "2024-01-01",
            "acq_time": "1130",
            "acq_datetime": "2024-01-01T11:30:00Z",
            "satellite": "VIIRS S-NPP",
            "brightness": 330.0,
            "brightness2": 290.0,
            "scan": 0.4,
            "track": 0.4,
            "confidence": 80,
            "frp": 25.0,
            "daynight": "Day",
            "version": "2.0NRT",
            "source": "VIIRS_SNPP_NRT",
        }
        values.update(overrides)
        return FireDetection(**values)
    return _make


@pytest.fixture
def firms_settings() -> FirmsSettings:
    """Provider settings for the reference deployment."""
    return FirmsSettings(
        map_key="TESTKEY",
        bbox="-47.3,166.3,-34.4,178.6",
        min_confidence=50,
        min_frp=20,
        sources="viirs_snpp_nrt,modis_wfs",
    )


@pytest.fixture
def test_settings(firms_settings: FirmsSettings) -> Settings:
    """Full settings with a small worker pool."""
    return Settings(
        firms=firms_settings,
        pipeline=PipelineSettings(max_workers=2, local_timezone="Pacific/Auckland", include_recency=True),
    )
