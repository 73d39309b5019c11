"""
WFS query-service source.

The map server answers GetFeature requests with CSV when asked for
outputformat=csv. The bounding box is given in EPSG:4326 axis order
(latitude first).
"""

import httpx

from firefeed.models import FireDetection
from firefeed.parsers.tabular import parse_csv
from firefeed.sources.base import BaseSource

CRS = "urn:ogc:def:crs:EPSG::4326"


class WfsCsvSource(BaseSource):
    """24 hour fire layers from the WFS query service."""

    kind = "wfs"

    # Upper bound on features per request
    PAGE_SIZE = 1000

    def build_url(self) -> str:
        return f"{self.firms.wfs_base_url}/mapserver/wfs/{self.firms.wfs_region}/{self.firms.map_key}/"

    def build_params(self) -> dict:
        return {
            "SERVICE": "WFS",
            "REQUEST": "GetFeature",
            "VERSION": "2.0.0",
            "TYPENAME": f"ms:{self.product}",
            "STARTINDEX": "0",
            "COUNT": str(self.PAGE_SIZE),
            "SRSNAME": CRS,
            "BBOX": f"{self.firms.bounding_box.as_wfs()},{CRS}",
            "outputformat": "csv",
        }

    def parse(self, response: httpx.Response) -> list[FireDetection]:
        return parse_csv(response.text, self.product)
