"""
KMZ fire footprint source.

Downloads a zipped KML document of detection footprints and centroids:
    {base}/api/kml_fire_footprints/{region}/{period}/{product}/FirespotArea_{region}_{product}_{period}.kmz
"""

import httpx

from firefeed.models import FireDetection
from firefeed.parsers.archive import extract_markup
from firefeed.parsers.markup import parse_kml
from firefeed.sources.base import BaseSource


class KmzSource(BaseSource):
    """Zipped KML footprints for one product."""

    kind = "kmz"

    def build_url(self) -> str:
        region = self.firms.kmz_region
        period = self.firms.kmz_period
        return (
            f"{self.firms.base_url}/api/kml_fire_footprints/{region}/{period}/{self.product}/"
            f"FirespotArea_{region}_{self.product}_{period}.kmz"
        )

    def parse(self, response: httpx.Response) -> list[FireDetection]:
        document = extract_markup(response.content, suffix=".kml")
        return parse_kml(document, self.product, region=self.firms.bounding_box)
