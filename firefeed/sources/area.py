"""
Area API source.

One CSV endpoint per instrument product:
    {base}/api/area/csv/{key}/{product}/{west,south,east,north}/{days}
"""

import httpx

from firefeed.models import FireDetection
from firefeed.parsers.tabular import parse_csv
from firefeed.sources.base import BaseSource


class AreaCsvSource(BaseSource):
    """Per-product CSV endpoint parameterized by key, area and day range."""

    kind = "area"

    def build_url(self) -> str:
        area = self.firms.bounding_box.as_area()
        return (
            f"{self.firms.base_url}/api/area/csv/"
            f"{self.firms.map_key}/{self.product}/{area}/{self.firms.day_range}"
        )

    def parse(self, response: httpx.Response) -> list[FireDetection]:
        return parse_csv(response.text, self.product)
