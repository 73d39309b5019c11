# SPDX-License-Identifier: MIT
"""Tests for the KML record parser and KMZ extraction."""

from datetime import date

import pytest

from conftest import CENTROID_DESCRIPTION, kml_document, kml_placemark, kmz_bytes
from firefeed.config import BoundingBox
from firefeed.parsers.archive import ArchiveError, extract_markup
from firefeed.parsers.markup import MarkupParseError, extract_fields, parse_kml

REGION = BoundingBox(min_lat=-47, min_lon=166, max_lat=-34, max_lon=179)


class TestExtractFields:
    """Label/value extraction from descriptions."""

    def test_all_fields_present(self):
        """Every labelled value is captured."""
        fields = extract_fields(CENTROID_DESCRIPTION)
        assert fields.acq_date == "2024-01-01"
        assert fields.acq_time == "0130"
        assert fields.sensor == "VIIRS NOAA-20"
        assert fields.confidence == "high"
        assert fields.frp == pytest.approx(25.3)
        assert fields.brightness == pytest.approx(330.5)
        assert fields.daynight == "Night"
        assert fields.scan == pytest.approx(0.39)
        assert fields.track == pytest.approx(0.36)

    def test_absent_fields_are_none(self):
        """Missing labels come back as None, not sentinel values."""
        fields = extract_fields("Sensor: MODIS")
        assert fields.sensor == "MODIS"
        assert fields.acq_date is None
        assert fields.acq_time is None
        assert fields.confidence is None
        assert fields.frp is None
        assert fields.brightness is None
        assert fields.daynight is None
        assert fields.scan is None
        assert fields.track is None

    def test_empty_description(self):
        """No description means no captures."""
        assert extract_fields(None).sensor is None

    def test_percentage_confidence(self):
        """Percentages are captured with their sign."""
        assert extract_fields("Confidence: 75%").confidence == "75%"

    def test_table_description(self):
        """Two-column HTML tables read as label/value pairs."""
        description = (
            "<table><tr><td>Confidence</td><td>low</td></tr>"
            "<tr><td>Scan</td><td>0.5</td></tr>"
            "<tr><td>Track</td><td>0.6</td></tr>"
            "<tr><td>Date</td><td>2024-02-03</td></tr>"
            "<tr><td>Time (UTC)</td><td>14:05</td></tr></table>"
        )
        fields = extract_fields(description)
        assert fields.confidence == "low"
        assert fields.scan == pytest.approx(0.5)
        assert fields.track == pytest.approx(0.6)
        assert fields.acq_date == "2024-02-03"
        assert fields.acq_time == "1405"

    def test_invalid_clock_time_is_absent(self):
        """Hour 25 is not a timestamp."""
        fields = extract_fields("Detection Time: 2024-01-01 25:10")
        assert fields.acq_date is None
        assert fields.acq_time is None


class TestParseKml:
    """Placemark selection and record building."""

    def test_centroid_is_parsed(self):
        """A detection centroid becomes a fully populated record."""
        doc = kml_document(kml_placemark("Detection Centroid", "170.0,-40.0,0", CENTROID_DESCRIPTION))
        records = parse_kml(doc, "suomi-npp-viirs-c2", region=REGION)

        assert len(records) == 1
        record = records[0]
        assert record.longitude == pytest.approx(170.0)
        assert record.latitude == pytest.approx(-40.0)
        assert record.satellite == "VIIRS NOAA-20"
        assert record.confidence == 80
        assert record.acq_datetime == "2024-01-01T01:30:00Z"
        assert record.brightness2 == record.brightness == pytest.approx(330.5)
        assert record.daynight == "Night"

    def test_footprints_are_skipped(self):
        """Only placemarks named as centroids produce records."""
        doc = kml_document(
            kml_placemark("Detection Footprint", "170.0,-40.0,0", CENTROID_DESCRIPTION),
            kml_placemark("Fire 1", "170.0,-40.0,0", CENTROID_DESCRIPTION),
        )
        assert parse_kml(doc, "suomi-npp-viirs-c2") == []

    def test_region_filter(self):
        """Centroids outside the bounding box are dropped."""
        doc = kml_document(
            kml_placemark("Detection Centroid", "170.0,-40.0", CENTROID_DESCRIPTION),
            kml_placemark("Detection Centroid", "10.0,-40.0", CENTROID_DESCRIPTION),
        )
        records = parse_kml(doc, "suomi-npp-viirs-c2", region=REGION)
        assert [r.longitude for r in records] == [pytest.approx(170.0)]

    def test_defaults_for_missing_fields(self):
        """Documented defaults apply when the description is sparse."""
        doc = kml_document(kml_placemark("Detection Centroid", "170.0,-40.0", "Sensor: MODIS"))
        record = parse_kml(doc, "c6.1", today=date(2024, 2, 2))[0]

        assert record.acq_date == "2024-02-02"
        assert record.acq_time == "1200"
        assert record.acq_datetime == "2024-02-02T12:00:00Z"
        assert record.scan == 0.0
        assert record.track == 0.0
        assert record.brightness == 0.0
        assert record.frp == 0.0
        assert record.daynight == "Day"
        assert record.confidence == 60
        assert record.satellite == "MODIS"

    @pytest.mark.parametrize("sensor,expected", [
        ("VIIRS", "VIIRS"),
        ("VIIRS (Suomi NPP)", "VIIRS S-NPP"),
        ("VIIRS NOAA-21", "VIIRS NOAA-21"),
        ("MODIS Aqua", "MODIS"),
    ])
    def test_sensor_overrides_source(self, sensor, expected):
        """Recognized sensor text wins over the source label."""
        doc = kml_document(kml_placemark("Detection Centroid", "170.0,-40.0", f"Sensor: {sensor}"))
        assert parse_kml(doc, "noaa-20-viirs-c2")[0].satellite == expected

    def test_unknown_sensor_uses_source(self):
        """Unrecognized sensor text leaves the source mapping in place."""
        doc = kml_document(kml_placemark("Detection Centroid", "170.0,-40.0", "Sensor: AVHRR"))
        assert parse_kml(doc, "suomi-npp-viirs-c2")[0].satellite == "VIIRS S-NPP"

    def test_bad_coordinates_are_skipped(self):
        """Unreadable coordinates drop the placemark."""
        doc = kml_document(kml_placemark("Detection Centroid", "east,south", CENTROID_DESCRIPTION))
        assert parse_kml(doc, "suomi-npp-viirs-c2") == []

    def test_empty_document(self):
        """Blank input is an empty result."""
        assert parse_kml("", "c6.1") == []

    def test_malformed_document_raises(self):
        """Broken XML is reported to the caller."""
        with pytest.raises(MarkupParseError):
            parse_kml("<kml><Document>", "c6.1")


class TestExtractMarkup:
    """KMZ archive handling."""

    def test_extracts_kml_entry(self):
        """The .kml entry is found among other files."""
        data = kmz_bytes({"icons/fire.png": "png", "doc.kml": "<kml/>"})
        assert extract_markup(data) == "<kml/>"

    def test_missing_entry_raises(self):
        """An archive without KML is an error."""
        with pytest.raises(ArchiveError):
            extract_markup(kmz_bytes({"readme.txt": "hello"}))

    def test_not_an_archive_raises(self):
        """Arbitrary bytes are rejected."""
        with pytest.raises(ArchiveError):
            extract_markup(b"<html>Service unavailable</html>")
