# SPDX-License-Identifier: MIT
"""Tests for the shared normalization tables and helpers."""

from datetime import datetime, timezone

import pytest

from firefeed.normalizers import (
    Satellite,
    canonical_timestamp,
    lookup_satellite,
    normalize_confidence,
    normalize_confidence_text,
    normalize_daynight,
    normalize_satellite,
    pad_time,
    parse_acquisition,
    parse_timestamp,
    satellite_from_sensor,
)


class TestSatelliteTable:
    """The single alias table used by both parsers."""

    @pytest.mark.parametrize("alias,expected", [
        ("MODIS_NRT", Satellite.MODIS),
        ("fires_modis_24hrs", Satellite.MODIS),
        ("VIIRS_SNPP_NRT", Satellite.VIIRS_SNPP),
        ("suomi-npp-viirs-c2", Satellite.VIIRS_SNPP),
        ("viirs_noaa20_nrt", Satellite.VIIRS_NOAA20),
        ("VIIRS_NOAA21_NRT", Satellite.VIIRS_NOAA21),
        ("Terra", Satellite.MODIS),
    ])
    def test_lookup(self, alias, expected):
        """Aliases from every endpoint resolve case-insensitively."""
        assert lookup_satellite(alias) is expected

    def test_unknown_alias(self):
        """Unknown names resolve to None."""
        assert lookup_satellite("GOES-18") is None
        assert lookup_satellite("") is None

    def test_normalize_prefers_source(self):
        """A known source wins over the payload value."""
        assert normalize_satellite("MODIS_NRT", "N20") == "MODIS"

    def test_normalize_falls_back_to_raw_source(self):
        """Nothing known returns the source verbatim."""
        assert normalize_satellite("my_feed") == "my_feed"

    @pytest.mark.parametrize("text,expected", [
        ("MODIS Terra", Satellite.MODIS),
        ("VIIRS S-NPP", Satellite.VIIRS_SNPP),
        ("VIIRS NOAA-20", Satellite.VIIRS_NOAA20),
        ("VIIRS (JPSS-1)", Satellite.VIIRS_NOAA20),
        ("viirs noaa 21", Satellite.VIIRS_NOAA21),
        ("VIIRS", Satellite.VIIRS),
        ("AVHRR", None),
        (None, None),
    ])
    def test_sensor_text(self, text, expected):
        """Sensor families and VIIRS platforms are recognized."""
        assert satellite_from_sensor(text) is expected


class TestConfidence:
    """Confidence encodings."""

    @pytest.mark.parametrize("value,expected", [
        ("h", 80), ("N", 60), ("l", 40), ("z", 0), ("", 0), (None, 0),
        ("55", 55), ("49.6", 49), ("99.9", 99), ("150", 100), ("-3", 0), ("nan", 0),
    ])
    def test_csv_values(self, value, expected):
        """Codes, numbers and garbage map into 0..100."""
        assert normalize_confidence(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("high", 80), ("Nominal", 60), ("low", 40), ("75%", 75), ("75 %", 75), ("49.5%", 49),
        ("unknown", 60), (None, 60),
    ])
    def test_markup_values(self, value, expected):
        """Words and percentages map to integers; default is 60."""
        assert normalize_confidence_text(value) == expected


class TestDayNight:
    """Day/night flags."""

    @pytest.mark.parametrize("value,expected", [
        ("D", "Day"), ("N", "Night"), ("night", "Night"), ("Day", "Day"), (None, "Day"), ("?", "Day"),
    ])
    def test_values(self, value, expected):
        assert normalize_daynight(value) == expected


class TestDates:
    """Acquisition time handling."""

    @pytest.mark.parametrize("value,expected", [
        ("130", "0130"), ("5", "0005"), ("0130", "0130"), ("12:30", "1230"),
        ("2400", None), ("1260", None), ("abc", None), ("12345", None), (None, None),
    ])
    def test_pad_time(self, value, expected):
        """Times are zero padded and validated."""
        assert pad_time(value) == expected

    def test_parse_acquisition(self):
        """Date and HHMM combine into an aware UTC datetime."""
        assert parse_acquisition("2024-01-01", "130") == datetime(2024, 1, 1, 1, 30, tzinfo=timezone.utc)
        assert parse_acquisition("2024-13-01", "0130") is None
        assert parse_acquisition("", "0130") is None

    def test_canonical_timestamp(self):
        """Naive datetimes are treated as UTC."""
        assert canonical_timestamp(datetime(2024, 1, 1, 1, 30)) == "2024-01-01T01:30:00Z"

    def test_parse_timestamp(self):
        """Z suffix and offsets are understood."""
        assert parse_timestamp("2024-01-01T01:30:00Z") == datetime(2024, 1, 1, 1, 30, tzinfo=timezone.utc)
        assert parse_timestamp("2024-01-01T13:30:00+12:00") == datetime(2024, 1, 1, 1, 30, tzinfo=timezone.utc)
        assert parse_timestamp("yesterday") is None
