"""Utility modules for the firefeed pipeline."""

from firefeed.utils.geo import is_valid_coordinates, parse_kml_coordinates
from firefeed.utils.http import HTTPError, fetch, post_json
from firefeed.utils.logging import setup_logging

__all__ = [
    # HTTP utilities
    "fetch",
    "post_json",
    "HTTPError",
    # Logging
    "setup_logging",
    # Geographic utilities
    "is_valid_coordinates",
    "parse_kml_coordinates",
]
