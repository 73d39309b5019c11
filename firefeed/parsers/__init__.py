"""
Payload parsers.

Each parser turns one upstream encoding into canonical FireDetection
records.
"""

from firefeed.parsers.archive import ArchiveError, extract_markup
from firefeed.parsers.markup import MarkupFields, MarkupParseError, extract_fields, parse_kml
from firefeed.parsers.tabular import parse_csv

__all__ = [
    "parse_csv",
    "parse_kml",
    "extract_fields",
    "extract_markup",
    "MarkupFields",
    "MarkupParseError",
    "ArchiveError",
]
