"""
Base source class for upstream fire-detection endpoints.

All endpoint-specific sources inherit from BaseSource and implement
fetch() and parse().
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx
from loguru import logger

from firefeed.config import SOURCE_CONFIG, FirmsSettings, settings
from firefeed.models import FireDetection
from firefeed.parsers.archive import ArchiveError
from firefeed.parsers.markup import MarkupParseError
from firefeed.utils.http import HTTPError, fetch

# Failures that cost one source its records but never abort the run
SOURCE_ERRORS = (HTTPError, httpx.HTTPError, ArchiveError, MarkupParseError, UnicodeDecodeError)

Fetcher = Callable[..., httpx.Response]


@dataclass
class SourceResult:
    """Result of fetching and parsing one source."""
    source_id: str
    success: bool
    records: list[FireDetection] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def records_parsed(self) -> int:
        return len(self.records)

    @property
    def duration_seconds(self) -> float | None:
        """Calculate duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None


class BaseSource(ABC):
    """
    Abstract base class for upstream sources.

    Subclasses must implement:
    - build_url(): Endpoint URL for this source
    - parse(): Turn the raw response into FireDetection objects
    """

    # Class attributes to be set by subclasses
    kind: str = None                # e.g., "area"

    def __init__(
        self,
        source_id: str,
        firms: FirmsSettings | None = None,
        fetcher: Fetcher = fetch,
        timeout: int | None = None,
    ):
        """
        Initialize the source.

        Args:
            source_id: Key in SOURCE_CONFIG
            firms: Provider settings (global settings when omitted)
            fetcher: Callable used to issue the HTTP request
            timeout: Request timeout in seconds
        """
        if source_id not in SOURCE_CONFIG:
            raise ValueError(f"Unknown source: {source_id}")

        self.source_id = source_id
        self.source_info: dict[str, Any] = SOURCE_CONFIG[source_id]
        self.source_name = self.source_info.get("name", source_id)
        self.product = self.source_info["product"]
        self.firms = firms or settings.firms
        self.fetcher = fetcher
        self.timeout = timeout or settings.pipeline.http_timeout

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.source_id!r})"

    @abstractmethod
    def build_url(self) -> str:
        """Endpoint URL for this source."""
        pass

    def build_params(self) -> dict | None:
        """Query parameters for the request, if any."""
        return None

    def fetch(self) -> httpx.Response:
        """Issue the single request for this source."""
        return self.fetcher(self.build_url(), params=self.build_params(), timeout=self.timeout)

    @abstractmethod
    def parse(self, response: httpx.Response) -> list[FireDetection]:
        """
        Parse a response into FireDetection objects.

        Args:
            response: Successful HTTP response

        Returns:
            List of FireDetection objects
        """
        pass

    def run(self) -> SourceResult:
        """
        Fetch and parse this source.

        Fetch and decode failures are logged and reported as an
        unsuccessful result with no records.
        """
        result = SourceResult(
            source_id=self.source_id,
            success=False,
            started_at=datetime.now(timezone.utc),
        )

        try:
            logger.info(f"Fetching {self.source_name}...")
            response = self.fetch()
            result.records = self.parse(response)
            result.success = True
        except SOURCE_ERRORS as e:
            logger.error(f"{self.source_name} failed: {e}")
            result.errors.append(str(e))
        finally:
            result.completed_at = datetime.now(timezone.utc)

        if result.success:
            logger.info(f"{self.source_name}: {result.records_parsed} detections")

        return result
