"""
Upstream fire-detection sources.

Each source fetches one endpoint once per run and parses the response
into canonical FireDetection records.
"""

from firefeed.config import SOURCE_CONFIG, ConfigError, FirmsSettings
from firefeed.sources.area import AreaCsvSource
from firefeed.sources.base import BaseSource, SourceResult
from firefeed.sources.kmz import KmzSource
from firefeed.sources.wfs import WfsCsvSource

# Source class per endpoint kind
SOURCE_KINDS: dict[str, type[BaseSource]] = {
    AreaCsvSource.kind: AreaCsvSource,
    WfsCsvSource.kind: WfsCsvSource,
    KmzSource.kind: KmzSource,
}


def create_source(source_id: str, firms: FirmsSettings | None = None, **kwargs) -> BaseSource:
    """
    Instantiate the source registered under source_id.

    Raises:
        ConfigError: If source_id is not in SOURCE_CONFIG
    """
    if source_id not in SOURCE_CONFIG:
        raise ConfigError(f"Unknown source {source_id!r}; known: {', '.join(SOURCE_CONFIG)}")

    source_class = SOURCE_KINDS[SOURCE_CONFIG[source_id]["kind"]]
    return source_class(source_id, firms=firms, **kwargs)


__all__ = [
    "BaseSource",
    "SourceResult",
    "AreaCsvSource",
    "WfsCsvSource",
    "KmzSource",
    "SOURCE_KINDS",
    "create_source",
]
