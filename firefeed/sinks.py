"""
Submission sinks for the output FeatureCollection.

A sink accepts one FeatureCollection per run. Sink failures are the only
errors that fail a run.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import httpx
from loguru import logger

from firefeed.utils.http import post_json


def write_collection(path: Path, collection: dict[str, Any], indent: Optional[int] = None) -> Path:
    """
    Replace a GeoJSON file with a new collection.

    The document is serialized before anything touches the disk and lands
    in a ".partial" sibling that is swapped in, so readers never see a
    half-written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = json.dumps(collection, ensure_ascii=False, indent=indent)

    partial = path.with_name(path.name + ".partial")
    try:
        partial.write_text(document, encoding="utf-8")
        partial.replace(path)
    except OSError:
        partial.unlink(missing_ok=True)
        raise
    return path


class Sink(ABC):
    """Destination for the FeatureCollection produced by a run."""

    @abstractmethod
    def submit(self, collection: dict[str, Any]) -> None:
        pass


class JsonFileSink(Sink):
    """Writes the collection to a GeoJSON file."""

    def __init__(self, path: Path, indent: Optional[int] = None):
        self.path = Path(path)
        self.indent = indent

    def submit(self, collection: dict[str, Any]) -> None:
        write_collection(self.path, collection, indent=self.indent)
        logger.info(f"Wrote {len(collection['features'])} features to {self.path}")


class HttpSink(Sink):
    """POSTs the collection as JSON to a downstream endpoint."""

    def __init__(self, url: str, headers: Optional[dict] = None, client: Optional[httpx.Client] = None):
        self.url = url
        self.headers = headers
        self.client = client

    def submit(self, collection: dict[str, Any]) -> None:
        response = post_json(self.url, collection, headers=self.headers, client=self.client)
        logger.info(f"Submitted {len(collection['features'])} features to {self.url} ({response.status_code})")
