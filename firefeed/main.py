#!/usr/bin/env python3
"""
firefeed - command line entry point.

Runs one ingestion pass over the configured FIRMS sources and hands the
resulting FeatureCollection to a sink. Meant to be invoked by a scheduler.

Usage:
    firefeed run --output fires.geojson
    firefeed run --submit-url https://example.org/layer
    firefeed sources
"""

import json
import sys
from pathlib import Path

import click
import httpx
from loguru import logger
from rich.console import Console
from rich.table import Table

from firefeed.config import SOURCE_CONFIG, ConfigError, get_settings
from firefeed.runner import run_pipeline
from firefeed.sinks import HttpSink, JsonFileSink
from firefeed.utils.http import HTTPError

console = Console(stderr=True)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """FIRMS active fire feed"""
    if debug:
        from firefeed.utils.logging import setup_logging
        setup_logging(level="DEBUG")


@cli.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write GeoJSON to this file")
@click.option("--submit-url", help="POST the FeatureCollection to this URL")
@click.option("--indent", type=int, default=None, help="JSON indent for file output")
def run(output: Path | None, submit_url: str | None, indent: int | None):
    """
    Fetch all configured sources and emit one FeatureCollection.

    Without --output or --submit-url the collection is printed to stdout.
    """
    settings = get_settings()
    submit_url = submit_url or settings.submit_url

    try:
        result = run_pipeline(settings)
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(2)

    table = Table(title="Sources")
    table.add_column("Source")
    table.add_column("Status")
    table.add_column("Detections")
    table.add_column("Duration")

    for source_result in result.source_results:
        status = "[green]Success[/green]" if source_result.success else "[red]Failed[/red]"
        duration = f"{source_result.duration_seconds:.1f}s" if source_result.duration_seconds else "-"
        table.add_row(source_result.source_id, status, str(source_result.records_parsed), duration)

    console.print(table)
    console.print(
        f"{result.records_total} detections, {result.records_unique} unique, "
        f"{result.feature_count} features"
    )

    sinks = []
    if output:
        sinks.append(JsonFileSink(output, indent=indent))
    if submit_url:
        sinks.append(HttpSink(submit_url))

    if not sinks:
        click.echo(json.dumps(result.collection, indent=indent))
        return

    for sink in sinks:
        try:
            sink.submit(result.collection)
        except (HTTPError, httpx.HTTPError, OSError) as e:
            logger.error(f"Submission failed: {e}")
            console.print(f"[red]Submission failed: {e}[/red]")
            sys.exit(1)


@cli.command()
def sources():
    """List all available upstream sources."""
    enabled = set(get_settings().firms.source_keys)

    table = Table(title="Available Sources")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Product")
    table.add_column("Enabled")

    for source_id, info in SOURCE_CONFIG.items():
        table.add_row(
            source_id,
            info["name"],
            info["kind"],
            info["product"],
            "[green]✓[/green]" if source_id in enabled else "[dim]✗[/dim]",
        )

    console.print(table)


if __name__ == "__main__":
    cli()
