"""Helpers shared by GHR CLI commands."""

import asyncio
from pathlib import Path

import click

from ghr.client.files import FileReportSource
from ghr.client.http import ReportServiceClient
from ghr.config.loader import load_client_config
from ghr.config.models import ClientConfig
from ghr.store.store import ReportStore, StoreState

url_option = click.option(
    "--url",
    envvar="GHR_URL",
    help="Report service base URL (default from config, else http://localhost:8080)",
)
config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Client config YAML (default: ~/.ghr/client.yaml)",
)
file_option = click.option(
    "--file",
    "report_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read reports from a saved JSON file instead of the service",
)


def load_settings(config_path: Path | None, url: str | None) -> ClientConfig:
    """Load client config and apply command-line overrides."""
    settings = load_client_config(config_path)
    if url:
        service = settings.service.model_copy(update={"url": url})
        settings = settings.model_copy(update={"service": service})
    return settings


def build_source(
    settings: ClientConfig, report_file: Path | None = None
) -> FileReportSource | ReportServiceClient:
    if report_file is not None:
        return FileReportSource(report_file)
    return ReportServiceClient(settings.service)


def load_store(
    settings: ClientConfig, report_file: Path | None = None
) -> ReportStore:
    """Create a store and run its initial refresh.

    Raises:
        GhrError: If the refresh failed and errors are surfaced.
    """
    store = ReportStore(
        build_source(settings, report_file),
        surface_errors=settings.surface_errors,
    )
    asyncio.run(store.refresh())
    if store.state is StoreState.ERROR and store.error is not None:
        raise store.error
    return store
