"""GHR CLI - Main entry point."""

import asyncio
import logging
import logging.handlers
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .common import config_option, load_settings, url_option

console = Console()
logger = logging.getLogger(__name__)

# Log rotation: 5 MB per file, keep 3 backups (~20 MB max)
_LOG_MAX_BYTES = 5 * 1024 * 1024
_LOG_BACKUP_COUNT = 3
_LOG_DIR = Path.home() / ".ghr" / "logs"


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging with console and rotating file handlers."""
    log_format = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Console handler (stderr), warnings only unless verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)

    # Rotating file handler
    try:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "ghr.log",
            maxBytes=_LOG_MAX_BYTES,
            backupCount=_LOG_BACKUP_COUNT,
        )
    except OSError as e:
        logger.warning(f"File logging disabled: {e}")
        return
    file_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(file_handler)


@click.group()
@click.version_option(version="0.1.0", prog_name="ghr")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose):
    """GHR - Global Hardware Report client

    Fetches hardware inventory reports from a GHR collection service and
    renders them in the terminal.
    """
    _setup_logging(verbose)


from .reports_commands import reports  # noqa: E402

cli.add_command(reports)


@cli.command()
@url_option
@config_option
def ping(url, config_path):
    """Check that the collection service answers."""
    from ghr.client.http import ReportServiceClient
    from ghr.errors import GhrError

    try:
        settings = load_settings(config_path, url)
        client = ReportServiceClient(settings.service)
        greeting = asyncio.run(client.ping())
    except GhrError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    console.print(f"[green]{escape(client.base_url)}[/green] says: {escape(greeting)}")


@cli.command()
def icons():
    """Show the icon used for each component kind."""
    from ghr.display.icons import FALLBACK_ICON, resolve_icon
    from ghr.report.components import ComponentType

    table = Table(title="Component Icons")
    table.add_column("Kind")
    table.add_column("Icon")
    for kind in ComponentType:
        table.add_row(kind.value, resolve_icon(kind).value)
    table.add_row("[dim](other)[/dim]", FALLBACK_ICON.value)
    console.print(table)


if __name__ == "__main__":
    cli()
