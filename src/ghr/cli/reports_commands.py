"""ghr reports - Browse hardware reports from the collection service."""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ghr.display.tiles import component_tiles
from ghr.errors import GhrError
from ghr.report.components import ComponentType

from .common import config_option, file_option, load_settings, load_store, url_option

console = Console()


@click.group()
def reports():
    """Browse hardware reports."""


@reports.command("list")
@url_option
@config_option
@file_option
@click.option("--json", "as_json", is_flag=True, help="Print the raw report JSON")
def list_reports(url, config_path, report_file, as_json):
    """List the reports held by the collection service."""
    try:
        settings = load_settings(config_path, url)
        store = load_store(settings, report_file)
    except GhrError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([r.to_wire() for r in store.reports], indent=2))
        return

    if not store.reports:
        console.print("[yellow]No reports found[/yellow]")
        return

    table = Table(title="Reports", caption=f"from {escape(store.source.describe())}")
    table.add_column("ID")
    table.add_column("Received")
    table.add_column("OS")
    table.add_column("Arch")
    table.add_column("Components", justify="right")
    table.add_column("Rejected", justify="right")

    for wrapped in store.reports:
        report = wrapped.report
        rejected = len(report.rejected)
        table.add_row(
            escape(wrapped.id),
            wrapped.recv_time.isoformat(timespec="seconds"),
            escape(f"{report.os.name} {report.os.version}"),
            escape(report.os.architecture),
            str(len(report.components)),
            f"[yellow]{rejected}[/yellow]" if rejected else "0",
        )

    console.print(table)


@reports.command("show")
@click.argument("report_id")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in ComponentType]),
    help="Only show components of this kind",
)
@url_option
@config_option
@file_option
def show_report(report_id, kind, url, config_path, report_file):
    """Show the components of one report."""
    try:
        settings = load_settings(config_path, url)
        store = load_store(settings, report_file)
    except GhrError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    wrapped = store.get(report_id)
    if wrapped is None:
        console.print(f"[red]Report not found: {escape(report_id)}[/red]")
        raise SystemExit(1)

    report = wrapped.report
    console.print(f"[bold]{escape(wrapped.id)}[/bold]")
    console.print(f"  Received: {wrapped.recv_time.isoformat(timespec='seconds')}")
    console.print(
        f"  OS: {escape(report.os.name)}, {escape(report.os.version)} "
        f"({escape(report.os.architecture)})"
    )

    tiles = component_tiles(report, ComponentType(kind) if kind else None)
    if tiles:
        table = Table()
        table.add_column("Icon")
        table.add_column("Kind")
        table.add_column("Name")
        table.add_column("Value")
        for tile in tiles:
            table.add_row(
                tile.icon.value,
                tile.kind.value if tile.kind else "-",
                escape(tile.name),
                escape(tile.value),
            )
        console.print(table)
    else:
        console.print("[yellow]No components[/yellow]")

    if report.rejected:
        console.print(
            f"[yellow]{len(report.rejected)} component(s) could not be decoded[/yellow]"
        )
        for rejected in report.rejected:
            console.print(f"  #{rejected.index}: {escape(rejected.error)}")
