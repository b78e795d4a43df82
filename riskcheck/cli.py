"""Command-line interface for riskcheck.

Built with Typer for a modern CLI experience with rich formatting.

Features:
- Risk register analysis with expected loss, dispersion and risk level
- Adding, updating and removing events in an events file
- Import/export of events and reports (JSON, CSV, Excel)
- Template generation with the example events
"""

import typer
from typing import Optional, List
from pathlib import Path
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.aggregator import RiskAggregator
from .core.config import RiskCheckConfig, load_config
from .core.data_models import RiskEvent, default_events
from .core.exceptions import RiskCheckError, FileFormatError, ParseError
from .core.logging_config import setup_logging
from .core.validation import build_event, parse_loss, parse_probability_percent
from .io.io_excel import ExcelImporter, ExcelExporter
from .io.io_csv import CSVImporter, CSVExporter
from .io.io_json import JSONImporter, JSONExporter
from .reporting.reporting import summary_rows, RISK_LEVEL_COLORS

app: typer.Typer = typer.Typer(help="Risk register analysis: expected loss, integral risk and risk level")
console: Console = Console()

IMPORTERS = {
    '.json': JSONImporter,
    '.csv': CSVImporter,
    '.xlsx': ExcelImporter,
}

EXPORTERS = {
    '.json': JSONExporter,
    '.csv': CSVExporter,
    '.xlsx': ExcelExporter,
}


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """Risk register analysis: expected loss, integral risk and risk level."""
    setup_logging(log_level, log_file)


@app.command()
def analyze(
    events: Optional[str] = typer.Option(None, "--events", "-e", help="Events file (JSON, CSV or XLSX); example events if omitted"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
    normalize: bool = typer.Option(False, "--normalize", help="Renormalize loaded probabilities before analysis"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Export report (.json, .csv or .xlsx)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the event table"),
):
    """Analyze a risk register."""
    try:
        config_data = load_config(config)
        aggregator = _create_aggregator(config_data, events)

        if normalize:
            aggregator.normalize_probabilities()

        if verbose:
            _display_events(aggregator.events, config_data.currency_symbol)

        _display_analysis(aggregator, config_data.currency_symbol)

        if output:
            _export_report(aggregator, output)
            console.print(f"[green]✅ Report saved to: {output}[/green]")

    except RiskCheckError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def add(
    file: str = typer.Argument(..., help="Events file to modify"),
    description: str = typer.Option(..., "--description", "-d", help="Event description"),
    loss: str = typer.Option(..., "--loss", "-l", help="Possible loss amount"),
    probability: str = typer.Option(..., "--probability", "-p", help="Probability in percent (0-100)"),
):
    """Add a risk event to an events file."""
    try:
        aggregator = RiskAggregator(_load_events(file))
        event = build_event(description, loss, probability)
        aggregator.add(event)
        _save_events(aggregator.events, file)
        console.print(f"[green]✅ Added risk event: {event.description}[/green]")
        _display_events(aggregator.events)

    except RiskCheckError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def remove(
    file: str = typer.Argument(..., help="Events file to modify"),
    index: int = typer.Argument(..., help="Position of the event (0-based)"),
):
    """Remove a risk event from an events file."""
    try:
        aggregator = RiskAggregator(_load_events(file))
        removed = aggregator.remove_at(index)
        _save_events(aggregator.events, file)
        console.print(f"[green]✅ Removed risk event: {removed.description}[/green]")
        _display_events(aggregator.events)

    except RiskCheckError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def update(
    file: str = typer.Argument(..., help="Events file to modify"),
    index: int = typer.Argument(..., help="Position of the event (0-based)"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    loss: Optional[str] = typer.Option(None, "--loss", "-l", help="New possible loss amount"),
    probability: Optional[str] = typer.Option(None, "--probability", "-p", help="New probability in percent (0-100)"),
):
    """Update a risk event in an events file.

    Fields that are not given keep their current values.
    """
    try:
        aggregator = RiskAggregator(_load_events(file))
        current = aggregator.event_at(index)

        changes = {}
        if description is not None:
            if not description.strip():
                raise ParseError("Description is required", field_name='description',
                                 raw_value=description)
            changes['description'] = description.strip()
        if loss is not None:
            changes['possible_loss'] = parse_loss(loss)
        if probability is not None:
            changes['probability'] = parse_probability_percent(probability)

        updated = current.model_copy(update=changes)
        aggregator.update_at(updated, index)
        _save_events(aggregator.events, file)
        console.print(f"[green]✅ Updated risk event {index}: {updated.description}[/green]")
        _display_events(aggregator.events)

    except RiskCheckError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def template(
    output: str = typer.Option("risk_events.json", "--output", "-o", help="Output file (.json, .csv or .xlsx)"),
):
    """Write the example events as a starting events file."""
    try:
        _save_events(default_events(), output)
        console.print(f"[green]✅ Template created: {output}[/green]")

    except RiskCheckError as e:
        console.print(f"[red]❌ Error creating template: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def info(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Configuration file (JSON or YAML)"),
):
    """Show tool information and risk level thresholds."""
    try:
        config_data = load_config(config)
    except RiskCheckError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        raise typer.Exit(1)

    console.print("[bold blue]riskcheck Information[/bold blue]")
    console.print("=" * 50)
    console.print(f"Version: {__version__}")
    console.print("")

    table = Table(title="Risk Level Thresholds (coefficient of variation)")
    table.add_column("Risk Level")
    table.add_column("Range")
    table.add_row("Low Risk", f"< {config_data.low_threshold}")
    table.add_row("Medium Risk", f"{config_data.low_threshold} to < {config_data.high_threshold}")
    table.add_row("High Risk", f">= {config_data.high_threshold}")
    console.print(table)


# Utility functions

def _create_aggregator(config_data: RiskCheckConfig, events_file: Optional[str]) -> RiskAggregator:
    """Aggregator seeded from a file, or from the configuration defaults."""
    if not events_file:
        return config_data.create_aggregator()
    return RiskAggregator(
        _load_events(events_file),
        low_threshold=config_data.low_threshold,
        high_threshold=config_data.high_threshold,
    )


def _format_for(file_path: str, handlers: dict):
    suffix = Path(file_path).suffix.lower()
    if suffix not in handlers:
        raise FileFormatError(
            f"Unsupported file format: {suffix or '(none)'}",
            file_path=file_path,
            expected_format="json, csv or xlsx",
            detected_format=suffix,
        )
    return handlers[suffix]()


def _load_events(file_path: str) -> List[RiskEvent]:
    """Load events from file."""
    return _format_for(file_path, IMPORTERS).import_events(file_path)


def _save_events(events: List[RiskEvent], file_path: str) -> None:
    _format_for(file_path, EXPORTERS).export_events(events, file_path)


def _export_report(aggregator: RiskAggregator, file_path: str) -> None:
    _format_for(file_path, EXPORTERS).export_report(aggregator, file_path)


def _display_events(events: List[RiskEvent], currency_symbol: str = "$"):
    """Display the event table."""
    table = Table(title="Risk Events")
    table.add_column("#", justify="right")
    table.add_column("Description")
    table.add_column("Possible Loss", justify="right")
    table.add_column("Probability", justify="right")

    for i, event in enumerate(events):
        table.add_row(
            str(i),
            event.description,
            f"{currency_symbol}{int(event.possible_loss):,}",
            f"{event.probability:.1%}",
        )

    console.print(table)


def _display_analysis(aggregator: RiskAggregator, currency_symbol: str = "$"):
    """Display analysis summary."""
    table = Table(title="Risk Analysis")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Risk Events", str(len(aggregator)))
    for label, value in summary_rows(aggregator, currency_symbol):
        if label == "Risk Level":
            color = RISK_LEVEL_COLORS[aggregator.risk_level]
            value = f"[bold {color}]{value}[/bold {color}]"
        table.add_row(label, value)

    console.print(table)


if __name__ == "__main__":
    app()
