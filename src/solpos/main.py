"""CLI interface for solpos.

This module provides a command-line interface for computing solar position
and extraterrestrial irradiance from YAML configuration files without
writing code.

Usage:
    solpos compute atlanta.yaml
    solpos compute atlanta.yaml --format json
    solpos profile atlanta.yaml --step 30
    solpos init "Atlanta" -o atlanta.yaml
    solpos validate atlanta.yaml
    solpos decode 0x10
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from solpos.calculation.decoder import decode as decode_error_code
from solpos.calculation.engine import compute as compute_record
from solpos.calculation.sweep import day_profile
from solpos.core.config import (
    LocationConfig,
    SiteConfig,
    SurfaceConfig,
    TimeConfig,
    load_config,
    save_config,
)
from solpos.core.record import PositionRecord
from solpos.core.validation import FIELD_RULES, ErrorCode

app = typer.Typer(
    name="solpos",
    help="NREL SOLPOS 2.0 solar position and intensity calculator.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

#: Outputs shown by ``compute`` on the console, with units.
SUMMARY_OUTPUTS: list[tuple[str, str, str]] = [
    ("zenref", "Refracted zenith", "deg"),
    ("elevref", "Refracted elevation", "deg"),
    ("azim", "Azimuth", "deg"),
    ("sretr", "Sunrise", "min"),
    ("ssetr", "Sunset", "min"),
    ("amass", "Air mass", ""),
    ("ampress", "Pressure air mass", ""),
    ("etrn", "ETR normal", "W/m²"),
    ("etr", "ETR horizontal", "W/m²"),
    ("etrtilt", "ETR tilted", "W/m²"),
    ("cosinc", "Incidence cosine", ""),
    ("prime", "Kt prime factor", ""),
    ("unprime", "Kt unprime factor", ""),
    ("sbcf", "Shadow band factor", ""),
]


def _load_or_exit(config_path: Path) -> SiteConfig:
    """Load a configuration, turning load errors into a CLI exit."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        path = escape(str(config_path))
        console.print(f"[red]Error:[/] Config file not found: {path}")
        raise typer.Exit(1) from None
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1) from None


def _report_errors(code: ErrorCode, record: PositionRecord) -> None:
    """Print decoded diagnostics for a nonzero engine result."""
    console.print(f"[red]Error code:[/] {int(code):#x}")
    for line in decode_error_code(code, record):
        console.print(f"  {line}", markup=False)


def _format_date(record: PositionRecord) -> str:
    """Format the record's date and local standard time."""
    if record.month is None or record.day is None:
        return f"{record.year} day {record.daynum}"
    return (
        f"{record.year}-{record.month:02d}-{record.day:02d} "
        f"{record.hour:02d}:{record.minute:02d}:{record.second:05.2f} LST"
    )


def _minutes_to_clock(minutes: float | None) -> str:
    """Format minutes from midnight as HH:MM, or the raw marker value."""
    if minutes is None:
        return "-"
    if not 0 <= minutes < 1440:
        return f"{minutes:.0f}"
    hours, rest = divmod(round(minutes), 60)
    return f"{hours:02d}:{rest:02d}"


@app.command()
def compute(
    config_path: Annotated[Path, typer.Argument(help="Path to YAML configuration")],
    format_: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: console, json"),
    ] = "console",
) -> None:
    """Compute solar position for the configured site and time."""
    if format_ not in ("console", "json"):
        console.print(f"[red]Error:[/] Unknown format '{format_}'")
        raise typer.Exit(1)

    config = _load_or_exit(config_path)
    record = config.to_record()
    code = compute_record(record)

    if format_ == "json":
        result = {
            "name": config.name,
            "error_code": int(code),
            "date": {
                "year": record.year,
                "month": record.month,
                "day": record.day,
                "daynum": record.daynum,
            },
            "outputs": record.outputs(),
        }
        typer.echo(json.dumps(result, indent=2))
    else:
        table = Table(title=config.name)
        table.add_column("Output", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Unit")
        for name, label, unit in SUMMARY_OUTPUTS:
            value = getattr(record, name)
            if value is None:
                continue
            shown = (
                _minutes_to_clock(value)
                if name in ("sretr", "ssetr")
                else f"{value:.6f}"
            )
            table.add_row(label, shown, "" if name in ("sretr", "ssetr") else unit)
        console.print(f"\n[bold]{_format_date(record)}[/] (day {record.daynum})")
        console.print(table)

    if code:
        _report_errors(code, record)
        raise typer.Exit(1)


@app.command()
def profile(
    config_path: Annotated[Path, typer.Argument(help="Path to YAML configuration")],
    step: Annotated[
        int,
        typer.Option("--step", "-s", help="Time step in minutes"),
    ] = 60,
) -> None:
    """Tabulate position and irradiance across the configured day."""
    config = _load_or_exit(config_path)

    try:
        result = day_profile(config.to_record(), step_minutes=step)
    except ValueError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None

    table = Table(title=f"{config.name}: daily profile")
    table.add_column("Time", style="cyan")
    table.add_column("Zenith", justify="right")
    table.add_column("Azimuth", justify="right")
    table.add_column("ETR", justify="right")
    table.add_column("ETR tilt", justify="right")
    table.add_column("Air mass", justify="right")

    def fmt(value: float | None, spec: str) -> str:
        return "-" if value is None else format(value, spec)

    for row in result.rows:
        table.add_row(
            f"{row.hour:02d}:{row.minute:02d}",
            fmt(row.zenref, ".2f"),
            fmt(row.azim, ".2f"),
            fmt(row.etr, ".1f"),
            fmt(row.etrtilt, ".1f"),
            fmt(row.amass, ".3f"),
        )

    console.print(table)
    console.print(f"  Sunrise: {_minutes_to_clock(result.sretr)}")
    console.print(f"  Sunset: {_minutes_to_clock(result.ssetr)}")
    console.print(f"  ETR insolation: {result.etr_insolation():.0f} Wh/m²")

    if result.error_code:
        console.print(f"[yellow]Warning:[/] error code {int(result.error_code):#x}")


@app.command()
def init(
    name: Annotated[str, typer.Argument(help="Name for the new site")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
) -> None:
    """Generate a starter YAML configuration file."""
    config = SiteConfig(
        name=name,
        location=LocationConfig(latitude=33.65, longitude=-84.43, timezone=-5.0),
        time=TimeConfig(year=1999, day_of_year=203, hour=9, minute=45, second=37),
        surface=SurfaceConfig(tilt=33.65, aspect=135.0),
    )

    # Generate filename from name if not specified
    if output is None:
        # Convert name to filename: "My Site" -> "my-site.yaml"
        filename = name.lower().replace(" ", "-") + ".yaml"
        output = Path(filename)

    save_config(config, output)
    console.print(f"[green]Created:[/] {output}")
    console.print("\nEdit this file for your site and time, then run:")
    console.print(f"  solpos compute {output}")


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to YAML configuration")],
) -> None:
    """Validate a configuration file and its input ranges."""
    config = _load_or_exit(config_path)
    record = config.to_record()
    code = compute_record(record)

    if code:
        console.print(f"[red]Invalid:[/] {config.name}")
        _report_errors(code, record)
        raise typer.Exit(1)

    console.print(f"[green]Valid:[/] {config.name}")
    console.print(
        f"  Location: {config.location.latitude}N, {config.location.longitude}E "
        f"(UTC{config.location.timezone:+g})"
    )
    console.print(f"  Date: {_format_date(record)}")
    surface = config.surface
    console.print(f"  Surface: tilt {surface.tilt}, aspect {surface.aspect}")
    console.print(f"  Functions: {', '.join(config.functions)}")


@app.command()
def decode(
    code: Annotated[str, typer.Argument(help="Error code, decimal or 0x hex")],
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration to quote values from"),
    ] = None,
) -> None:
    """Explain the bits of an error code."""
    try:
        raw = int(code, 0)
    except ValueError:
        raw = -1
    if raw < 0:
        console.print(f"[red]Error:[/] Not an error code: {code}")
        raise typer.Exit(1)
    value = ErrorCode(raw)

    if not value:
        console.print("[green]No errors[/]")
        return

    if config_path is not None:
        record = _load_or_exit(config_path).to_record()
        for line in decode_error_code(value, record):
            console.print(line, markup=False)
        return

    rules = {rule.error: rule for rule in FIELD_RULES.values()}
    table = Table(title=f"Error code {int(value):#x}")
    table.add_column("Bit", style="cyan")
    table.add_column("Input")
    table.add_column("Valid range")
    for error in ErrorCode:
        if not value & error:
            continue
        rule = rules.get(error)
        if rule is None:
            table.add_row(error.name, "function selection", "-")
        else:
            table.add_row(error.name, rule.label, rule.bounds)
    console.print(table)


def main() -> int:
    """Application entry point.

    Returns:
        Exit code (0 for success).
    """
    try:
        app()
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
