#!/usr/bin/env python3
"""
Bloom CLI

Command-line interface for infant growth forecasts, percentiles and
medication reminder schedules.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

console = Console()


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()


def _load_json(path: str, model_type):
    """Validate a JSON file against a model type, as a CLI error on failure."""
    try:
        return TypeAdapter(model_type).validate_json(Path(path).read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid data in {path}:\n{e}")


def _fmt(value: Optional[float], digits: int) -> str:
    return f"{value:.{digits}f}" if value is not None else "-"


def _status_style(status: str) -> str:
    return {"normal": "green", "monitor": "yellow", "concern": "red"}.get(status, "white")


def _render_predictions(predictions, fmt: str, output: Optional[str], logs=None, birth_date=None):
    """Print or write forecasts in the requested format."""
    from bloom.engines import get_growth_status
    from bloom.exporters import export_predictions_json, export_growth_report_markdown

    out_path = Path(output) if output else None

    if fmt == "json":
        content = export_predictions_json(predictions, out_path)
        if not out_path:
            click.echo(content)
    elif fmt == "markdown":
        content = export_growth_report_markdown(logs or [], birth_date, predictions, out_path)
        if not out_path:
            click.echo(content)
    else:
        if not predictions:
            console.print("[yellow]No growth logs to forecast from[/yellow]")
            return

        first = predictions[0]
        console.print(Panel(
            f"Confidence: [bold]{first.confidence_score:.0%}[/bold]\n"
            f"Nutrition score: {first.factors.nutrition.nutrition_score:.2f}\n"
            f"Growth pattern: {first.factors.consistency.growth_pattern.value}\n"
            f"Weight trend: {first.factors.percentile_tracking.weight_trend.value}\n"
            f"Adjusted: {'yes' if first.adjusted_prediction else 'no'}",
            title="Forecast Summary",
            border_style="blue",
        ))

        table = Table(title="Growth Forecast")
        table.add_column("Date")
        table.add_column("Weight (kg)", justify="right")
        table.add_column("%ile", justify="right", style="cyan")
        table.add_column("Length (cm)", justify="right")
        table.add_column("%ile", justify="right", style="cyan")
        table.add_column("HC (cm)", justify="right")
        table.add_column("%ile", justify="right", style="cyan")
        table.add_column("Status")

        recommendations = []
        for pred in predictions:
            report = get_growth_status(pred)
            style = _status_style(report.status.value)
            table.add_row(
                pred.date.strftime("%Y-%m-%d"),
                _fmt(pred.weight_kg, 2),
                f"{pred.weight_percentile:.1f}",
                _fmt(pred.height_cm, 1),
                f"{pred.height_percentile:.1f}",
                _fmt(pred.head_cm, 1),
                f"{pred.head_percentile:.1f}",
                f"[{style}]{report.status.value}[/{style}]",
            )
            for rec in pred.recommendations + report.recommendations:
                if rec not in recommendations:
                    recommendations.append(rec)

        console.print(table)
        if recommendations:
            console.print("\n[bold]Recommendations:[/bold]")
            for rec in recommendations:
                console.print(f"  • {rec}")

        if out_path:
            export_predictions_json(predictions, out_path)
            console.print(f"[green]✓ Exported to {out_path}[/green]")


@click.group()
@click.version_option(version="0.1.0", prog_name="bloom")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """
    Bloom - Infant Growth Forecasts

    Forecast weight, length and head circumference from a child's
    measurement history and place them on WHO growth curves.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@cli.command()
@click.argument("logs_path", type=click.Path(exists=True))
@click.option("--birth-date", type=click.DateTime(formats=["%Y-%m-%d"]), required=True,
              help="Child's date of birth (YYYY-MM-DD)")
@click.option("--nutrition", "nutrition_path", type=click.Path(exists=True),
              help="JSON file of nutrition logs")
@click.option("--months", type=click.IntRange(min=1), default=3, help="Months to forecast")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Reference date for the nutrition window (defaults to today)")
@click.option("--format", "fmt", type=click.Choice(["table", "json", "markdown"]), default="table",
              help="Output format")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
def predict(
    logs_path: str,
    birth_date: datetime,
    nutrition_path: Optional[str],
    months: int,
    today: Optional[datetime],
    fmt: str,
    output: Optional[str],
):
    """
    Forecast growth from a JSON file of growth logs.

    Example:

        bloom predict logs.json --birth-date 2024-01-01 --months 3
    """
    from bloom.models import GrowthLog, NutritionLog
    from bloom.engines import predict_growth

    logs = _load_json(logs_path, list[GrowthLog])
    nutrition_logs = _load_json(nutrition_path, list[NutritionLog]) if nutrition_path else []

    predictions = predict_growth(
        logs,
        birth_date.date(),
        nutrition_logs,
        months=months,
        today=today.date() if today else None,
    )
    _render_predictions(predictions, fmt, output, logs=logs, birth_date=birth_date.date())


@cli.command("fetch-predict")
@click.argument("child_id")
@click.option("--birth-date", type=click.DateTime(formats=["%Y-%m-%d"]), required=True,
              help="Child's date of birth (YYYY-MM-DD)")
@click.option("--months", type=click.IntRange(min=1), default=3, help="Months to forecast")
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
def fetch_predict(child_id: str, birth_date: datetime, months: int, fmt: str, output: Optional[str]):
    """
    Forecast growth from logs stored in Supabase.

    Requires SUPABASE_URL and SUPABASE_ANON_KEY.
    """
    from bloom.db import is_configured
    from bloom.services import predict_for_child

    if not is_configured():
        raise click.ClickException("Supabase is not configured (set SUPABASE_URL and SUPABASE_ANON_KEY)")

    predictions = predict_for_child(child_id, birth_date.date(), months)
    _render_predictions(predictions, fmt, output)


@cli.command()
@click.option("--age-months", type=click.FloatRange(min=0), required=True, help="Age in months")
@click.option("--weight", type=float, help="Weight in kg")
@click.option("--height", type=float, help="Length/height in cm")
@click.option("--head", type=float, help="Head circumference in cm")
def percentile(age_months: float, weight: Optional[float], height: Optional[float], head: Optional[float]):
    """
    Place measurements on the WHO growth curves.

    Example:

        bloom percentile --age-months 6 --weight 7.9 --height 67.6
    """
    from knowledge.growth import calculate_percentiles, interpret_percentile

    if weight is None and height is None and head is None:
        raise click.UsageError("Give at least one of --weight, --height or --head")

    result = calculate_percentiles(age_months, weight, height, head)

    table = Table(title=f"Percentiles at {age_months:g} months")
    table.add_column("Measurement", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Percentile", justify="right")
    table.add_column("Interpretation")

    for label, value, pct, measure in [
        ("Weight (kg)", weight, result.weight, "weight"),
        ("Length (cm)", height, result.height, "length"),
        ("Head (cm)", head, result.head, "head circumference"),
    ]:
        if value is None:
            continue
        table.add_row(label, f"{value:g}", f"{pct:.1f}", interpret_percentile(pct, measure))

    console.print(table)


@cli.command()
@click.argument("schedule_path", type=click.Path(exists=True))
@click.option("--medication", required=True, help="Medication name")
@click.option("--dosage", required=True, help="Dose description, e.g. '5 ml'")
@click.option("--person", default="baby", help="Who takes the medication")
@click.option("--before", type=click.IntRange(min=0), default=5,
              help="Minutes before the dose to notify")
def reminders(schedule_path: str, medication: str, dosage: str, person: str, before: int):
    """
    Expand a medication schedule into reminder times.

    Example:

        bloom reminders schedule.json --medication "Vitamin D" --dosage "400 IU"
    """
    from bloom.models import MedicationSchedule
    from bloom.engines import expand_schedule

    schedule = _load_json(schedule_path, MedicationSchedule)
    items = expand_schedule(medication, dosage, schedule, person, notify_minutes_before=before)

    if not items:
        console.print("[yellow]No upcoming doses in this schedule[/yellow]")
        return

    table = Table(title=f"{medication} Reminders")
    table.add_column("Dose time")
    table.add_column("Notify at", style="cyan")
    table.add_column("Message")
    for item in items:
        table.add_row(
            item.dose_time.strftime("%Y-%m-%d %H:%M"),
            item.notify_at.strftime("%Y-%m-%d %H:%M"),
            item.body,
        )
    console.print(table)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
