import datetime
from pathlib import Path
from typing import Optional

import typer

from ecal.generator import EventGenerator
from ecal.models import CalendarConfig
from ecal.parser import parse_lines
from ecal.renderer import CalendarRenderer
from ecal.rules import classify_rule
from ecal.utils import configure_logging, load_settings, read_rule_lines

app = typer.Typer(help="Terminal calendar annotated with events from a rule file.")


@app.command()
def show(
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Start month (1-12, default: current month)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Start year (default: current year)"),
    num_months: Optional[int] = typer.Option(None, "--num-months", "-n", help="Number of months to display"),
    columns: Optional[int] = typer.Option(None, "--columns", help="Number of calendar columns per row"),
    monday_first: Optional[bool] = typer.Option(None, "--monday-first/--sunday-first", help="First day of the week"),
    weeks: Optional[bool] = typer.Option(None, "--weeks/--no-weeks", help="Show ISO week numbers"),
    calendar_only: bool = typer.Option(False, "--calendar-only", "-c", help="Show only the calendar"),
    events_only: bool = typer.Option(False, "--events-only", "-e", help="Show only the events list"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Path to events file (default from settings: events.txt)"),
    settings: Optional[Path] = typer.Option(None, help="Settings file (default: config/settings.yaml)"),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Force or strip terminal colors"),
    today: Optional[datetime.datetime] = typer.Option(None, formats=["%Y-%m-%d"], hidden=True),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
):
    """
    Display the calendar and the events list.
    """
    configure_logging(verbose)
    current = today.date() if today else datetime.date.today()

    try:
        defaults = load_settings(settings)

        if month is None:
            month = current.month
        elif not 1 <= month <= 12:
            typer.echo("Warning: Month must be between 1 and 12. Using current month.", err=True)
            month = current.month

        if num_months is None:
            num_months = defaults.num_months
        elif num_months < 1:
            typer.echo("Warning: Invalid number of months provided. Using 1.", err=True)
            num_months = 1

        if columns is None:
            columns = defaults.num_columns
        elif columns < 1:
            typer.echo("Warning: Invalid number of columns provided. Using 1.", err=True)
            columns = 1

        config = CalendarConfig(
            start_month=month,
            start_year=year if year is not None else current.year,
            num_months=num_months,
            num_columns=columns,
            monday_first=defaults.monday_first if monday_first is None else monday_first,
            show_calendar=not events_only,
            show_events=not calendar_only,
            show_week_numbers=defaults.show_week_numbers if weeks is None else weeks,
        )

        events_path = file or Path(defaults.events_file)
        try:
            lines = read_rule_lines(events_path)
        except FileNotFoundError:
            typer.echo(f"Info: Event file '{events_path}' not found. Continuing without events.", err=True)
            lines = []

        events = EventGenerator(config).generate(parse_lines(lines))
        for line in CalendarRenderer(config, events).render(current):
            typer.echo(line, color=color)

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def verify_config(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Path to events file"),
    settings: Optional[Path] = typer.Option(None, help="Settings file (default: config/settings.yaml)"),
):
    """Load settings and the events file without rendering anything."""
    try:
        s = load_settings(settings)
        lines = read_rule_lines(file or Path(s.events_file))
        rules = parse_lines(lines)
        ignored = len(lines) - len(rules)
        unknown = [r.rule_text for r in rules if classify_rule(r.rule_text) is None]
        typer.echo("✅ Configuration valid!")
        typer.echo(f"Found {len(rules)} rules.")
        typer.echo(f"Ignored {ignored} blank or comment lines.")
        if unknown:
            typer.echo(f"{len(unknown)} rules not recognized: {', '.join(unknown)}")
    except Exception as e:
        typer.echo(f"❌ Configuration invalid: {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
