"""
Main CLI application using Typer.
"""

import asyncio
import logging
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from pendulum import Date, DateTime
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.json_calendar import JsonBusyCalendar
from ..adapters.memory_calendar import InMemoryBusyCalendar
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SchedulingError
from ..domain.weekly_template import DAYS_PER_WEEK, WEEKDAY_NAMES
from ..services.appointment_planner import AppointmentRequestPlanner
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="slotgrid",
    help="Find appointment start times that fit a weekly template and two busy calendars",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _determine_date_range(
    *,
    tz: str,
    this_week: bool,
    next_week: bool,
    start_option: Optional[str],
    end_option: Optional[str]
):
    """
    Resolve the desired date window based on shortcut flags or explicit dates.
    Returns (start_date, end_date), both inclusive.
    """
    if this_week and next_week:
        console.print("[red]Error: --this-week and --next-week cannot be combined.[/red]")
        raise typer.Exit(1)

    today = pendulum.today(tz).date()

    if this_week:
        return today, today.end_of("week")

    if next_week:
        next_monday = today.next(pendulum.MONDAY)
        return next_monday, next_monday.add(days=6)

    if start_option:
        try:
            start_date = pendulum.from_format(start_option, "YYYY-MM-DD", tz=tz).date()
        except ValueError as e:
            console.print(f"[red]Could not parse start date: {escape(str(e))}[/red]")
            raise typer.Exit(1)
    else:
        start_date = today

    if end_option:
        try:
            end_date = pendulum.from_format(end_option, "YYYY-MM-DD", tz=tz).date()
        except ValueError as e:
            console.print(f"[red]Could not parse end date: {escape(str(e))}[/red]")
            raise typer.Exit(1)
    else:
        end_date = start_date.add(days=6)

    return start_date, end_date


def _busy_calendar(path: Optional[Path]):
    """Return a JSON-backed calendar, or an empty one when no file is set."""
    if path is None:
        return InMemoryBusyCalendar()
    return JsonBusyCalendar(path)


def _group_by_day(times: List[DateTime]) -> "OrderedDict[Date, List[DateTime]]":
    grouped: "OrderedDict[Date, List[DateTime]]" = OrderedDict()
    for start in times:
        grouped.setdefault(start.date(), []).append(start)
    return grouped


@app.command()
def find(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    provider: Annotated[Optional[Path], typer.Option("--provider", help="Provider busy-calendar JSON file")] = None,
    client: Annotated[Optional[Path], typer.Option("--client", help="Client busy-calendar JSON file")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End date (YYYY-MM-DD), inclusive")] = None,
    boundary: Annotated[Optional[int], typer.Option("--boundary", "-b", help="Start boundary in minutes (5, 10, 15, 20, 30, 60)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Appointment duration in minutes")] = None,
    this_week: Annotated[bool, typer.Option("--this-week", help="Search from today to the end of the current week.")] = False,
    next_week: Annotated[bool, typer.Option("--next-week", help="Search the coming week (Monday-Sunday).")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Find appointment start times free for both provider and client.

    Examples:

        slotgrid find --provider provider.json --client client.json

        slotgrid find --next-week --duration 90 --boundary 15

        slotgrid find --start 2024-11-25 --end 2024-11-29
    """
    _configure_logging(verbose)

    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        tz = config.timezone

        start_date, end_date = _determine_date_range(
            tz=tz,
            this_week=this_week,
            next_week=next_week,
            start_option=start,
            end_option=end
        )

        start_boundary = boundary if boundary is not None else config.defaults.start_boundary_minutes
        duration_minutes = duration if duration is not None else config.defaults.duration_minutes

        console.print("[bold cyan]Summary:[/bold cyan]")
        console.print(f"   Range: {start_date.format('DD.MM.YYYY')} - {end_date.format('DD.MM.YYYY')}")
        console.print(f"   Duration: {duration_minutes} minutes, starting every {start_boundary} minutes")
        console.print()

        planner = AppointmentRequestPlanner(
            weekly_template=config.build_weekly_template(),
            timezone=tz
        )
        service = AvailabilityService(
            provider_calendar=_busy_calendar(provider or config.provider_calendar),
            client_calendar=_busy_calendar(client or config.client_calendar),
            planner=planner
        )

        eligible_times = asyncio.run(
            service.find_eligible_times(
                start_date=start_date,
                end_date=end_date,
                start_boundary_minutes=start_boundary,
                duration_minutes=duration_minutes
            )
        )

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not eligible_times:
        console.print(
            "[yellow]No eligible appointment times found.[/yellow]\n"
            "Try a longer date range or a shorter duration."
        )
        return

    console.print(f"[bold green]{len(eligible_times)} eligible start time(s):[/bold green]\n")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Start times")

    for day, starts in _group_by_day(eligible_times).items():
        table.add_row(
            day.format("dddd, DD.MM.YYYY"),
            ", ".join(s.format("HH:mm") for s in starts)
        )

    console.print(table)
    console.print()


@app.command()
def template(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Show the configured weekly template.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        weekly_template = config.build_weekly_template()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(
        title="Weekly template",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Weekday", style="bold yellow")
    table.add_column("Open periods")
    table.add_column("Open minutes", justify="right", style="dim")

    for weekday in range(DAYS_PER_WEEK):
        if weekly_template.is_closed(weekday):
            periods = "[dim]closed[/dim]"
        else:
            periods = ", ".join(str(p) for p in weekly_template.periods_for_weekday(weekday))
        table.add_row(
            WEEKDAY_NAMES[weekday],
            periods,
            str(weekly_template.open_minutes(weekday))
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotgrid[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
