"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.file_store import FileStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import CalendarCoreError
from ..domain.holiday_resolver import HolidayResolver
from ..domain.permissions import PermissionKey
from ..services.access_control import AccessControlService
from ..services.holiday_calendar import HolidayCalendarService

app = typer.Typer(
    name="calendarcore",
    help="Inspect holidays, working days and group permissions",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


def _load(config_file: Optional[Path]) -> tuple[AppConfig, FileStore]:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    store = FileStore.load(config.data_file, timezone=config.timezone)
    return config, store


def _calendar(config: AppConfig, store: FileStore) -> HolidayCalendarService:
    return HolidayCalendarService(
        catalog=store,
        resolver=HolidayResolver(timezone=config.timezone),
        exclude_weekdays=config.exclude_days,
    )


def _parse_day(value: str, tz: str):
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz)
    except ValueError as e:
        console.print(f"[red]Invalid date '{value}': {e}[/red]")
        raise typer.Exit(1)


@app.command()
def holidays(
    year: Annotated[int, typer.Argument(help="Calendar year")],
    config_file: ConfigOption = None,
):
    """
    List all holidays of a year, including recurring ones.
    """
    try:
        config, store = _load(config_file)
        occurrences = _calendar(config, store).holidays_for_year(year)

        if not occurrences:
            console.print(f"[yellow]No holidays in {year}.[/yellow]")
            return

        table = Table(title=f"Holidays {year}", show_header=True, header_style="bold cyan")
        table.add_column("Date", style="bold yellow")
        table.add_column("Name")
        table.add_column("ID", style="dim")
        table.add_column("Recurring")

        for occurrence in occurrences:
            table.add_row(
                occurrence.date.format("DD.MM.YYYY"),
                occurrence.name,
                occurrence.id,
                "virtual" if occurrence.is_virtual else ("yes" if occurrence.record.is_recurring else "no"),
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, CalendarCoreError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    date: Annotated[str, typer.Argument(help="Date to check (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
):
    """
    Show whether a date is a holiday and whether it is a working day.
    """
    try:
        config, store = _load(config_file)
        calendar = _calendar(config, store)
        day = _parse_day(date, config.timezone)

        is_holiday = calendar.is_holiday(day)
        is_working_day = calendar.is_working_day(day)

        console.print(f"\n[bold]{day.format('dddd, DD.MM.YYYY')}[/bold]")
        console.print(f"   Holiday: {'[red]yes[/red]' if is_holiday else '[green]no[/green]'}")
        console.print(f"   Working day: {'[green]yes[/green]' if is_working_day else '[red]no[/red]'}\n")

    except (FileNotFoundError, ValueError, CalendarCoreError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command(name="range")
def holiday_range(
    start: Annotated[str, typer.Argument(help="Start date (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="End date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
):
    """
    List holiday dates between two dates (inclusive).
    """
    try:
        config, store = _load(config_file)
        start_date = _parse_day(start, config.timezone).start_of("day")
        end_date = _parse_day(end, config.timezone).end_of("day")

        dates = _calendar(config, store).holiday_dates_in_range(start_date, end_date)

        if not dates:
            console.print("[yellow]No holidays in this range.[/yellow]")
            return

        console.print(f"[bold green]{len(dates)} holiday(s):[/bold green]")
        for value in dates:
            console.print(f"  {value.format('dddd, DD.MM.YYYY')}")

    except (FileNotFoundError, ValueError, CalendarCoreError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def permissions(
    user_id: Annotated[str, typer.Argument(help="User id to evaluate")],
    config_file: ConfigOption = None,
):
    """
    Show a user's permission levels and visible menu sections.
    """
    try:
        config, store = _load(config_file)
        access = AccessControlService(directory=store, admin_group_id=config.admin_group_id)
        evaluator = access.evaluator_for(user_id)

        if evaluator.matrix is None:
            console.print(f"[yellow]No permissions resolved for user '{user_id}'.[/yellow]")

        table = Table(title="Permissions", show_header=True, header_style="bold cyan")
        table.add_column("Resource", style="bold yellow")
        table.add_column("View")
        table.add_column("Edit")

        for key in PermissionKey:
            table.add_row(
                key.value,
                "✓" if evaluator.can_view(key) else "-",
                "✓" if evaluator.can_edit(key) else "-",
            )

        console.print()
        console.print(table)

        visible = [section for section, shown in evaluator.menu_permissions().items() if shown]
        console.print(f"\n[bold]Menu:[/bold] {', '.join(visible)}\n")

    except (FileNotFoundError, ValueError, CalendarCoreError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]calendarcore[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
