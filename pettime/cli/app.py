"""
Main CLI application using Typer.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig
from ..domain.exceptions import PetTimeError
from ..domain.models import TaskNotification, TimeOfDay
from ..domain.opening_hours import is_open_now
from ..domain.reminders import ReminderCalculator
from ..domain.time_format import format_for_display, get_time_format, parse_to_24_hour
from ..adapters.api_client import ApiClient
from ..adapters.mock_api_client import MockApiClient
from ..adapters.reminder_store import ReminderStore
from ..services.reminders import ReminderService
from ..services.shop_status import ShopStatusService

app = typer.Typer(
    name="pettime",
    help="Shop opening hours and pet task reminders",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output.")] = False,
):
    """
    Shop opening hours and pet task reminders.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        return AppConfig.load_or_default(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _parse_time_of_day(value: str) -> TimeOfDay:
    parsed = TimeOfDay.parse(value)
    if parsed is None:
        console.print(f"[bold red]Error:[/bold red] Unrecognized time: {value!r}")
        raise typer.Exit(1)
    return parsed


def _parse_moment(value: Optional[str], tz: str) -> DateTime:
    """Resolve --at for reminders: a full date-time, or the current time."""
    if not value:
        return pendulum.now(tz)

    try:
        parsed = pendulum.parse(value, tz=tz)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] Could not parse date-time {value!r}: {e}")
        raise typer.Exit(1)

    if not isinstance(parsed, DateTime):
        console.print(f"[bold red]Error:[/bold red] Expected a date and time, got {value!r}")
        raise typer.Exit(1)
    return parsed


@app.command("format")
def format_times(
    times: Annotated[List[str], typer.Argument(help="Time strings, e.g. '9:00 AM' 18:30 '08:00:00'")],
):
    """
    Show how time strings are normalized and displayed.
    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Input", style="bold yellow")
    table.add_column("Format", style="dim")
    table.add_column("24-hour")
    table.add_column("Display")

    for value in times:
        table.add_row(
            value,
            get_time_format(value).value,
            parse_to_24_hour(value),
            format_for_display(value),
        )

    console.print()
    console.print(table)
    console.print()


@app.command("is-open")
def is_open(
    opening: Annotated[str, typer.Argument(help="Opening time, e.g. '9:00 AM' or 09:00")],
    closing: Annotated[str, typer.Argument(help="Closing time, e.g. '6:00 PM' or 18:00")],
    at: Annotated[Optional[str], typer.Option("--at", help="Time of day to check (default: now)")] = None,
    config_file: ConfigOption = None,
):
    """
    Check whether a window opening-closing is open at a given time.

    Exits with code 0 when open and 1 when closed.
    """
    config = _load_config(config_file)
    now = _parse_time_of_day(at) if at else TimeOfDay.from_datetime(pendulum.now(config.timezone))

    hours = f"{format_for_display(opening)} - {format_for_display(closing)}"
    if is_open_now(opening, closing, now):
        console.print(f"[bold green]Open[/bold green] at {now.to_12_hour()} ({hours})")
        return

    console.print(f"[bold red]Closed[/bold red] at {now.to_12_hour()} ({hours})")
    raise typer.Exit(1)


@app.command()
def shops(
    search: Annotated[Optional[str], typer.Option("--search", "-s", help="Filter by shop name or location")] = None,
    open_only: Annotated[bool, typer.Option("--open-only", help="Only list shops that are open.")] = False,
    at: Annotated[Optional[str], typer.Option("--at", help="Time of day to evaluate (default: now)")] = None,
    mock: Annotated[bool, typer.Option("--mock", help="Use bundled mock data instead of the API.")] = False,
    config_file: ConfigOption = None,
):
    """
    List shops with their opening hours and whether they are open.

    Examples:

        pettime shops
        pettime shops --open-only --at "10:30 PM"
        pettime shops --search davao --mock
    """
    config = _load_config(config_file)
    now = _parse_time_of_day(at) if at else TimeOfDay.from_datetime(pendulum.now(config.timezone))

    if mock:
        console.print("[yellow]⚠  MOCK MODE: using test data[/yellow]\n")
        client = MockApiClient(timezone=config.timezone)
    else:
        client = ApiClient(
            base_url=config.api_base_url,
            access_token=config.api_token,
            timezone=config.timezone
        )

    service = ShopStatusService(shop_client=client)

    try:
        if open_only:
            statuses = service.open_shops(now=now, search=search)
        else:
            statuses = service.list_statuses(now=now, search=search)
    except PetTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not statuses:
        console.print("[yellow]⚠ No shops found.[/yellow]")
        return

    table = Table(
        title=f"Shops at {now.to_12_hour()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Shop", style="bold yellow", no_wrap=True)
    table.add_column("Type", style="dim")
    table.add_column("Location", style="dim")
    table.add_column("Opens")
    table.add_column("Closes")
    table.add_column("Status")

    for status in statuses:
        table.add_row(
            status.shop.shop_name,
            status.shop.shop_type,
            status.shop.shop_location,
            status.opening_display,
            status.closing_display,
            "[green]Open[/green]" if status.is_open else "[red]Closed[/red]",
        )

    console.print()
    console.print(table)
    console.print()


def _print_notifications(notifications: List[TaskNotification]) -> None:
    if not notifications:
        console.print("[dim]No tasks due right now.[/dim]")
        return

    for notification in notifications:
        marker = "🐾" if notification.is_overlay else "•"
        console.print(
            f"  {marker} [bold]{notification.task_name}[/bold] ({notification.task_time}) "
            f"{notification.message} [dim]{notification.timestamp}[/dim]"
        )


@app.command()
def reminders(
    at: Annotated[Optional[str], typer.Option("--at", help="Date-time to check, e.g. '2025-08-11 08:00' (default: now)")] = None,
    watch: Annotated[bool, typer.Option("--watch", "-w", help="Keep polling at the configured interval.")] = False,
    schedule: Annotated[bool, typer.Option("--schedule", help="Store upcoming tasks in the pending reminder queue.")] = False,
    mock: Annotated[bool, typer.Option("--mock", help="Use bundled mock data instead of the API.")] = False,
    config_file: ConfigOption = None,
):
    """
    Show reminders for pet tasks that are due.

    Examples:

        pettime reminders --mock
        pettime reminders --watch
        pettime reminders --schedule
    """
    config = _load_config(config_file)

    if watch and at:
        console.print("[red]Error: --watch and --at cannot be used together.[/red]")
        raise typer.Exit(1)

    now = _parse_moment(at, config.timezone)

    if mock:
        console.print("[yellow]⚠  MOCK MODE: using test data[/yellow]\n")
        client = MockApiClient(now=now, timezone=config.timezone)
    else:
        client = ApiClient(
            base_url=config.api_base_url,
            access_token=config.api_token,
            timezone=config.timezone
        )

    service = ReminderService(
        task_client=client,
        calculator=ReminderCalculator(window_minutes=config.reminders.window_minutes),
        store=ReminderStore(config.reminders.get_store_path(), timezone=config.timezone),
        role=config.role,
    )

    interval = config.reminders.poll_interval_seconds

    try:
        if schedule:
            try:
                scheduled = service.schedule_all(now=now)
                console.print(f"[green]✓ Scheduled {len(scheduled)} reminder(s)[/green]")
            except PetTimeError as e:
                if not watch:
                    console.print(f"[bold red]Error:[/bold red] {e}")
                    raise typer.Exit(1)
                console.print(f"[yellow]Warning: Could not schedule reminders: {e}[/yellow]")

        while True:
            console.print(f"[bold cyan]Reminders at {now.format('YYYY-MM-DD HH:mm')}[/bold cyan]")
            try:
                notifications = _poll_reminders(service, now, include_pending=schedule)
            except PetTimeError as e:
                if not watch:
                    console.print(f"[bold red]Error:[/bold red] {e}")
                    raise typer.Exit(1)
                # Keep polling
                console.print(f"[yellow]Warning: {e} (retrying in {interval}s)[/yellow]")
            else:
                _print_notifications(notifications)

            if not watch:
                break

            time.sleep(interval)
            now = pendulum.now(config.timezone)

    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


def _poll_reminders(
    service: ReminderService,
    now: DateTime,
    include_pending: bool
) -> List[TaskNotification]:
    notifications = service.check(now=now)
    if include_pending:
        seen = {notification.task_id for notification in notifications}
        notifications += [
            pending for pending in service.check_pending(now=now)
            if pending.task_id not in seen
        ]
    return notifications


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]pettime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
