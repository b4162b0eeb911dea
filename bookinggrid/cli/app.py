"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.memory_repository import InMemoryBookingRepository
from ..config import AppConfig, load_config
from ..domain.booking_placer import BookingPlacer
from ..domain.exceptions import BookingGridError
from ..domain.grid_model import GridModel
from ..services.booking_calendar import BookingCalendarService, WeekView

app = typer.Typer(
    name="bookinggrid",
    help="Show a weekly booking grid and check where bookings land",
    add_completion=False
)

console = Console()


def _parse_week_start(start_option: Optional[str], tz: str):
    """
    Resolve the first displayed day.

    Without an explicit date the grid starts at the Monday of the current
    week; with one, that exact day is day 0.
    """
    if start_option is None:
        return pendulum.now(tz).start_of("week")
    try:
        return pendulum.from_format(start_option, "YYYY-MM-DD", tz=tz).start_of("day")
    except ValueError as e:
        console.print(f"[red]Could not parse start date: {e}[/red]")
        raise typer.Exit(1)


def _build_service(config: AppConfig, bookings_file: Optional[Path]) -> BookingCalendarService:
    repository = InMemoryBookingRepository(
        timezone=config.timezone,
        seed_file=bookings_file or config.bookings_file,
    )
    return BookingCalendarService(
        repository=repository,
        grid_model=GridModel(config.grid.to_grid_config()),
        default_duration_minutes=config.grid.booking_duration_minutes,
    )


def render_week_table(view: WeekView) -> Table:
    """
    Project a week view onto a rich table.

    Rows are times of day, columns are day offsets 0..6. A booking is shown
    in every slot it occupies.
    """
    grid = view.grid
    table = Table(
        title=grid.week_start.format("MMMM YYYY"),
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Time", style="dim")
    for day in grid.days():
        table.add_column(day.format("DD dddd"))

    for row in grid.rows():
        cells = []
        for slot in row:
            booking = view.booking_at(slot)
            if booking is None:
                cells.append("")
            else:
                label = f"[bold yellow]{booking.owner}[/bold yellow]"
                if booking.note:
                    label += f"\n{booking.note}"
                cells.append(label)
        table.add_row(grid.config.time_of_day(row[0].slot_index).strftime("%H:%M"), *cells)

    return table


@app.command()
def week(
    start: Annotated[Optional[str], typer.Option("--start", help="First day of the week (YYYY-MM-DD). Defaults to this Monday.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    bookings: Annotated[Optional[Path], typer.Option("--bookings", "-b", help="JSON file with bookings to show")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log placement details")] = False,
):
    """
    Show the booking grid for one week.

    Examples:

        bookinggrid week

        bookinggrid week --start 2024-11-25 --bookings bookings.json
    """
    _configure_logging(verbose)
    try:
        config = load_config(config_file)
        week_start = _parse_week_start(start, config.timezone)

        service = _build_service(config, bookings)
        view = asyncio.run(service.switch_to_week(week_start))

        console.print()
        console.print(render_week_table(view))

        for booking in view.rejected:
            console.print(
                f"[yellow]⚠ Booking {booking.id} ({booking.start.format('DD.MM.YYYY HH:mm')}, "
                f"{booking.duration_minutes} min) does not fit the grid[/yellow]"
            )
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (BookingGridError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def place(
    start: Annotated[str, typer.Option("--start", help="Booking start (YYYY-MM-DD HH:mm)")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Booking duration in minutes")] = None,
    week_start: Annotated[Optional[str], typer.Option("--week", help="First day of the week (YYYY-MM-DD). Defaults to the booking's Monday.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
):
    """
    Show which slots a booking would occupy.
    """
    try:
        config = load_config(config_file)
        tz = config.timezone

        try:
            booking_start = pendulum.from_format(start, "YYYY-MM-DD HH:mm", tz=tz)
        except ValueError as e:
            console.print(f"[red]Could not parse booking start: {e}[/red]")
            raise typer.Exit(1)

        if week_start is None:
            first_day = booking_start.start_of("week")
        else:
            first_day = _parse_week_start(week_start, tz)

        grid = GridModel(config.grid.to_grid_config()).build_week(first_day)
        minutes = duration if duration is not None else config.grid.booking_duration_minutes
        slots = BookingPlacer().slots_for(booking_start, minutes, grid)

        console.print(f"\n[bold green]✓ {len(slots)} slot(s):[/bold green]\n")
        for slot in slots:
            console.print(f"  {slot}  [dim]{slot.key}[/dim]")
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except BookingGridError as e:
        console.print(f"[bold red]✗ Cannot place booking:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookinggrid[/bold cyan] version [bold]{__version__}[/bold]\n")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
