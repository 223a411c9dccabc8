"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_store import JsonItineraryStore
from ..config import AppConfig, load_config
from ..domain.exceptions import InvalidRequestError, NoAvailableSlotError, TripslotsError
from ..domain.slot_allocator import SlotAllocator
from ..domain.timeframes import TIMEFRAME_WINDOWS
from ..domain.trip_days import format_day_with_date
from ..services.slot_lookup import SlotLookupService
from ..services.wishlist_promotion import WishlistPromotionService

app = typer.Typer(
    name="tripslots",
    help="Find free time slots for wishlist items in a trip itinerary",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging.")
]


def _setup(config_file: Optional[Path], verbose: bool) -> tuple[AppConfig, Optional[Path]]:
    """Load configuration and install the Rich log handler."""
    config, config_path = load_config(config_file)

    logging.basicConfig(
        level="DEBUG" if verbose else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )
    return config, config_path


def _read_request(request_file: Path) -> Dict[str, Any]:
    """Read a JSON request body from a file ("-" reads stdin)."""
    try:
        if str(request_file) == "-":
            return json.loads(typer.get_text_stream("stdin").read())
        with open(request_file, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise InvalidRequestError(f"Request file not found: {request_file}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidRequestError(f"Invalid JSON in {request_file}: {exc}") from exc


def _print_error(exc: TripslotsError) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    if isinstance(exc, InvalidRequestError):
        for error in exc.errors:
            location = ".".join(str(part) for part in error.get("loc", ()))
            console.print(f"  [red]•[/red] {location}: {error.get('msg')}")
    if isinstance(exc, NoAvailableSlotError):
        console.print("\nAvailable days:")
        for day in exc.available_days:
            console.print(f"  {format_day_with_date(exc.start_date, day['dayIndex'])}")


def _lookup_service(config: AppConfig) -> SlotLookupService:
    """Build the lookup service from the configured defaults."""
    return SlotLookupService(
        allocator=SlotAllocator(default_duration_minutes=config.defaults.duration_minutes),
        default_max_results=config.defaults.max_results
    )


def _slot_table(slots: list, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Start")
    table.add_column("End")
    for slot in slots:
        table.add_row(str(slot["dayIndex"] + 1), slot["startTime"], slot["endTime"])
    return table


@app.command()
def find(
    request_file: Annotated[Path, typer.Argument(help="JSON request body (gptTimeframe, gptDuration, existingActivities, days). Use '-' for stdin.")],
    config_file: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON response.")] = False,
    verbose: VerboseOption = False,
):
    """
    Find the first free slot for a lookup request.

    Examples:

        tripslots find request.json
        cat request.json | tripslots find - --json
    """
    try:
        config, _ = _setup(config_file, verbose)
        service = _lookup_service(config)
        result = service.find_time_slot(_read_request(request_file))
    except TripslotsError as e:
        _print_error(e)
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    slot = result["timeSlot"]
    if slot is None:
        console.print("[yellow]⚠ No available time slot found.[/yellow]")
        return

    console.print(
        f"[bold green]✓ Day {slot['dayIndex'] + 1}: "
        f"{slot['startTime']} - {slot['endTime']}[/bold green]"
    )


@app.command()
def slots(
    request_file: Annotated[Path, typer.Argument(help="JSON request body. Use '-' for stdin.")],
    max_results: Annotated[Optional[int], typer.Option("--max", "-n", help="Maximum number of slots to list.")] = None,
    config_file: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON response.")] = False,
    verbose: VerboseOption = False,
):
    """
    List candidate slots for a lookup request.
    """
    try:
        config, _ = _setup(config_file, verbose)
        service = _lookup_service(config)
        payload = _read_request(request_file)
        if max_results is not None and isinstance(payload, dict):
            payload["maxResults"] = max_results
        result = service.list_time_slots(payload)
    except TripslotsError as e:
        _print_error(e)
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    if not result["timeSlots"]:
        console.print("[yellow]⚠ No available time slots found.[/yellow]")
        return

    console.print(_slot_table(result["timeSlots"], f"{len(result['timeSlots'])} available slot(s)"))


@app.command()
def promote(
    wishlist_item_id: Annotated[str, typer.Argument(help="Wishlist item to schedule.")],
    itinerary_id: Annotated[str, typer.Argument(help="Target itinerary.")],
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Acting user id. Defaults to user_id from config.")] = None,
    day: Annotated[Optional[int], typer.Option("--day", help="Custom 0-based day index.")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Custom start time (HH:MM).")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Custom duration in minutes.")] = None,
    data_file: Annotated[Optional[Path], typer.Option("--data", help="Itinerary data JSON file. Defaults to data_file from config.")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Do not write the new activity back to the data file.")] = False,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Add a wishlist item to an itinerary at the first free slot.

    Pass --day, --start and --duration together to pick the slot by hand.
    """
    try:
        config, config_path = _setup(config_file, verbose)
        user_id = user or config.user_id
        if not user_id:
            console.print("[bold red]Error:[/bold red] No user id given (use --user or set user_id in config).")
            raise typer.Exit(1)

        store = JsonItineraryStore.from_file(data_file or config.resolve_data_file(config_path))
        service = WishlistPromotionService(store=store, defaults=config.defaults)

        result = asyncio.run(service.add_to_itinerary(
            user_id=user_id,
            wishlist_item_id=wishlist_item_id,
            itinerary_id=itinerary_id,
            custom_start_time=start,
            custom_day_index=day,
            custom_duration=duration,
        ))

        if not dry_run:
            store.save()
    except TripslotsError as e:
        _print_error(e)
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    slot = result.time_slot
    console.print(
        f"[bold green]✓ Scheduled '{result.activity.title}'[/bold green] "
        f"on {slot.format_display(result.date)}"
    )
    if dry_run:
        console.print("[yellow]⊘ Dry run - data file not modified[/yellow]")


@app.command()
def timeframes():
    """
    Show the candidate windows of every timeframe.
    """
    table = Table(title="Timeframes", show_header=True, header_style="bold cyan")
    table.add_column("Timeframe", style="bold yellow")
    table.add_column("Windows (tried in order)")

    for timeframe, windows in TIMEFRAME_WINDOWS.items():
        table.add_row(timeframe.value, ", ".join(str(window) for window in windows))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]tripslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
