"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Sequence

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.agenda_file import AgendaFileEventSource
from ..config import AppConfig, DefaultsConfig, get_default_config_path
from ..domain.exceptions import MeetingFinderError
from ..domain.models import TimeSlot
from ..domain.slot_finder import SlotFinder
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find free meeting slots in a day's agenda",
    add_completion=False
)

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig | None:
    """
    Load the explicit config file, or the default one if it exists.

    Returns None when no config file was given and none is present.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return None


def _resolve(config: AppConfig | None, identifiers: Sequence[str]) -> List[str]:
    """Resolve aliases through the config; without one, identifiers are used as given."""
    if config is None:
        return list(dict.fromkeys(identifiers))
    return config.resolve_participants(identifiers)


@app.command()
def find(
    participants: Annotated[Optional[List[str]], typer.Argument(help="Required attendees (names or emails).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional attendee; repeat for several.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    agenda: Annotated[Optional[Path], typer.Option("--agenda", "-a", help="Agenda file with the day's booked events.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each search pass.")] = False,
):
    """
    Find free meeting slots for required and optional attendees.

    Examples:

        meetingfinder find alice bob --agenda agenda.yaml

        meetingfinder find alice -o carol --duration 60

        meetingfinder find -o alice -o bob
    """
    try:
        config = _load_config(config_file)
        _configure_logging("DEBUG" if verbose else (config.log_level if config else "WARNING"))

        required = _resolve(config, participants or [])
        optional_list = _resolve(config, optional or [])

        if duration is not None:
            min_duration = duration
        elif config is not None:
            min_duration = config.defaults.duration_minutes
        else:
            min_duration = DefaultsConfig().duration_minutes

        agenda_path = agenda or (config.agenda_file if config else None)
        if agenda_path is None:
            console.print("[bold red]Error:[/bold red] No agenda file given. Use --agenda or set agenda_file in the config.")
            raise typer.Exit(1)

        console.print("[bold cyan]Summary:[/bold cyan]")
        console.print(f"   Required: {', '.join(required) or '-'}")
        console.print(f"   Optional: {', '.join(optional_list) or '-'}")
        console.print(f"   Duration: {pendulum.duration(minutes=min_duration).in_words(locale='en')}")
        console.print(f"   Agenda: {agenda_path}")
        console.print()

        service = MeetingFinderService(
            event_source=AgendaFileEventSource(agenda_path, config=config),
            slot_finder=SlotFinder(),
        )
        result = service.find_slots(
            attendees=required,
            optional_attendees=optional_list,
            duration_minutes=min_duration,
        )

        if optional_list and not result.optional_included:
            console.print(
                "[yellow]⚠ No slot fits the optional attendees; showing slots for required attendees only.[/yellow]"
            )

        if not result.slots:
            console.print(
                "[yellow]⚠ No free slots found.[/yellow]\n"
                "Try a shorter duration or fewer attendees."
            )
        else:
            console.print(f"[bold green]✓ {len(result.slots)} free slot(s) found:[/bold green]")
            console.print(f"   Attendees: {', '.join(sorted(result.attendees)) or '-'}\n")

            for time_range in result.slots:
                console.print(f"  {TimeSlot(time_range=time_range).format_display()}")

        console.print()

    except (FileNotFoundError, ValueError, MeetingFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        if not config.colleagues:
            console.print("[yellow]No colleagues defined in the config file.[/yellow]")
            return

        table = Table(
            title="Configured colleagues",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("Email", style="dim")

        for colleague in config.colleagues:
            table.add_row(
                colleague.name,
                colleague.email
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
