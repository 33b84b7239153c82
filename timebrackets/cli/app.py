"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.availability_file import AvailabilityFile
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TimebracketsError
from ..domain.models import TimeBracket
from ..domain.overlap_ranker import ScoringStrategy
from ..services.scheduling_service import SchedulingService

app = typer.Typer(
    name="timebrackets",
    help="Rank candidate meeting brackets by attendee overlap",
    add_completion=False
)

console = Console()


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the given config file, or the default one if it exists.

    An explicitly passed file must exist; a missing default file falls back
    to built-in defaults.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def rank(
    availability_file: Annotated[Path, typer.Argument(help="YAML file with attendee availability")],
    attendees: Annotated[Optional[List[str]], typer.Option("--attendee", "-a", help="Only rank these attendees (repeatable). Defaults to everyone in the file.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./timebrackets.yaml")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", min=1, help="Maximum number of brackets to show")] = None,
    show_all: Annotated[bool, typer.Option("--all", help="Show every distinct bracket instead of a short-list")] = False,
    strategy: Annotated[Optional[ScoringStrategy], typer.Option("--strategy", help="Overlap scoring strategy")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Rank submitted availability brackets by how many others overlap them.

    Examples:

        timebrackets rank availability.yaml

        timebrackets rank availability.yaml -a alice -a bob --limit 3

        timebrackets rank availability.yaml --all --strategy sweep
    """
    try:
        config = _load_config(config_file)
        _configure_logging("DEBUG" if verbose else config.log_level)

        if strategy is not None:
            config.ranking.strategy = strategy
        if show_all:
            config.ranking.max_results = None

        ranker = config.build_ranker(max_results=limit)
        source = AvailabilityFile(
            availability_file,
            timezone=config.timezone,
            splitter=config.build_splitter(),
        )
        service = SchedulingService(availability_source=source, ranker=ranker)

        attendee_list = list(attendees) if attendees else source.attendee_names
        event_availability = service.fetch_availability(attendees=attendee_list)
        scored = ranker.score(event_availability)

        console.print()
        if not scored:
            console.print("[yellow]⚠ No availability submitted.[/yellow]\n")
            return

        table = Table(
            title=f"Best brackets for {len(attendee_list)} attendee(s)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("#", justify="right")
        table.add_column("Bracket", style="bold")
        table.add_column("Overlaps", justify="right", style="green")

        for position, entry in enumerate(scored, 1):
            table.add_row(str(position), entry.bracket.format_display(), str(entry.overlaps))

        console.print(table)
        console.print()

    except (FileNotFoundError, TimebracketsError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def split(
    start: Annotated[str, typer.Argument(help="Start of the span, e.g. '2024-01-01 22:00'")],
    end: Annotated[str, typer.Argument(help="End of the span, e.g. '2024-01-03 02:00'")],
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./timebrackets.yaml")] = None,
    tz: Annotated[Optional[str], typer.Option("--tz", help="Timezone for the given instants. Defaults to the configured one.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Split a multi-day span into one bracket per day.
    """
    try:
        config = _load_config(config_file)
        _configure_logging("DEBUG" if verbose else config.log_level)
        timezone = tz or config.timezone

        try:
            form_start = pendulum.parse(start, tz=timezone)
            form_end = pendulum.parse(end, tz=timezone)
        except Exception as e:
            console.print(f"[red]Could not parse span: {e}[/red]")
            raise typer.Exit(1)

        if not isinstance(form_start, DateTime) or not isinstance(form_end, DateTime):
            console.print("[red]Start and end must both be a date and time.[/red]")
            raise typer.Exit(1)

        TimeBracket(start_date=form_start, end_date=form_end).validate()
        brackets = config.build_splitter().split(form_start, form_end)

        console.print()
        if not brackets:
            console.print("[yellow]⚠ The span does not cover any day.[/yellow]\n")
            return

        console.print(f"[bold green]✓ {len(brackets)} day bracket(s):[/bold green]\n")
        for bracket in brackets:
            console.print(f"  {bracket.format_display()}")
        console.print()

    except (FileNotFoundError, TimebracketsError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]timebrackets[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
