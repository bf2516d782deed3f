"""
Encore - CLI Entry Point.

Usage:
    encore signup            Run the sign-up wizard
    encore events            Show recently tracked events
    encore check-return      Run the app-foreground return check
    encore health            Check configuration
    encore --help            Show help
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="encore",
    help="Encore - sign-up onboarding and local event tracking.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stderr so they don't mix with the wizard."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _build_tracker(store_path: Path | None):
    from encore.config import get_settings
    from encore.storage import JsonFileStore
    from encore.tracking import EventTracker, LoggingSink

    settings = get_settings()
    setup_logging(settings.log_level)
    store = JsonFileStore(store_path or settings.store_path)
    return EventTracker.from_settings(store, settings, sinks=[LoggingSink()])


StoreOption = typer.Option(None, "--store", "-s", help="Path to the tracking JSON file")


def _prompt(prompt: str, password: bool = False) -> str:
    """Read one line of wizard input; empty input is allowed."""
    return typer.prompt(prompt.rstrip(": "), default="", show_default=False, hide_input=password)


@app.command()
def signup(store: Path | None = StoreOption) -> None:
    """Walk through the sign-up wizard."""
    from encore.wizard import TerminalWizard
    from onboarding import OnboardingStateMachine

    tracker = _build_tracker(store)

    console.print(
        Panel.fit(
            "[bold green]Sign up for free[/bold green]\n"
            "Five quick steps and you're listening.\n\n"
            "[dim]Type ':back' to go back, ':quit' to leave.[/dim]",
            title="Welcome",
            border_style="green",
        )
    )

    machine = OnboardingStateMachine(tracker)
    try:
        finished = TerminalWizard(machine, console=console, ask=_prompt).run()
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[dim]Sign-up interrupted. 👋[/dim]")
        raise typer.Exit(1)

    if not finished:
        raise typer.Exit(1)


@app.command()
def events(
    limit: int = typer.Option(20, "--limit", "-n", help="How many of the newest events to show"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
    store: Path | None = StoreOption,
) -> None:
    """Show the newest events in the local log."""
    tracker = _build_tracker(store)
    recent = tracker.events(limit=limit)

    if as_json:
        console.print_json(json.dumps(recent))
        return

    if not recent:
        console.print("[dim]No events tracked yet.[/dim]")
        return

    table = Table(title=f"Last {len(recent)} events")
    table.add_column("When", style="dim")
    table.add_column("Event", style="bold")
    table.add_column("Properties")

    skip = {"timestamp", "platform", "app_version"}
    for event in recent:
        when = datetime.fromtimestamp(event.get("timestamp", 0)).strftime("%Y-%m-%d %H:%M:%S")
        props = {k: v for k, v in event.get("properties", {}).items() if k not in skip}
        table.add_row(when, event.get("name", "?"), json.dumps(props, ensure_ascii=False))

    console.print(table)


@app.command("check-return")
def check_return(store: Path | None = StoreOption) -> None:
    """Run the return check the app does when it comes to the foreground."""
    tracker = _build_tracker(store)

    if tracker.completed_at() is None:
        console.print("[dim]Onboarding has not been completed yet.[/dim]")
    elif tracker.check_for_return():
        console.print(
            f"✅ Returned after onboarding "
            f"({tracker.days_since_onboarding()} day(s) later)"
        )
    elif tracker.has_returned():
        console.print("[dim]Return already recorded for this onboarding.[/dim]")
    else:
        console.print("[dim]Same day as onboarding; nothing to record.[/dim]")


@app.command()
def health() -> None:
    """Check configuration."""
    from encore.config import get_settings

    console.print("\n[bold]Encore Health Check[/bold]\n")

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Check ENCORE_* environment variables and .env.[/dim]")
        raise typer.Exit(1)

    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Platform: {settings.platform} ({settings.app_version})")
    console.print(f"   Event log bound: {settings.max_stored_events}")

    if settings.store_path.exists():
        console.print(f"✅ Store found at {settings.store_path}")
    else:
        console.print(f"ℹ️  Store not created yet ({settings.store_path})")


@app.command()
def version() -> None:
    """Show version information."""
    from encore import __version__

    console.print(f"Encore version {__version__}")


if __name__ == "__main__":
    app()
