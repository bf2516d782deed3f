"""
Encore - Terminal wizard.

Thin adapter that binds the onboarding state machine to a rich console.
It renders each step's title and subtitle, feeds typed input into the
machine, and only calls advance() when can_advance() allows it.

Commands at any prompt. They carry a leading colon so that a password or
name of "back" or "quit" is still taken as typed:
    :back   go to the previous step
    :quit   abandon the wizard
"""

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from onboarding import MAX_SELECTED_ARTISTS, OnboardingStateMachine, OnboardingStep
from onboarding.artists import get_artist_options


BACK_COMMANDS = (":back",)
QUIT_COMMANDS = (":quit", ":exit")
DONE_COMMANDS = ("", "done", "next")

FIELD_FOR_STEP = {
    OnboardingStep.EMAIL: "email",
    OnboardingStep.PASSWORD: "password",
    OnboardingStep.AGE: "age",
    OnboardingStep.NAME: "name",
}

PLACEHOLDERS = {
    OnboardingStep.EMAIL: "Enter your email",
    OnboardingStep.PASSWORD: "Create a password",
    OnboardingStep.AGE: "Enter your age",
    OnboardingStep.NAME: "Enter your name",
}

HINTS = {
    OnboardingStep.EMAIL: "Enter a valid email address, like name@example.com",
    OnboardingStep.PASSWORD: "Password must be at least 8 characters",
    OnboardingStep.AGE: "You must be between 13 and 120",
    OnboardingStep.NAME: "Name can't be empty",
    OnboardingStep.ARTISTS: f"Pick exactly {MAX_SELECTED_ARTISTS} artists",
}

AskFn = Callable[..., str]


class TerminalWizard:
    """Runs one onboarding session in the terminal."""

    def __init__(
        self,
        machine: OnboardingStateMachine,
        console: Console | None = None,
        ask: AskFn | None = None,
        artists: list[str] | None = None,
    ):
        self.machine = machine
        self.console = console or Console()
        self.ask = ask or self.console.input
        self.artists = artists or get_artist_options()

    def run(self) -> bool:
        """Drive the wizard to completion. Returns False if the user quits."""
        while not self.machine.is_complete:
            step = self.machine.current_step
            self._render_header(step)

            if step == OnboardingStep.ARTISTS:
                keep_going = self._artists_turn()
            else:
                keep_going = self._field_turn(step)

            if not keep_going:
                self.console.print("\n[dim]Sign-up abandoned.[/dim]")
                return False

        self.console.print(
            Panel.fit(
                f"[bold green]Welcome, {escape(self.machine.state.name.strip())}![/bold green]\n"
                f"Your picks: {escape(', '.join(self.machine.state.selected_artists))}",
                title="All set",
                border_style="green",
            )
        )
        return True

    def _render_header(self, step: OnboardingStep) -> None:
        self.console.print(
            f"\n[dim]Step {step.index + 1} of {len(OnboardingStep)}[/dim]\n"
            f"[bold]{step.title}[/bold]\n"
            f"[dim]{step.subtitle}[/dim]"
        )

    def _field_turn(self, step: OnboardingStep) -> bool:
        reply = self.ask(
            f"{PLACEHOLDERS[step]}: ",
            password=step == OnboardingStep.PASSWORD,
        )
        command = reply.strip().lower()

        if command in QUIT_COMMANDS:
            return False
        if command in BACK_COMMANDS:
            self.machine.retreat()
            return True

        self.machine.update(**{FIELD_FOR_STEP[step]: reply})
        if self.machine.can_advance():
            self.machine.advance()
        else:
            self.console.print(f"[red]{HINTS[step]}[/red]")
        return True

    def _artists_turn(self) -> bool:
        self.console.print(self._artist_table())
        reply = self.ask(
            "Toggle by number (e.g. 1 4 7), Enter to finish: ",
            password=False,
        )
        command = reply.strip().lower()

        if command in QUIT_COMMANDS:
            return False
        if command in BACK_COMMANDS:
            self.machine.retreat()
            return True

        if command in DONE_COMMANDS:
            if self.machine.can_advance():
                self.machine.advance()
            else:
                self.console.print(f"[red]{HINTS[OnboardingStep.ARTISTS]}[/red]")
            return True

        for token in command.replace(",", " ").split():
            if not token.isdigit() or not 1 <= int(token) <= len(self.artists):
                self.console.print(f"[yellow]Ignoring '{escape(token)}'[/yellow]")
                continue
            self.machine.toggle_artist(self.artists[int(token) - 1])
        return True

    def _artist_table(self) -> Table:
        selected = self.machine.state.selected_artists
        table = Table(
            title=f"Selected: {len(selected)}/{MAX_SELECTED_ARTISTS}",
            show_header=False,
            box=None,
        )
        table.add_column(justify="right", style="dim")
        table.add_column()
        for i, artist in enumerate(self.artists, start=1):
            mark = "[green]✓[/green] " if artist in selected else "  "
            table.add_row(str(i), f"{mark}{artist}")
        return table
