"""
Onboarding State Machine - Drives the sign-up wizard.

Steps:
1. EMAIL    - syntactically valid address
2. PASSWORD - at least 8 characters
3. AGE      - integer between 13 and 120
4. NAME     - anything but whitespace
5. ARTISTS  - exactly 3 picks
Then completed.

The UI reads `state`, writes fields through `update()` / `toggle_artist()`,
and gates `advance()` behind `can_advance()`. `advance()` itself does not
re-check; it records what the user submitted and moves on.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from encore.tracking import EventTracker, OnboardingUserData

from .artists import MAX_SELECTED_ARTISTS
from .state import OnboardingState
from .steps import OnboardingStep
from .validation import can_complete_step, step_data

logger = logging.getLogger(__name__)


EDITABLE_FIELDS = ("email", "password", "age", "name")


class OnboardingStateMachine:
    """
    Linear wizard over an OnboardingState, emitting events into a tracker.

    The tracker (and through it, the store) is injected so each session can
    be tested in isolation.
    """

    def __init__(
        self,
        tracker: EventTracker,
        state: OnboardingState | None = None,
        clock: Callable[[], datetime] | None = None,
        auto_start: bool = True,
    ):
        self.tracker = tracker
        self.state = state or OnboardingState()
        self.clock = clock or tracker.clock

        if auto_start:
            self.start()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Stamp the session start and emit Onboarding_Started, once."""
        if self.state.started_at is not None:
            return
        self.state.started_at = self.clock()
        self.tracker.track_onboarding_started()
        logger.debug("Onboarding session started")

    @property
    def current_step(self) -> OnboardingStep:
        return self.state.current_step

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    # =========================================================================
    # Input
    # =========================================================================

    def update(self, **fields: str) -> None:
        """Set text fields (email, password, age, name) from the UI."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown onboarding field(s): {', '.join(sorted(unknown))}")
        for key, value in fields.items():
            setattr(self.state, key, value)

    def toggle_artist(self, name: str) -> None:
        """Deselect if picked; pick if there is room; otherwise ignore."""
        selected = self.state.selected_artists
        if name in selected:
            selected.remove(name)
        elif len(selected) < MAX_SELECTED_ARTISTS:
            selected.append(name)

    # =========================================================================
    # Navigation
    # =========================================================================

    def can_advance(self) -> bool:
        state = self.state
        return can_complete_step(
            state.current_step,
            email=state.email,
            password=state.password,
            age=state.age,
            name=state.name,
            selected_artists=state.selected_artists,
        )

    def advance(self) -> None:
        """
        Record the current step and move forward (or complete from the last).

        Callers gate this on can_advance(). Once complete, this is a no-op.
        """
        state = self.state
        if state.is_complete:
            logger.warning("advance() called after onboarding completed; ignoring")
            return

        step = state.current_step
        self.tracker.track_step_completed(
            step.title,
            step.index,
            step_data(
                step,
                email=state.email,
                password=state.password,
                age=state.age,
                name=state.name,
                selected_artists=state.selected_artists,
            ),
        )

        if step == OnboardingStep.EMAIL and state.email:
            self.tracker.track_account_created(state.email)

        if step == OnboardingStep.ARTISTS and len(state.selected_artists) == MAX_SELECTED_ARTISTS:
            self.tracker.track_artist_selection_completed(state.selected_artists)

        next_step = step.next()
        if next_step is None:
            self._complete()
        else:
            logger.debug(f"Advancing {step.name} -> {next_step.name}")
            state.current_step = next_step

    def retreat(self) -> None:
        """Go back one step. No-op at the first step; emits nothing."""
        previous = self.state.current_step.previous()
        if previous is not None:
            self.state.current_step = previous

    def _complete(self) -> None:
        state = self.state
        started_at = state.started_at or self.clock()
        completion_time = (self.clock() - started_at).total_seconds()

        self.tracker.track_onboarding_completed(OnboardingUserData(
            email=state.email,
            age=state.age,
            name=state.name,
            selected_artists=list(state.selected_artists),
            completion_time=completion_time,
        ))
        state.is_complete = True
        logger.info(f"Onboarding completed in {completion_time:.1f}s")
