"""
Encore Onboarding.

Sign-up wizard core, independent of any UI toolkit:

Steps:
1. Email
2. Password
3. Age
4. Name
5. Artists (pick exactly 3)

The state machine emits lifecycle events into an injected
encore.tracking.EventTracker.
"""

from .artists import AVAILABLE_ARTISTS, MAX_SELECTED_ARTISTS
from .machine import OnboardingStateMachine
from .state import OnboardingState
from .steps import OnboardingStep

__all__ = [
    "AVAILABLE_ARTISTS",
    "MAX_SELECTED_ARTISTS",
    "OnboardingStateMachine",
    "OnboardingState",
    "OnboardingStep",
]
