"""
Onboarding Steps - The ordered screens of the sign-up wizard.

Email → Password → Age → Name → Artists. Linear, no skipping, no branching.
Each step carries the title and subtitle the UI renders above its input.
"""

from enum import Enum


class OnboardingStep(Enum):
    """Wizard steps, valued by their position in the flow."""

    EMAIL = 0
    PASSWORD = 1
    AGE = 2
    NAME = 3
    ARTISTS = 4

    @property
    def index(self) -> int:
        return self.value

    @property
    def title(self) -> str:
        return STEP_COPY[self]["title"]

    @property
    def subtitle(self) -> str:
        return STEP_COPY[self]["subtitle"]

    @property
    def is_first(self) -> bool:
        return self.value == 0

    @property
    def is_last(self) -> bool:
        return self.value == len(OnboardingStep) - 1

    def next(self) -> "OnboardingStep | None":
        """Step after this one, or None from the last step."""
        if self.is_last:
            return None
        return OnboardingStep(self.value + 1)

    def previous(self) -> "OnboardingStep | None":
        """Step before this one, or None from the first step."""
        if self.is_first:
            return None
        return OnboardingStep(self.value - 1)


STEP_COPY = {
    OnboardingStep.EMAIL: {
        "title": "What's your email?",
        "subtitle": "You'll use this to sign in to Spotify",
    },
    OnboardingStep.PASSWORD: {
        "title": "Create a password",
        "subtitle": "Create a password to keep your account safe",
    },
    OnboardingStep.AGE: {
        "title": "What's your age?",
        "subtitle": "This helps us provide you with the right content",
    },
    OnboardingStep.NAME: {
        "title": "What should we call you?",
        "subtitle": "This appears on your profile",
    },
    OnboardingStep.ARTISTS: {
        "title": "Pick 3 artists you love",
        "subtitle": "We'll use this to personalize your experience",
    },
}
