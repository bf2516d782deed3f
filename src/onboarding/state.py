"""
Onboarding State Management.

Holds wizard progress and the raw field values the user has typed.
Created when the wizard starts, mutated per field and per step, and
discarded once onboarding completes or is abandoned.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
import json

from .steps import OnboardingStep


@dataclass
class OnboardingState:
    """
    Main onboarding session state.

    `age` stays a string until validation; the UI binds it to a text field.
    `selected_artists` is unique and keeps pick order.
    """
    current_step: OnboardingStep = OnboardingStep.EMAIL

    email: str = ""
    password: str = ""
    age: str = ""
    name: str = ""
    selected_artists: list[str] = field(default_factory=list)

    is_complete: bool = False
    started_at: datetime | None = None

    @property
    def selected_count(self) -> int:
        return len(self.selected_artists)

    @property
    def progress(self) -> float:
        """Fraction of steps finished (0.0 - 1.0)."""
        if self.is_complete:
            return 1.0
        return self.current_step.index / len(OnboardingStep)

    def to_dict(self) -> dict:
        """Serialize state to dict for JSON storage."""
        data = asdict(self)
        data["current_step"] = self.current_step.name.lower()
        data["selected_artists"] = list(self.selected_artists)
        data["started_at"] = self.started_at.isoformat() if self.started_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "OnboardingState":
        """Deserialize state from dict."""
        data = dict(data)
        if "current_step" in data:
            data["current_step"] = OnboardingStep[data["current_step"].upper()]
        if data.get("started_at"):
            data["started_at"] = datetime.fromisoformat(data["started_at"])
        return cls(**data)

    def to_json(self) -> str:
        """Serialize state to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> "OnboardingState":
        """Deserialize state from JSON string."""
        return cls.from_dict(json.loads(json_str))
