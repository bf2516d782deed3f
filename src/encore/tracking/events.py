"""
Encore - Analytics event definitions.

An AnalyticsEvent is created per tracked action, appended to the local log
in its dict form, handed to the sinks, and then dropped.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventName(Enum):
    """Event tags, as they appear in the stored log."""

    ONBOARDING_STARTED = "Onboarding_Started"
    ONBOARDING_STEP_COMPLETED = "Onboarding_Step_Completed"
    ACCOUNT_CREATED = "Account_Created"
    ARTIST_SELECTION_COMPLETED = "Artist_Selection_Completed"
    ONBOARDING_COMPLETED = "Onboarding_Completed"
    RETURNED_AFTER_ONBOARDING = "Returned_after_onboarding"


class AnalyticsEvent(BaseModel):
    """A named, timestamped record of one user action. Immutable."""

    model_config = ConfigDict(frozen=True)

    name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Log entry form: timestamp as epoch seconds."""
        return {
            "name": self.name,
            "properties": dict(self.properties),
            "timestamp": self.timestamp.timestamp(),
        }


class OnboardingUserData(BaseModel):
    """What the wizard hands the tracker when the user finishes."""

    email: str
    age: str
    name: str
    selected_artists: list[str] = Field(default_factory=list)
    completion_time: float  # seconds since the wizard started
