"""
Encore - Tracking Package.

Provides:
- AnalyticsEvent / EventName: the event value and its tags
- EventTracker: bounded local log + return-visit detection
- EventSink: where events go after the local log
"""

from encore.tracking.events import AnalyticsEvent, EventName, OnboardingUserData
from encore.tracking.sinks import EventSink, LoggingSink, MemorySink
from encore.tracking.tracker import EventTracker, calendar_days_between

__all__ = [
    "AnalyticsEvent",
    "EventName",
    "OnboardingUserData",
    "EventSink",
    "LoggingSink",
    "MemorySink",
    "EventTracker",
    "calendar_days_between",
]
