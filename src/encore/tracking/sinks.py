"""
Encore - Event sinks.

A sink is where a tracked event goes after it has been written to the local
log. Delivery to a remote analytics backend would be a sink; none ships
here. LoggingSink writes a one-line summary per event.
"""

import logging
from abc import ABC, abstractmethod

from .events import AnalyticsEvent

logger = logging.getLogger(__name__)


class EventSink(ABC):
    """Receives every event the tracker records."""

    @abstractmethod
    def send(self, event: AnalyticsEvent) -> None:
        ...


class LoggingSink(EventSink):
    def __init__(self, level: int = logging.INFO):
        self.level = level

    def send(self, event: AnalyticsEvent) -> None:
        step = event.properties.get("step_name")
        if step:
            logger.log(self.level, f"📊 Analytics: {event.name} - {step}")
        else:
            logger.log(self.level, f"📊 Analytics: {event.name}")


class MemorySink(EventSink):
    """Keeps every event in a list. Useful for inspecting a session."""

    def __init__(self):
        self.events: list[AnalyticsEvent] = []

    def send(self, event: AnalyticsEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]
