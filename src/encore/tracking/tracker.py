"""
Encore - Event Tracker.

Records onboarding lifecycle events to a bounded local log and derives the
"came back on a later day" signal from the stored completion timestamp.

Usage:
    store = JsonFileStore(settings.store_path)
    tracker = EventTracker(store, sinks=[LoggingSink()])

    tracker.track_onboarding_started()
    ...
    # On app foreground / activation
    tracker.check_for_return()

Persisted keys:
    onboarding_completed_date       ISO-8601 local timestamp, absent until
                                    the first completion
    has_returned_after_onboarding   bool, flips to True once per cycle
    analytics_events                list of event dicts, newest last,
                                    at most `max_events` long
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from encore import __version__
from encore.storage import KeyValueStore

from .events import AnalyticsEvent, EventName, OnboardingUserData
from .sinks import EventSink

logger = logging.getLogger(__name__)


ONBOARDING_COMPLETED_KEY = "onboarding_completed_date"
HAS_RETURNED_KEY = "has_returned_after_onboarding"
EVENTS_KEY = "analytics_events"

DEFAULT_MAX_EVENTS = 100


def calendar_days_between(start: datetime, end: datetime) -> int:
    """Whole calendar days from start's date to end's date."""
    return (end.date() - start.date()).days


class EventTracker:
    """
    Append-only, bounded analytics log over an injected store.

    All operations are synchronous and assume a single writer.
    """

    def __init__(
        self,
        store: KeyValueStore,
        sinks: Iterable[EventSink] | None = None,
        clock: Callable[[], datetime] = datetime.now,
        platform: str = "CLI",
        app_version: str = __version__,
        max_events: int = DEFAULT_MAX_EVENTS,
    ):
        self.store = store
        self.sinks: list[EventSink] = list(sinks or [])
        self.clock = clock
        self.platform = platform
        self.app_version = app_version
        self.max_events = max_events

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings, sinks: Iterable[EventSink] | None = None) -> "EventTracker":
        return cls(
            store,
            sinks=sinks,
            platform=settings.platform,
            app_version=settings.app_version,
            max_events=settings.max_stored_events,
        )

    # =========================================================================
    # Core
    # =========================================================================

    def track(self, event: AnalyticsEvent) -> None:
        """Append the event to the local log, then hand it to every sink."""
        events = list(self.store.get(EVENTS_KEY) or [])
        events.append(event.to_dict())
        if len(events) > self.max_events:
            events = events[-self.max_events:]
        self.store.set(EVENTS_KEY, events)

        for sink in self.sinks:
            try:
                sink.send(event)
            except Exception:
                logger.exception(f"Sink {type(sink).__name__} failed for {event.name}")

    def mark_onboarding_complete(self) -> None:
        self.store.set(ONBOARDING_COMPLETED_KEY, self.clock().isoformat())
        self.store.set(HAS_RETURNED_KEY, False)

    def check_for_return(self) -> bool:
        """
        Emit Returned_after_onboarding once per onboarding cycle.

        Fires when onboarding has completed, the user has not been counted
        as returned yet, and today is at least one calendar day after the
        completion date. Returns True if the event was emitted.
        """
        completed_at = self.completed_at()
        if completed_at is None or self.has_returned():
            return False

        if calendar_days_between(completed_at, self.clock()) < 1:
            return False

        self.track_returned_after_onboarding()
        return True

    # =========================================================================
    # Named events
    # =========================================================================

    def _event(self, name: EventName, **properties: Any) -> AnalyticsEvent:
        now = self.clock()
        return AnalyticsEvent(
            name=name.value,
            properties={
                "timestamp": now.timestamp(),
                "platform": self.platform,
                "app_version": self.app_version,
                **properties,
            },
            timestamp=now,
        )

    def track_onboarding_started(self) -> None:
        self.track(self._event(EventName.ONBOARDING_STARTED))

    def track_step_completed(self, step_name: str, step_index: int, step_data: dict[str, Any] | None = None) -> None:
        self.track(self._event(
            EventName.ONBOARDING_STEP_COMPLETED,
            step_name=step_name,
            step_index=step_index,
            step_data=dict(step_data or {}),
        ))

    def track_account_created(self, email: str) -> None:
        parts = email.split("@")
        self.track(self._event(
            EventName.ACCOUNT_CREATED,
            has_email=bool(email),
            email_domain=parts[1] if len(parts) > 1 else "unknown",
        ))

    def track_artist_selection_completed(self, artists: list[str]) -> None:
        self.track(self._event(
            EventName.ARTIST_SELECTION_COMPLETED,
            artist_count=len(artists),
            artists=list(artists),
        ))

    def track_onboarding_completed(self, user_data: OnboardingUserData) -> None:
        """Record completion and start a new return-tracking cycle."""
        self.track(self._event(
            EventName.ONBOARDING_COMPLETED,
            user_age=user_data.age,
            artist_selection_count=len(user_data.selected_artists),
            completion_time=user_data.completion_time,
        ))
        self.mark_onboarding_complete()

    def track_returned_after_onboarding(self) -> None:
        self.track(self._event(
            EventName.RETURNED_AFTER_ONBOARDING,
            days_since_onboarding=self.days_since_onboarding(),
        ))
        # Prevents duplicate tracking until the next completion
        self.store.set(HAS_RETURNED_KEY, True)

    # =========================================================================
    # Queries
    # =========================================================================

    def completed_at(self) -> datetime | None:
        raw = self.store.get(ONBOARDING_COMPLETED_KEY)
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed completion timestamp: {raw!r}")
            return None

    def has_returned(self) -> bool:
        return bool(self.store.get(HAS_RETURNED_KEY, False))

    def days_since_onboarding(self) -> int:
        completed_at = self.completed_at()
        if completed_at is None:
            return 0
        return calendar_days_between(completed_at, self.clock())

    def events(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Stored event dicts, oldest first. `limit` keeps the newest N."""
        events = list(self.store.get(EVENTS_KEY) or [])
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear_events(self) -> None:
        self.store.set(EVENTS_KEY, [])
