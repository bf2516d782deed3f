"""
Tests for EventTracker: bounded log, completion marking, return detection.
"""

import logging
from datetime import datetime

import pytest

from encore.tracking import (
    AnalyticsEvent,
    EventSink,
    EventTracker,
    OnboardingUserData,
    calendar_days_between,
)


def _user_data(**overrides) -> OnboardingUserData:
    data = {
        "email": "user@example.com",
        "age": "27",
        "name": "Sam",
        "selected_artists": ["A", "B", "C"],
        "completion_time": 12.5,
    }
    data.update(overrides)
    return OnboardingUserData(**data)


class TestAnalyticsEvent:
    def test_to_dict(self):
        ts = datetime(2024, 12, 19, 10, 0)
        event = AnalyticsEvent(name="X", properties={"a": 1}, timestamp=ts)
        assert event.to_dict() == {"name": "X", "properties": {"a": 1}, "timestamp": ts.timestamp()}

    def test_is_immutable(self):
        event = AnalyticsEvent(name="X")
        with pytest.raises(Exception):
            event.name = "Y"


class TestTrack:
    def test_appends_in_order(self, tracker):
        for i in range(3):
            tracker.track(AnalyticsEvent(name=f"e{i}"))
        assert [e["name"] for e in tracker.events()] == ["e0", "e1", "e2"]

    def test_log_is_bounded_fifo(self, tracker):
        for i in range(150):
            tracker.track(AnalyticsEvent(name=f"e{i}"))

        events = tracker.events()
        assert len(events) == 100
        assert [e["name"] for e in events] == [f"e{i}" for i in range(50, 150)]

    def test_never_exceeds_bound(self, tracker):
        for i in range(230):
            tracker.track(AnalyticsEvent(name="e"))
            assert len(tracker.events()) <= 100

    def test_custom_bound(self, store):
        tracker = EventTracker(store, max_events=5)
        for i in range(8):
            tracker.track(AnalyticsEvent(name=f"e{i}"))
        assert [e["name"] for e in tracker.events()] == ["e3", "e4", "e5", "e6", "e7"]

    def test_sinks_receive_events(self, tracker, sink):
        tracker.track_onboarding_started()
        assert sink.names == ["Onboarding_Started"]

    def test_failing_sink_does_not_block_log(self, store, caplog):
        class BrokenSink(EventSink):
            def send(self, event):
                raise RuntimeError("offline")

        tracker = EventTracker(store, sinks=[BrokenSink()])
        with caplog.at_level(logging.ERROR):
            tracker.track(AnalyticsEvent(name="e"))

        assert len(tracker.events()) == 1
        assert "BrokenSink" in caplog.text

    def test_base_properties(self, tracker, clock):
        tracker.track_onboarding_started()
        props = tracker.events()[0]["properties"]
        assert props["platform"] == "test"
        assert props["app_version"] == "9.9.9"
        assert props["timestamp"] == clock.now.timestamp()

    def test_events_limit_and_clear(self, tracker):
        for i in range(5):
            tracker.track(AnalyticsEvent(name=f"e{i}"))
        assert [e["name"] for e in tracker.events(limit=2)] == ["e3", "e4"]
        assert tracker.events(limit=0) == []

        tracker.clear_events()
        assert tracker.events() == []


class TestNamedEvents:
    def test_account_created_domain(self, tracker):
        tracker.track_account_created("user@example.com")
        tracker.track_account_created("no-at-sign")
        first, second = (e["properties"] for e in tracker.events())
        assert first["email_domain"] == "example.com"
        assert second["email_domain"] == "unknown"

    def test_onboarding_completed_marks_store(self, tracker, store, clock):
        tracker.track_onboarding_completed(_user_data())

        props = tracker.events()[-1]["properties"]
        assert props["user_age"] == "27"
        assert props["artist_selection_count"] == 3
        assert props["completion_time"] == 12.5
        assert store.get("onboarding_completed_date") == clock.now.isoformat()
        assert store.get("has_returned_after_onboarding") is False


class TestCheckForReturn:
    def test_noop_before_onboarding(self, tracker):
        assert tracker.check_for_return() is False
        assert tracker.events() == []

    def test_same_day_does_not_fire(self, tracker, clock):
        tracker.mark_onboarding_complete()
        clock.advance(hours=13)  # 23:00 same day
        assert tracker.check_for_return() is False
        assert tracker.has_returned() is False

    def test_next_day_fires_once(self, tracker, clock):
        tracker.mark_onboarding_complete()
        clock.advance(days=1)

        assert tracker.check_for_return() is True
        assert tracker.check_for_return() is False

        returned = [e for e in tracker.events() if e["name"] == "Returned_after_onboarding"]
        assert len(returned) == 1
        assert returned[0]["properties"]["days_since_onboarding"] == 1
        assert tracker.has_returned() is True

    def test_counts_calendar_days_not_elapsed_hours(self, tracker, clock):
        clock.now = datetime(2024, 12, 19, 23, 0)
        tracker.mark_onboarding_complete()
        clock.now = datetime(2024, 12, 20, 3, 0)  # four hours later, next day

        assert tracker.check_for_return() is True

    def test_twenty_hours_same_day_is_zero(self, tracker, clock):
        clock.now = datetime(2024, 12, 19, 1, 0)
        tracker.mark_onboarding_complete()
        clock.now = datetime(2024, 12, 19, 21, 0)

        assert tracker.days_since_onboarding() == 0
        assert tracker.check_for_return() is False

    def test_new_completion_starts_new_cycle(self, tracker, clock):
        tracker.mark_onboarding_complete()
        clock.advance(days=3)
        assert tracker.check_for_return() is True

        tracker.mark_onboarding_complete()
        assert tracker.has_returned() is False
        clock.advance(days=1)
        assert tracker.check_for_return() is True

    def test_malformed_timestamp_treated_as_absent(self, tracker, store):
        store.set("onboarding_completed_date", "not-a-date")
        assert tracker.completed_at() is None
        assert tracker.check_for_return() is False


def test_calendar_days_between():
    assert calendar_days_between(datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 2, 0, 1)) == 1
    assert calendar_days_between(datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 1, 23, 59)) == 0
    assert calendar_days_between(datetime(2024, 1, 31), datetime(2024, 3, 1)) == 30
