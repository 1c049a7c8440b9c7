"""Tests for mock sources and the file state store."""

import asyncio
import json
from datetime import datetime

import pytest

from lifeos.adapters import (
    CALENDAR_SOURCES,
    TASK_SOURCES,
    FileStateStore,
    GoogleCalendarSource,
    MockCalendarSource,
    MockTaskSource,
    asana_source,
    obsidian_source,
)
from lifeos.core.calendar import CalendarEvent, EventIntent
from lifeos.core.tasks import CognitiveLoad, Domain, Priority, Task


@pytest.fixture
def as_of():
    return datetime(2025, 1, 15, 8, 0)


def event(event_id, start, end):
    return CalendarEvent(event_id, event_id, start, end, Domain.PERSONAL, EventIntent.FLEXIBLE)


class TestMockTaskSource:
    def test_fetch_tasks(self):
        task = Task("1", "Task", Priority.NORMAL, Domain.WORK, CognitiveLoad.LOW)
        source = MockTaskSource(tasks=[task])
        assert asyncio.run(source.fetch_tasks()) == [task]

    def test_disconnected_returns_empty(self):
        source = asana_source()
        asyncio.run(source.disconnect())
        assert source.is_connected() is False
        assert asyncio.run(source.fetch_tasks()) == []

    def test_reconnect(self):
        source = MockTaskSource(connected=False)
        source.set_tasks([Task("1", "Task", Priority.NORMAL, Domain.WORK, CognitiveLoad.LOW)])
        asyncio.run(source.connect())
        assert len(asyncio.run(source.fetch_tasks())) == 1

    def test_fetch_by_domain(self):
        source = MockTaskSource(
            tasks=[
                Task("1", "Work", Priority.NORMAL, Domain.WORK, CognitiveLoad.LOW),
                Task("2", "Home", Priority.NORMAL, Domain.PERSONAL, CognitiveLoad.LOW),
            ]
        )
        tasks = asyncio.run(source.fetch_tasks_by_domain(Domain.PERSONAL))
        assert [t.id for t in tasks] == ["2"]

    def test_returns_copy_of_list(self):
        source = asana_source()
        asyncio.run(source.fetch_tasks()).clear()
        assert len(asyncio.run(source.fetch_tasks())) == 2

    def test_canned_sources(self):
        asana = asyncio.run(asana_source().fetch_tasks())
        obsidian = asyncio.run(obsidian_source().fetch_tasks())
        assert {t.domain for t in asana} == {Domain.WORK}
        assert {t.domain for t in obsidian} == {Domain.PERSONAL}
        assert {t.source for t in asana} == {"asana"}

    def test_registry(self):
        assert set(TASK_SOURCES) == {"asana", "obsidian"}
        assert set(CALENDAR_SOURCES) == {"google-calendar"}


class TestMockCalendarSource:
    def test_ids(self):
        source = MockCalendarSource(Domain.WORK)
        assert source.id == "mock-work"
        assert source.name == "Mock work Calendar"

    def test_fetch_events_in_range(self, as_of):
        inside = event("in", datetime(2025, 1, 15, 9), datetime(2025, 1, 15, 10))
        tomorrow = event("out", datetime(2025, 1, 16, 9), datetime(2025, 1, 16, 10))
        source = MockCalendarSource(Domain.PERSONAL, events=[inside, tomorrow])

        events = asyncio.run(source.fetch_today_events(as_of))

        assert [e.id for e in events] == ["in"]

    def test_event_crossing_midnight_excluded(self, as_of):
        late = event("late", datetime(2025, 1, 15, 23), datetime(2025, 1, 16, 1))
        source = MockCalendarSource(Domain.PERSONAL, events=[late])
        assert asyncio.run(source.fetch_today_events(as_of)) == []

    def test_disconnected_returns_empty(self, as_of):
        source = MockCalendarSource(
            Domain.PERSONAL,
            events=[event("in", datetime(2025, 1, 15, 9), datetime(2025, 1, 15, 10))],
            connected=False,
        )
        assert asyncio.run(source.fetch_today_events(as_of)) == []

    def test_google_calendar_events_follow_day(self, as_of):
        events = asyncio.run(GoogleCalendarSource().fetch_today_events(as_of))

        assert [e.title for e in events] == ["Weekly Sync", "Focus Time"]
        assert events[0].start == datetime(2025, 1, 15, 10)
        assert events[1].intent is EventIntent.FOCUS
        assert {e.provider for e in events} == {"google-calendar"}


class TestFileStateStore:
    def test_missing_file(self, tmp_path):
        assert FileStateStore(tmp_path / "state.json").load() is None

    def test_round_trip(self, tmp_path):
        store = FileStateStore(tmp_path / "data" / "state.json")
        store.save("anxious")
        assert store.load() == "anxious"
        assert json.loads(store.path.read_text()) == {"last_state": "anxious"}

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        assert FileStateStore(path).load() is None

    def test_unknown_state(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"last_state": "sleepy"}))
        assert FileStateStore(path).load() is None

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps(["foggy"]))
        assert FileStateStore(path).load() is None

    def test_clear(self, tmp_path):
        store = FileStateStore(tmp_path / "state.json")
        store.save("flat")
        store.clear()
        assert store.load() is None
        store.clear()
