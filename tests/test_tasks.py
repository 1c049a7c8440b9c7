"""Tests for core task logic."""

from dataclasses import replace

import pytest

from lifeos.core.capacity import DEFAULT_CATALOG
from lifeos.core.tasks import (
    CognitiveLoad,
    Domain,
    Priority,
    Task,
    cognitive_load_weight,
    filter_by_domain,
    is_eligible,
    modulate_tasks,
    sort_by_priority,
)


# Fixtures
@pytest.fixture
def make_task():
    """Factory for creating tasks."""
    counter = iter(range(1, 1000))

    def _make(
        priority: str = "essential",
        load: str = "minimal",
        domain: str = "work",
        minutes: int | None = 10,
        title: str | None = None,
    ) -> Task:
        n = next(counter)
        return Task(
            id=str(n),
            title=title or f"Task {n}",
            priority=Priority(priority),
            domain=Domain(domain),
            cognitive_load=CognitiveLoad(load),
            estimated_minutes=minutes,
        )

    return _make


@pytest.fixture
def foggy():
    return DEFAULT_CATALOG.config_for("foggy")


@pytest.fixture
def driven():
    return DEFAULT_CATALOG.config_for("driven")


def with_limits(config, max_tasks=None, max_minutes=None):
    """Copy of a config with different task limits."""
    visibility = config.task_visibility
    workload = config.workload
    if max_tasks is not None:
        visibility = replace(visibility, max_visible_tasks=max_tasks)
    if max_minutes is not None:
        workload = replace(workload, max_daily_minutes=max_minutes)
    return replace(config, task_visibility=visibility, workload=workload)


class TestTask:
    def test_minutes_defaults_to_15(self, make_task):
        assert make_task(minutes=None).minutes == 15

    def test_minutes_uses_estimate(self, make_task):
        assert make_task(minutes=40).minutes == 40

    def test_from_dict(self):
        task = Task.from_dict(
            {
                "id": "a1",
                "title": "Write report",
                "priority": "important",
                "domain": "work",
                "cognitive_load": "high",
                "estimated_minutes": 90,
            },
            source="asana",
        )

        assert task.priority is Priority.IMPORTANT
        assert task.domain is Domain.WORK
        assert task.cognitive_load is CognitiveLoad.HIGH
        assert task.estimated_minutes == 90
        assert task.source == "asana"
        assert task.visible is False

    def test_from_dict_rejects_unknown_priority(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": "x", "title": "x", "priority": "urgent"})


class TestIsEligible:
    def test_personal_hidden_when_personal_disabled(self, make_task, foggy):
        assert is_eligible(make_task(domain="personal"), foggy) is False

    def test_work_shown_when_work_enabled(self, make_task, foggy):
        assert is_eligible(make_task(domain="work"), foggy) is True

    def test_priority_outside_visible_set(self, make_task, foggy):
        assert is_eligible(make_task(priority="important"), foggy) is False

    def test_load_outside_manageable_set(self, make_task, foggy):
        assert is_eligible(make_task(load="medium"), foggy) is False

    def test_nothing_eligible_when_both_domains_disabled(self, make_task):
        overstimulated = DEFAULT_CATALOG.config_for("overstimulated")
        assert is_eligible(make_task(domain="work"), overstimulated) is False
        assert is_eligible(make_task(domain="personal"), overstimulated) is False


class TestSortByPriority:
    def test_essential_first_optional_last(self, make_task):
        tasks = [
            make_task(priority="optional"),
            make_task(priority="normal"),
            make_task(priority="essential"),
            make_task(priority="important"),
        ]
        ordered = [t.priority for t in sort_by_priority(tasks)]
        assert ordered == [Priority.ESSENTIAL, Priority.IMPORTANT, Priority.NORMAL, Priority.OPTIONAL]

    def test_stable_for_ties(self, make_task):
        tasks = [make_task(title="first"), make_task(title="second"), make_task(title="third")]
        assert [t.title for t in sort_by_priority(tasks)] == ["first", "second", "third"]


class TestModulateTasks:
    def test_foggy_scenario(self, make_task, foggy):
        """One task per priority/load pair: only essential/minimal survives foggy."""
        tasks = [
            make_task(priority="essential", load="minimal"),
            make_task(priority="important", load="low"),
            make_task(priority="normal", load="medium"),
            make_task(priority="optional", load="high"),
        ]

        result = modulate_tasks(tasks, foggy)

        assert [t.id for t in result.visible_tasks] == ["1"]
        assert len(result.hidden_tasks) == 3
        assert result.total_tasks == 4

    def test_visible_sorted_essential_first(self, make_task, driven):
        tasks = [make_task(priority="optional"), make_task(priority="essential")]
        result = modulate_tasks(tasks, driven)
        assert [t.priority for t in result.visible_tasks] == [Priority.ESSENTIAL, Priority.OPTIONAL]

    def test_count_cap(self, make_task, foggy):
        tasks = [make_task(minutes=5) for _ in range(5)]

        result = modulate_tasks(tasks, foggy)

        assert len(result.visible_tasks) == 3
        assert len(result.hidden_tasks) == 2
        assert result.workload_limit_reached is True

    def test_exact_count_without_overflow_is_not_limit(self, make_task, foggy):
        tasks = [make_task(minutes=5) for _ in range(3)]
        result = modulate_tasks(tasks, foggy)
        assert len(result.visible_tasks) == 3
        assert result.workload_limit_reached is False

    def test_minute_cap(self, make_task, foggy):
        tasks = [make_task(minutes=25), make_task(minutes=25), make_task(minutes=25)]

        result = modulate_tasks(tasks, foggy)

        assert len(result.visible_tasks) == 2
        assert result.total_minutes == 50
        assert result.workload_limit_reached is True
        assert result.remaining_capacity == 10

    def test_minute_cap_inclusive(self, make_task, foggy):
        result = modulate_tasks([make_task(minutes=60)], foggy)
        assert len(result.visible_tasks) == 1
        assert result.remaining_capacity == 0
        assert result.workload_limit_reached is False

    def test_admission_stops_at_first_failure(self, make_task, foggy):
        """A smaller task after an oversized one is not admitted: admission is a prefix."""
        tasks = [make_task(minutes=50), make_task(minutes=20), make_task(minutes=5)]

        result = modulate_tasks(tasks, foggy)

        assert [t.id for t in result.visible_tasks] == ["1"]
        assert result.total_minutes == 50

    def test_no_essential_override_for_minutes(self, make_task, foggy):
        result = modulate_tasks([make_task(priority="essential", minutes=90)], foggy)
        assert result.visible_tasks == []
        assert result.workload_limit_reached is True

    def test_default_minutes_applied(self, make_task):
        config = with_limits(DEFAULT_CATALOG.config_for("foggy"), max_minutes=30)
        tasks = [make_task(minutes=None), make_task(minutes=None), make_task(minutes=None)]

        result = modulate_tasks(tasks, config)

        assert len(result.visible_tasks) == 2
        assert result.total_minutes == 30

    def test_visibility_flags(self, make_task, foggy):
        tasks = [make_task(), make_task(priority="optional")]
        result = modulate_tasks(tasks, foggy)
        assert all(t.visible for t in result.visible_tasks)
        assert all(not t.visible for t in result.hidden_tasks)

    def test_hidden_in_input_order(self, make_task, foggy):
        tasks = [make_task(priority="optional"), make_task(), make_task(load="high")]
        result = modulate_tasks(tasks, foggy)
        assert [t.id for t in result.hidden_tasks] == ["1", "3"]

    def test_inputs_not_mutated(self, make_task, foggy):
        tasks = [make_task(), make_task(priority="optional")]
        modulate_tasks(tasks, foggy)
        assert [t.visible for t in tasks] == [False, False]

    def test_each_call_is_fresh(self, make_task, foggy):
        """Tasks hidden by one call carry nothing into the next."""
        tasks = [make_task(minutes=5) for _ in range(5)]
        first = modulate_tasks(tasks, foggy)
        second = modulate_tasks(tasks, foggy)
        assert [t.id for t in first.visible_tasks] == [t.id for t in second.visible_tasks]

    def test_invariants_hold_for_every_state(self, make_task):
        tasks = [
            make_task(priority=p, load=load, domain=d, minutes=m)
            for p in ("essential", "important", "normal", "optional")
            for load in ("minimal", "low", "medium", "high")
            for d in ("work", "personal")
            for m in (10, 45)
        ]
        for state in DEFAULT_CATALOG:
            config = DEFAULT_CATALOG.config_for(state)
            result = modulate_tasks(tasks, config)
            assert len(result.visible_tasks) <= config.task_visibility.max_visible_tasks
            assert sum(t.minutes for t in result.visible_tasks) <= config.workload.max_daily_minutes
            assert len(result.visible_tasks) + len(result.hidden_tasks) == len(tasks)

    def test_empty_list(self):
        for state in DEFAULT_CATALOG:
            config = DEFAULT_CATALOG.config_for(state)
            result = modulate_tasks([], config)
            assert result.visible_tasks == []
            assert result.hidden_tasks == []
            assert result.total_minutes == 0
            assert result.workload_limit_reached is False
            assert result.remaining_capacity == config.workload.max_daily_minutes


class TestHelpers:
    def test_cognitive_load_weights(self):
        assert cognitive_load_weight(CognitiveLoad.MINIMAL) == 1
        assert cognitive_load_weight(CognitiveLoad.LOW) == 2
        assert cognitive_load_weight(CognitiveLoad.MEDIUM) == 4
        assert cognitive_load_weight(CognitiveLoad.HIGH) == 8

    def test_filter_by_domain(self, make_task):
        tasks = [make_task(domain="work"), make_task(domain="personal")]
        assert [t.id for t in filter_by_domain(tasks, Domain.PERSONAL)] == ["2"]
