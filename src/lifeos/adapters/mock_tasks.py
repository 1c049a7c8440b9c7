"""Mock task sources - canned data standing in for real task managers."""

import logging

from lifeos.core.tasks import Domain, Task, filter_by_domain

logger = logging.getLogger(__name__)


class MockTaskSource:
    """
    In-memory task source.

    Implements TaskSource protocol. Returns copies of its tasks while
    connected and nothing once disconnected.
    """

    def __init__(
        self,
        source_id: str = "mock",
        name: str = "Mock Task Manager",
        tasks: list[Task] | None = None,
        connected: bool = True,
    ):
        self.id = source_id
        self.name = name
        self._tasks = list(tasks or [])
        self._connected = connected

    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    def set_tasks(self, tasks: list[Task]) -> None:
        """Replace the canned tasks."""
        self._tasks = list(tasks)

    async def fetch_tasks(self) -> list[Task]:
        if not self._connected:
            logger.debug(f"{self.name} is disconnected, returning no tasks")
            return []
        return list(self._tasks)

    async def fetch_tasks_by_domain(self, domain: Domain) -> list[Task]:
        return filter_by_domain(await self.fetch_tasks(), domain)


ASANA_TASKS = [
    {
        "id": "asana-1",
        "title": "Draft project proposal",
        "priority": "important",
        "domain": "work",
        "cognitive_load": "high",
        "estimated_minutes": 120,
    },
    {
        "id": "asana-2",
        "title": "Review marketing copy",
        "priority": "normal",
        "domain": "work",
        "cognitive_load": "medium",
        "estimated_minutes": 45,
    },
]

OBSIDIAN_TASKS = [
    {
        "id": "obsidian-1",
        "title": "Finish research on topic X",
        "priority": "important",
        "domain": "personal",
        "cognitive_load": "high",
        "estimated_minutes": 90,
    },
    {
        "id": "obsidian-2",
        "title": "Outline blog post",
        "priority": "normal",
        "domain": "personal",
        "cognitive_load": "medium",
        "estimated_minutes": 30,
    },
]


def asana_source() -> MockTaskSource:
    """Mock Asana workspace with a couple of work tasks."""
    return MockTaskSource(
        "asana",
        "Asana",
        [Task.from_dict(t, source="asana") for t in ASANA_TASKS],
    )


def obsidian_source() -> MockTaskSource:
    """Mock Obsidian vault with a couple of personal tasks."""
    return MockTaskSource(
        "obsidian",
        "Obsidian",
        [Task.from_dict(t, source="obsidian") for t in OBSIDIAN_TASKS],
    )
