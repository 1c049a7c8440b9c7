"""Task source interface."""

from typing import Protocol

from lifeos.core.tasks import Domain, Task


class TaskSource(Protocol):
    """Interface for fetching tasks from any task manager."""

    id: str
    name: str

    def is_connected(self) -> bool:
        """Whether the source is connected and authenticated."""
        ...

    async def fetch_tasks(self) -> list[Task]:
        """Fetch all tasks. Disconnected sources return an empty list."""
        ...

    async def fetch_tasks_by_domain(self, domain: Domain) -> list[Task]:
        """Fetch tasks for one domain only."""
        ...
