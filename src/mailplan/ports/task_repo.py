"""Task repository interface."""

from typing import Protocol

from mailplan.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for storing confirmed tasks in any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks, in insertion order."""
        ...

    def get(self, task_id: int) -> Task | None:
        """Fetch a single task. Returns None if not found."""
        ...

    def add(
        self,
        text: str,
        priority: str = "medium",
        estimated_hours: float = 0.0,
        deadline: str = "",
    ) -> Task:
        """Create a task and return it with its assigned id."""
        ...

    def update(self, task: Task) -> None:
        """Overwrite an existing task."""
        ...

    def delete(self, task_id: int) -> bool:
        """Delete a task. Returns False if it did not exist."""
        ...

    def clear_completed(self) -> int:
        """Delete completed tasks. Returns how many were removed."""
        ...

    def clear(self) -> None:
        """Delete every task."""
        ...
