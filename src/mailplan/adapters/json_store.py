"""File-based task storage adapter."""

import json
import logging
from datetime import datetime
from pathlib import Path

from mailplan.core.priority import MEDIUM
from mailplan.core.tasks import Task

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Raised when the task file cannot be read."""

    pass


class JsonTaskStore:
    """
    JSON file task storage.

    Implements TaskRepository protocol. The whole list lives in one JSON
    array; new ids are one past the highest stored id.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> list[Task]:
        if not self.path.exists():
            return []
        content = self.path.read_text()
        if not content.strip():
            return []
        try:
            records = json.loads(content)
            return [Task.from_dict(r) for r in records]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise TaskStoreError(f"Corrupt task file {self.path}: {e}") from e

    def _save(self, tasks: list[Task]) -> None:
        self.path.write_text(
            json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)
        )

    def fetch_all(self) -> list[Task]:
        """Fetch all tasks, in insertion order."""
        return self._load()

    def get(self, task_id: int) -> Task | None:
        """Fetch a single task. Returns None if not found."""
        for task in self._load():
            if task.id == task_id:
                return task
        return None

    def add(
        self,
        text: str,
        priority: str = MEDIUM,
        estimated_hours: float = 0.0,
        deadline: str = "",
    ) -> Task:
        """Create a task and return it with its assigned id."""
        tasks = self._load()
        next_id = max((t.id for t in tasks), default=0) + 1
        task = Task(
            id=next_id,
            text=text.strip(),
            completed=False,
            priority=priority,
            estimated_hours=estimated_hours,
            deadline=deadline,
            created_at=datetime.now().isoformat(timespec="seconds"),
        )
        tasks.append(task)
        self._save(tasks)
        logger.debug(f"Added task {task.id}: {task.text}")
        return task

    def update(self, task: Task) -> None:
        """Overwrite an existing task."""
        tasks = self._load()
        for i, existing in enumerate(tasks):
            if existing.id == task.id:
                tasks[i] = task
                self._save(tasks)
                return
        raise KeyError(task.id)

    def delete(self, task_id: int) -> bool:
        """Delete a task. Returns False if it did not exist."""
        tasks = self._load()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self._save(remaining)
        return True

    def clear_completed(self) -> int:
        """Delete completed tasks. Returns how many were removed."""
        tasks = self._load()
        remaining = [t for t in tasks if not t.completed]
        self._save(remaining)
        return len(tasks) - len(remaining)

    def clear(self) -> None:
        """Delete every task."""
        self._save([])
