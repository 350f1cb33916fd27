"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .dates import normalize
from .priority import HIGH, LOW, MEDIUM, PRIORITIES

VIEWS = ("all", "active", "completed", "overdue", HIGH, MEDIUM, LOW)


@dataclass
class Task:
    """A confirmed, persisted task."""

    id: int
    text: str
    completed: bool = False
    priority: str = MEDIUM
    estimated_hours: float = 0.0
    deadline: str = ""
    created_at: str = ""

    def due_date(self, as_of: date | None = None) -> date | None:
        """Deadline as a date, or None if missing or unparseable."""
        canonical = normalize(self.deadline, as_of)
        return date.fromisoformat(canonical) if canonical else None

    def days_until_due(self, as_of: date | None = None) -> int | None:
        """Days until due date (negative if overdue)."""
        due = self.due_date(as_of)
        if not due:
            return None
        as_of = as_of or date.today()
        return (due - as_of).days

    def is_overdue(self, as_of: date | None = None) -> bool:
        days = self.days_until_due(as_of)
        return not self.completed and days is not None and days < 0

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored record."""
        priority = data.get("priority") or MEDIUM
        return cls(
            id=int(data["id"]),
            text=data["text"],
            completed=bool(data.get("completed", False)),
            priority=priority if priority in PRIORITIES else MEDIUM,
            estimated_hours=float(data.get("estimated_hours") or 0),
            deadline=data.get("deadline") or "",
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority,
            "estimated_hours": self.estimated_hours,
            "deadline": self.deadline,
            "created_at": self.created_at,
        }


@dataclass
class TaskStats:
    """Counts shown alongside the task list."""

    total: int
    completed: int
    active: int
    total_hours: float


def filter_tasks(tasks: list[Task], view: str = "all", as_of: date | None = None) -> list[Task]:
    """
    Filter tasks for a list view.

    Views: all, active, completed, overdue (open and past the deadline on
    as_of), or a priority level (high/medium/low).
    Pure function - no I/O.
    """
    match view:
        case "all":
            return list(tasks)
        case "active":
            return [t for t in tasks if not t.completed]
        case "completed":
            return [t for t in tasks if t.completed]
        case "overdue":
            return [t for t in tasks if t.is_overdue(as_of)]
        case _ if view in PRIORITIES:
            return [t for t in tasks if t.priority == view]
        case _:
            raise ValueError(f"Unknown view: {view}")


def task_stats(tasks: list[Task]) -> TaskStats:
    """Totals across all tasks. Hours include completed tasks."""
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(
        total=len(tasks),
        completed=completed,
        active=len(tasks) - completed,
        total_hours=sum(t.estimated_hours for t in tasks),
    )
