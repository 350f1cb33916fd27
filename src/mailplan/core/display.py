"""Pure text rendering for candidates, tasks and schedules - no I/O dependencies."""

from datetime import date

from .dates import format_for_display, weekday_label
from .extraction import CandidateTask
from .priority import priority_label
from .scheduler import ScheduleDay, ScheduleSummary
from .tasks import Task


def format_hours(hours: float) -> str:
    """2.0 -> '2', 1.5 -> '1.5'."""
    return f"{hours:g}"


def _badges(priority: str, hours: float, deadline: str) -> str:
    parts = [f"[{priority_label(priority)}]"]
    if hours:
        parts.append(f"{format_hours(hours)}時間")
    due = format_for_display(deadline) if deadline else ""
    if due:
        parts.append(f"期限 {due}")
    return " ".join(parts)


def format_candidate_line(candidate: CandidateTask) -> str:
    """Single line for a candidate awaiting confirmation."""
    return f"{candidate.text}  {_badges(candidate.priority, candidate.estimated_hours, candidate.deadline)}"


def format_task_line(task: Task, as_of: date | None = None) -> str:
    """Single line for a stored task: id, checkbox, text, badges, overdue mark."""
    check = "x" if task.completed else " "
    badges = _badges(task.priority, task.estimated_hours, task.deadline)
    if task.is_overdue(as_of):
        badges += " 期限切れ"
    return f"{task.id:>3} [{check}] {task.text}  {badges}"


def format_schedule(days: list[ScheduleDay], summary: ScheduleSummary) -> str:
    """Summary header followed by one block per workday."""
    lines = [
        f"総作業時間: {format_hours(summary.total_hours)}時間",
        f"必要日数: {summary.total_days}日",
        f"平均作業時間/日: {summary.average_hours:.1f}時間",
    ]
    for day in days:
        lines.append("")
        header = f"{format_for_display(day.date.isoformat())} ({weekday_label(day.date)})"
        lines.append(f"### {header}  {format_hours(day.total_hours)}時間")
        for scheduled in day.tasks:
            task = scheduled.task
            lines.append(
                f"  {scheduled.start_time}  {task.text}"
                f"  [{priority_label(task.priority)}] {format_hours(task.estimated_hours)}時間"
            )
    return "\n".join(lines)
