"""Greedy workday scheduling - no I/O dependencies."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from .dates import next_workday, normalize
from .priority import priority_rank
from .tasks import Task
from .timeslots import calculate_start_time

logger = logging.getLogger(__name__)

DEFAULT_WORK_HOURS_PER_DAY = 6.0


@dataclass
class ScheduledTask:
    """A task placed on a day at a clock time."""

    task: Task
    start_time: str


@dataclass
class ScheduleDay:
    """One workday's assignment. total_hours is the sum of its task hours."""

    date: date
    tasks: list[ScheduledTask] = field(default_factory=list)
    total_hours: float = 0.0


@dataclass
class ScheduleSummary:
    total_hours: float
    total_days: int
    average_hours: float


def schedulable_tasks(tasks: list[Task]) -> list[Task]:
    """Open tasks with a time estimate."""
    return [t for t in tasks if not t.completed and t.estimated_hours > 0]


def sort_for_schedule(tasks: list[Task], as_of: date | None = None) -> list[Task]:
    """
    Sort tasks by priority (descending) then deadline (ascending).

    Dated tasks come before undated ones; ties keep input order. A deadline
    without a year resolves against as_of.
    Pure function - no I/O.
    """

    def sort_key(t: Task) -> tuple[int, int, str]:
        # Negative rank for descending sort; canonical dates sort as strings
        deadline = normalize(t.deadline, as_of)
        return (-priority_rank(t.priority), 0 if deadline else 1, deadline)

    return sorted(tasks, key=sort_key)


def build_schedule(
    tasks: list[Task],
    start_date: date,
    work_hours_per_day: float = DEFAULT_WORK_HOURS_PER_DAY,
) -> list[ScheduleDay]:
    """
    Pack tasks into workdays, first-fit, in a single forward pass.

    A day closes when the next task would exceed work_hours_per_day. Tasks
    are never split; one longer than a full day gets a day to itself.
    Saturdays and Sundays are skipped.

    Pure function - no I/O.
    """
    ordered = sort_for_schedule(schedulable_tasks(tasks), as_of=start_date)

    days: list[ScheduleDay] = []
    current_date = next_workday(start_date)
    day_hours = 0.0
    day_tasks: list[ScheduledTask] = []

    for task in ordered:
        if day_hours + task.estimated_hours > work_hours_per_day and day_tasks:
            days.append(ScheduleDay(date=current_date, tasks=day_tasks, total_hours=day_hours))
            logger.debug(f"Closed {current_date} with {len(day_tasks)} tasks ({day_hours}h)")
            current_date = next_workday(current_date + timedelta(days=1))
            day_hours = 0.0
            day_tasks = []

        day_tasks.append(ScheduledTask(task=task, start_time=calculate_start_time(day_hours)))
        day_hours += task.estimated_hours

    if day_tasks:
        days.append(ScheduleDay(date=current_date, tasks=day_tasks, total_hours=day_hours))

    logger.info(f"Scheduled {len(ordered)} tasks over {len(days)} workdays")
    return days


def summarize_schedule(days: list[ScheduleDay]) -> ScheduleSummary:
    """Total hours, day count, and average hours per day."""
    total_hours = sum(d.total_hours for d in days)
    total_days = len(days)
    average = total_hours / total_days if total_days else 0.0
    return ScheduleSummary(total_hours=total_hours, total_days=total_days, average_hours=average)
