"""Functional core - pure business logic with no I/O."""

from .dates import normalize, format_for_display, parse_from_display, next_workday
from .priority import classify_priority, priority_rank
from .timeslots import calculate_start_time
from .extraction import CandidateTask, extract_candidates, find_global_deadline
from .dedup import dedupe_candidates
from .tasks import Task, TaskStats, filter_tasks, task_stats
from .scheduler import (
    ScheduleDay,
    ScheduledTask,
    ScheduleSummary,
    build_schedule,
    sort_for_schedule,
    summarize_schedule,
)

__all__ = [
    # Dates
    "normalize",
    "format_for_display",
    "parse_from_display",
    "next_workday",
    # Priority
    "classify_priority",
    "priority_rank",
    # Time slots
    "calculate_start_time",
    # Extraction
    "CandidateTask",
    "extract_candidates",
    "find_global_deadline",
    "dedupe_candidates",
    # Tasks
    "Task",
    "TaskStats",
    "filter_tasks",
    "task_stats",
    # Scheduling
    "ScheduleDay",
    "ScheduledTask",
    "ScheduleSummary",
    "build_schedule",
    "sort_for_schedule",
    "summarize_schedule",
]
