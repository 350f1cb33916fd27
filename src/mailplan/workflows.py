"""Workflow layer between the CLI and the functional core.

Each function wires one core operation to the task store and returns plain
data for the caller to render.
"""

import logging
from datetime import date
from pathlib import Path

from .adapters.json_store import JsonTaskStore
from .config import DATA_DIR, Config
from .core.dedup import dedupe_candidates
from .core.extraction import CandidateTask, extract_candidates
from .core.scheduler import ScheduleDay, ScheduleSummary, build_schedule, summarize_schedule
from .core.tasks import Task
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


def get_task_store(config: Config) -> JsonTaskStore:
    """Resolve the task file from config."""
    if config.tasks_file:
        return JsonTaskStore(Path(config.tasks_file).expanduser())
    return JsonTaskStore(DATA_DIR / "tasks.json")


def extract_from_email(
    subject: str | None,
    body: str | None,
    as_of: date | None = None,
) -> list[CandidateTask]:
    """Extract and deduplicate task candidates from an email."""
    raw = extract_candidates(subject, body, as_of=as_of)
    candidates = dedupe_candidates(raw)
    logger.info(f"Found {len(candidates)} task candidates ({len(raw) - len(candidates)} duplicates dropped)")
    return candidates


def confirm_candidates(repo: TaskRepository, candidates: list[CandidateTask]) -> list[Task]:
    """Store the confirmed candidates as tasks, in order."""
    return [
        repo.add(
            c.text,
            priority=c.priority,
            estimated_hours=c.estimated_hours,
            deadline=c.deadline,
        )
        for c in candidates
    ]


def plan_schedule(
    repo: TaskRepository,
    start_date: date,
    work_hours_per_day: float,
) -> tuple[list[ScheduleDay], ScheduleSummary]:
    """Schedule every open, estimated task in the store."""
    tasks = repo.fetch_all()
    days = build_schedule(tasks, start_date, work_hours_per_day)
    if not days:
        logger.info("No open tasks with time estimates to schedule")
    return days, summarize_schedule(days)
