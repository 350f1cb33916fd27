"""mailplan CLI - email task extraction and workday scheduling."""

import json
import logging
import sys
from dataclasses import asdict
from datetime import date

import click

from .adapters.json_store import TaskStoreError
from .config import load_config
from .core.dates import normalize
from .core.display import format_candidate_line, format_schedule, format_task_line
from .core.priority import PRIORITIES
from .core.tasks import VIEWS, filter_tasks, task_stats
from .workflows import confirm_candidates, extract_from_email, get_task_store, plan_schedule


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_date_option(ctx, param, value: str | None) -> date | None:
    if value is None:
        return None
    canonical = normalize(value)
    if not canonical:
        raise click.BadParameter(f"not a date: {value!r}")
    return date.fromisoformat(canonical)


@click.group()
@click.version_option(package_name="mailplan")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """mailplan - turn email text into tasks and tasks into a schedule."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--subject", "-s", default="", help="Email subject line")
@click.option("--body", "-b", default=None, help="Email body text")
@click.option("--body-file", "-f", type=click.File("r", encoding="utf-8"), default=None,
              help="Read the body from a file ('-' for stdin)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--add", "add_all", is_flag=True, help="Add every candidate as a task")
@click.option("--pick", is_flag=True, help="Confirm each candidate before adding it")
def extract(subject: str, body: str | None, body_file, as_json: bool, add_all: bool, pick: bool):
    """Extract task candidates from an email."""
    if body_file is not None:
        body = body_file.read()

    if not subject.strip() and not (body or "").strip():
        _fail("Provide a subject or a body.")

    candidates = extract_from_email(subject, body)

    if as_json:
        click.echo(json.dumps([asdict(c) for c in candidates], ensure_ascii=False, indent=2))
    elif not candidates:
        click.echo("No tasks found.")
        return
    else:
        click.echo(f"Found {len(candidates)} tasks:\n")
        for i, candidate in enumerate(candidates, start=1):
            click.echo(f"{i:>3}. {format_candidate_line(candidate)}")

    if not (add_all or pick):
        return

    selected = candidates
    if pick:
        selected = [
            c for c in candidates
            if click.confirm(f"Add '{c.text}'?", default=True)
        ]

    try:
        added = confirm_candidates(get_task_store(load_config()), selected)
    except TaskStoreError as e:
        _fail(str(e))
    click.echo(f"\n✓ Added {len(added)} tasks", err=as_json)


@main.command()
@click.argument("text")
@click.option("--priority", "-p", type=click.Choice(PRIORITIES), default="medium", show_default=True)
@click.option("--hours", "hours", type=click.FloatRange(min=0), default=0.0,
              help="Estimated hours")
@click.option("--deadline", "-d", callback=_parse_date_option, default=None,
              help="Deadline (YYYY-MM-DD, M/D, 3月7日 ...)")
def add(text: str, priority: str, hours: float, deadline: date | None):
    """Add a task."""
    if not text.strip():
        _fail("Task text must not be empty.")
    try:
        task = get_task_store(load_config()).add(
            text,
            priority=priority,
            estimated_hours=hours,
            deadline=deadline.isoformat() if deadline else "",
        )
    except TaskStoreError as e:
        _fail(str(e))
    click.echo(f"✓ Added task {task.id}")


@main.command("list")
@click.option("--view", "-v", type=click.Choice(VIEWS), default="all", show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(view: str, as_json: bool):
    """List tasks."""
    today = date.today()
    try:
        tasks = filter_tasks(get_task_store(load_config()).fetch_all(), view, as_of=today)
    except TaskStoreError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2))
        return

    if not tasks:
        click.echo("No tasks.")
        return

    for task in tasks:
        click.echo(format_task_line(task, as_of=today))


@main.command()
@click.argument("task_id", type=int)
def done(task_id: int):
    """Toggle a task's completed state."""
    try:
        store = get_task_store(load_config())
        task = store.get(task_id)
        if task is None:
            _fail(f"No task with id {task_id}.")
        task.completed = not task.completed
        store.update(task)
    except TaskStoreError as e:
        _fail(str(e))
    state = "done" if task.completed else "open"
    click.echo(f"✓ Task {task_id} marked {state}")


@main.command()
@click.argument("task_id", type=int)
@click.argument("text")
def edit(task_id: int, text: str):
    """Replace a task's text."""
    if not text.strip():
        _fail("Task text must not be empty.")
    try:
        store = get_task_store(load_config())
        task = store.get(task_id)
        if task is None:
            _fail(f"No task with id {task_id}.")
        task.text = text.strip()
        store.update(task)
    except TaskStoreError as e:
        _fail(str(e))
    click.echo(f"✓ Task {task_id} updated")


@main.command()
@click.argument("task_id", type=int)
def delete(task_id: int):
    """Delete a task."""
    try:
        deleted = get_task_store(load_config()).delete(task_id)
    except TaskStoreError as e:
        _fail(str(e))
    if not deleted:
        _fail(f"No task with id {task_id}.")
    click.echo(f"✓ Task {task_id} deleted")


@main.command()
@click.option("--completed", "completed_only", is_flag=True, help="Only clear completed tasks")
def clear(completed_only: bool):
    """Delete all tasks (or only completed ones)."""
    try:
        store = get_task_store(load_config())
        if completed_only:
            removed = store.clear_completed()
            click.echo(f"✓ Removed {removed} completed tasks")
            return
        if not click.confirm("Delete ALL tasks?"):
            return
        store.clear()
    except TaskStoreError as e:
        _fail(str(e))
    click.echo("✓ All tasks deleted")


@main.command()
def stats():
    """Show task counts and total estimated hours."""
    try:
        tasks = get_task_store(load_config()).fetch_all()
    except TaskStoreError as e:
        _fail(str(e))
    s = task_stats(tasks)
    click.echo(f"Total:     {s.total}")
    click.echo(f"Completed: {s.completed}")
    click.echo(f"Active:    {s.active}")
    click.echo(f"Hours:     {s.total_hours:g}")


@main.command()
@click.option("--start", "start_date", callback=_parse_date_option, default=None,
              help="First day to schedule (defaults to today)")
@click.option("--hours", "hours", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Work hours per day (defaults to config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def schedule(start_date: date | None, hours: float | None, as_json: bool):
    """Pack open tasks into workdays."""
    config = load_config()
    start = start_date or date.today()
    work_hours = hours or config.work_hours_per_day

    try:
        days, summary = plan_schedule(get_task_store(config), start, work_hours)
    except TaskStoreError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "summary": asdict(summary),
                    "days": [
                        {
                            "date": d.date.isoformat(),
                            "total_hours": d.total_hours,
                            "tasks": [
                                {"start_time": s.start_time, **s.task.to_dict()}
                                for s in d.tasks
                            ],
                        }
                        for d in days
                    ],
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    if not days:
        click.echo("No open tasks with time estimates to schedule.")
        return

    click.echo(format_schedule(days, summary))


if __name__ == "__main__":
    main()
