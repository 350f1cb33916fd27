"""Tests for the mailplan CLI."""

import json

import pytest
from click.testing import CliRunner

from mailplan.cli import main
from mailplan.config import Config


@pytest.fixture
def tasks_file(tmp_path, monkeypatch):
    path = tmp_path / "tasks.json"
    monkeypatch.setattr("mailplan.cli.load_config", lambda: Config(tasks_file=str(path)))
    return path


@pytest.fixture
def runner():
    return CliRunner()


def stored(tasks_file) -> list[dict]:
    return json.loads(tasks_file.read_text())


class TestExtract:
    def test_lists_candidates(self, runner, tasks_file):
        result = runner.invoke(
            main, ["extract", "-s", "Fix login bug", "-b", "TODO: 報告書を作成\n- データ整理\n緊急: 至急対応"]
        )

        assert result.exit_code == 0
        assert "Found 4 tasks" in result.output
        assert "至急対応  [高]" in result.output
        assert not tasks_file.exists()

    def test_json_output(self, runner, tasks_file):
        result = runner.invoke(main, ["extract", "-b", "- 資料作成 2時間", "--json"])

        assert result.exit_code == 0
        [candidate] = json.loads(result.output)
        assert candidate["text"] == "資料作成 2時間"
        assert candidate["estimated_hours"] == 2.0

    def test_body_from_stdin(self, runner, tasks_file):
        result = runner.invoke(main, ["extract", "-f", "-"], input="- Book the venue\n")
        assert result.exit_code == 0
        assert "Book the venue" in result.output

    def test_requires_text(self, runner, tasks_file):
        result = runner.invoke(main, ["extract"])
        assert result.exit_code == 1
        assert "Provide a subject or a body" in result.output

    def test_nothing_found(self, runner, tasks_file):
        result = runner.invoke(main, ["extract", "-b", "Thanks!"])
        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_add_all(self, runner, tasks_file):
        result = runner.invoke(main, ["extract", "-s", "Fix login bug", "-b", "- データ整理", "--add"])

        assert result.exit_code == 0
        assert [t["text"] for t in stored(tasks_file)] == ["Fix login bug", "データ整理"]

    def test_pick(self, runner, tasks_file):
        result = runner.invoke(
            main,
            ["extract", "-b", "- First thing\n- Second thing", "--pick"],
            input="n\ny\n",
        )

        assert result.exit_code == 0
        assert [t["text"] for t in stored(tasks_file)] == ["Second thing"]


class TestTaskCommands:
    def test_add_and_list(self, runner, tasks_file):
        result = runner.invoke(main, ["add", "Send invoice", "-p", "high", "--hours", "1.5", "-d", "3/7"])
        assert result.exit_code == 0
        assert "Added task 1" in result.output

        [task] = stored(tasks_file)
        assert task["priority"] == "high"
        assert task["estimated_hours"] == 1.5
        assert task["deadline"].endswith("-03-07")

        listing = runner.invoke(main, ["list"])
        assert "Send invoice" in listing.output

    def test_add_rejects_bad_deadline(self, runner, tasks_file):
        result = runner.invoke(main, ["add", "Send invoice", "-d", "someday"])
        assert result.exit_code == 2
        assert "not a date" in result.output

    @pytest.mark.parametrize("deadline", ["3 PM", "10", "Monday"])
    def test_add_rejects_partial_deadline(self, runner, tasks_file, deadline):
        result = runner.invoke(main, ["add", "Write report", "-d", deadline])
        assert result.exit_code == 2
        assert not tasks_file.exists()

    def test_list_overdue(self, runner, tasks_file):
        runner.invoke(main, ["add", "Late one", "-d", "2000-01-01"])
        runner.invoke(main, ["add", "Later one", "-d", "2999-01-01"])

        result = runner.invoke(main, ["list", "--view", "overdue"])

        assert result.exit_code == 0
        assert "Late one" in result.output
        assert "期限切れ" in result.output
        assert "Later one" not in result.output

    def test_list_view(self, runner, tasks_file):
        runner.invoke(main, ["add", "High one", "-p", "high"])
        runner.invoke(main, ["add", "Low one", "-p", "low"])

        result = runner.invoke(main, ["list", "--view", "low", "--json"])

        assert [t["text"] for t in json.loads(result.output)] == ["Low one"]

    def test_list_empty(self, runner, tasks_file):
        result = runner.invoke(main, ["list"])
        assert "No tasks." in result.output

    def test_done_toggles(self, runner, tasks_file):
        runner.invoke(main, ["add", "Toggle me"])

        runner.invoke(main, ["done", "1"])
        assert stored(tasks_file)[0]["completed"] is True

        result = runner.invoke(main, ["done", "1"])
        assert "marked open" in result.output
        assert stored(tasks_file)[0]["completed"] is False

    def test_done_unknown_id(self, runner, tasks_file):
        result = runner.invoke(main, ["done", "42"])
        assert result.exit_code == 1
        assert "No task with id 42" in result.output

    def test_edit(self, runner, tasks_file):
        runner.invoke(main, ["add", "Old text"])
        result = runner.invoke(main, ["edit", "1", "New text"])
        assert result.exit_code == 0
        assert stored(tasks_file)[0]["text"] == "New text"

    def test_delete(self, runner, tasks_file):
        runner.invoke(main, ["add", "Remove me"])
        assert runner.invoke(main, ["delete", "1"]).exit_code == 0
        assert stored(tasks_file) == []
        assert runner.invoke(main, ["delete", "1"]).exit_code == 1

    def test_clear_completed(self, runner, tasks_file):
        runner.invoke(main, ["add", "Done one"])
        runner.invoke(main, ["add", "Open one"])
        runner.invoke(main, ["done", "1"])

        result = runner.invoke(main, ["clear", "--completed"])

        assert "Removed 1 completed tasks" in result.output
        assert [t["text"] for t in stored(tasks_file)] == ["Open one"]

    def test_clear_all_confirms(self, runner, tasks_file):
        runner.invoke(main, ["add", "Keep me"])

        runner.invoke(main, ["clear"], input="n\n")
        assert len(stored(tasks_file)) == 1

        runner.invoke(main, ["clear"], input="y\n")
        assert stored(tasks_file) == []

    def test_stats(self, runner, tasks_file):
        runner.invoke(main, ["add", "One", "--hours", "2"])
        runner.invoke(main, ["add", "Two", "--hours", "1.5"])
        runner.invoke(main, ["done", "2"])

        result = runner.invoke(main, ["stats"])

        assert "Total:     2" in result.output
        assert "Completed: 1" in result.output
        assert "Hours:     3.5" in result.output

    def test_corrupt_store(self, runner, tasks_file):
        tasks_file.write_text("{broken")
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 1
        assert "Corrupt task file" in result.output


class TestSchedule:
    def test_schedule_output(self, runner, tasks_file):
        runner.invoke(main, ["add", "Write report", "-p", "high", "--hours", "4"])
        runner.invoke(main, ["add", "Review deck", "--hours", "4"])

        result = runner.invoke(main, ["schedule", "--start", "2025-01-13", "--hours", "6"])

        assert result.exit_code == 0
        assert "### 1/13 (月)  4時間" in result.output
        assert "### 1/14 (火)  4時間" in result.output

    def test_schedule_json(self, runner, tasks_file):
        runner.invoke(main, ["add", "Write report", "--hours", "3"])

        result = runner.invoke(main, ["schedule", "--start", "2025-01-18", "--json"])

        data = json.loads(result.output)
        assert data["summary"] == {"total_hours": 3.0, "total_days": 1, "average_hours": 3.0}
        [day] = data["days"]
        assert day["date"] == "2025-01-20"
        assert day["tasks"][0]["start_time"] == "09:00"
        assert day["tasks"][0]["text"] == "Write report"

    def test_nothing_to_schedule(self, runner, tasks_file):
        runner.invoke(main, ["add", "No estimate"])
        result = runner.invoke(main, ["schedule", "--start", "2025-01-13"])
        assert result.exit_code == 0
        assert "No open tasks with time estimates" in result.output

    def test_bad_start_date(self, runner, tasks_file):
        result = runner.invoke(main, ["schedule", "--start", "whenever"])
        assert result.exit_code == 2

    def test_start_must_name_month_and_day(self, runner, tasks_file):
        result = runner.invoke(main, ["schedule", "--start", "10"])
        assert result.exit_code == 2
