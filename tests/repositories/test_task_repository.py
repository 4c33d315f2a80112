from datetime import datetime, timezone

import pytest

from tracker import sections
from tracker.models import Task
from tracker.repositories import task as task_module
from tracker.repositories.task import TaskRepository, format_time_of_day


class TestTaskRepository:
    """Test TaskRepository data access logic."""

    @pytest.fixture
    def task_repo(self, test_db):
        """Create TaskRepository instance with test database."""
        return TaskRepository(test_db)

    def test_create_sets_defaults(self, task_repo):
        task = task_repo.create("user-1", "Water plants")

        assert isinstance(task, Task)
        assert task.id is not None
        assert task.completed is False
        assert task.section == "personal"
        assert task.created_at is not None

    def test_get_completed_missing_task(self, task_repo):
        assert task_repo.get_completed(123, "user-1") is None

    def test_set_completed_is_user_scoped(self, task_repo):
        task = task_repo.create("user-1", "Mine")

        assert task_repo.set_completed(task.id, "user-2", True) is None
        assert task_repo.get_completed(task.id, "user-1") is False

    def test_reassign_section_returns_matched_ids(self, task_repo, test_db):
        a = task_repo.create("user-1", "A", "errands")
        b = task_repo.create("user-1", "B", "errands")
        theirs = task_repo.create("user-2", "C", "errands")

        matched = task_repo.reassign_section("user-1", [b.id, a.id, theirs.id, b.id], "personal")

        assert matched == sorted([a.id, b.id])
        assert test_db.get(Task, a.id).section == "personal"
        assert test_db.get(Task, theirs.id).section == "errands"

    def test_reassign_section_empty_batch(self, task_repo):
        assert task_repo.reassign_section("user-1", [], "personal") == []

    def test_to_schema_fills_missing_section(self, task_repo, test_db):
        task = task_repo.create("user-1", "Legacy row")
        task.section = None
        test_db.flush()

        assert task_repo.to_schema(task).section == "personal"

    def test_default_section_is_shared(self, task_repo):
        task = task_repo.create("user-1", "Routed")

        assert task_module.DEFAULT_SECTION is sections.DEFAULT_SECTION
        assert task.section == sections.DEFAULT_SECTION


class TestFormatTimeOfDay:
    """Clock strings shown next to each task."""

    def test_two_digit_hour_with_meridiem(self):
        value = datetime(2026, 10, 19, 9, 5, tzinfo=timezone.utc)
        assert format_time_of_day(value) == "09:05 AM"

    def test_afternoon(self):
        value = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)
        assert format_time_of_day(value) == "03:30 PM"

    def test_naive_values_are_utc(self):
        assert format_time_of_day(datetime(2026, 10, 19, 0, 0)) == "12:00 AM"

    def test_display_timezone(self):
        value = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert format_time_of_day(value, "America/New_York") == "08:00 AM"
