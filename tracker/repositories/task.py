from typing import List, Optional, Iterable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session
from sqlalchemy import select, update

from tracker.models import Task
from tracker.schemas import TaskOut
from tracker.sections import DEFAULT_SECTION
from .base import BaseRepository


def format_time_of_day(value: datetime, tz_name: str = "UTC") -> str:
    """Render a timestamp as a two-digit ``hh:mm AM/PM`` clock string."""
    if value.tzinfo is None:
        # SQLite hands back naive values; they were written as UTC
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name)).strftime("%I:%M %p")


class TaskRepository(BaseRepository[Task]):
    """Repository for Task operations."""

    def __init__(self, db: Session, display_timezone: str = "UTC"):
        super().__init__(db, Task)
        self.display_timezone = display_timezone

    def list_for_user(self, user_id: str) -> List[Task]:
        """All of a user's tasks in store order (by id)."""
        return self.list_by_user(user_id, Task.id.asc())

    def create(self, user_id: str, text: str, section: str = DEFAULT_SECTION) -> Task:
        """Insert a new, not yet completed task."""
        task = Task(
            user_id=user_id,
            text=text,
            completed=False,
            section=section,
            created_at=datetime.now(timezone.utc)
        )
        return self.add(task)

    def get_completed(self, task_id: int, user_id: str) -> Optional[bool]:
        """Read only the completion flag; None when the task does not exist."""
        return self.db.execute(
            select(Task.completed).where(Task.id == task_id, Task.user_id == user_id)
        ).scalar_one_or_none()

    def set_completed(self, task_id: int, user_id: str, completed: bool) -> Optional[bool]:
        """Write the completion flag and return the stored value."""
        task = self.get_by_user(task_id, user_id)
        if task is None:
            return None
        return self.update(task, completed=completed).completed

    def reassign_section(self, user_id: str, task_ids: Iterable[int], section: str) -> List[int]:
        """Move many tasks in one statement; returns the ids that matched."""
        wanted = list(dict.fromkeys(task_ids))
        if not wanted:
            return []

        matched = self.db.execute(
            select(Task.id).where(Task.user_id == user_id, Task.id.in_(wanted))
        ).scalars().all()
        if matched:
            self.db.execute(
                update(Task)
                .where(Task.user_id == user_id, Task.id.in_(matched))
                .values(section=section)
                .execution_options(synchronize_session="fetch")
            )
            self.db.flush()
        return sorted(matched)

    def to_schema(self, task: Task) -> TaskOut:
        """Normalize a Task row into the domain record."""
        return TaskOut(
            id=int(task.id),
            text=task.text,
            completed=bool(task.completed),
            created_at=task.created_at,
            created_time=format_time_of_day(task.created_at, self.display_timezone),
            section=task.section or DEFAULT_SECTION
        )

    def to_schema_batch(self, tasks: List[Task]) -> List[TaskOut]:
        return [self.to_schema(task) for task in tasks]
