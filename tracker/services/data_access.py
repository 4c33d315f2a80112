"""Data access: the only code that talks to the remote data store.

Each public method maps to one store operation. Reads return a
:class:`~tracker.results.Fetched` and never raise; writes require a user,
run in their own transaction, and raise after logging.
"""
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional
from sqlalchemy.orm import Session

from tracker.core.config import settings
from tracker.db import get_db_context
from tracker.exceptions import AuthenticationError, NotFoundError, ValidationError
from tracker.repositories import (
    TaskRepository,
    SectionRepository,
    NoteRepository,
    RichNoteRepository,
    PreferenceRepository,
)
from tracker.results import Fetched
from tracker.schemas import TaskOut, SectionOut, PreferencesOut, ReassignResult
from tracker.sections import DEFAULT_SECTION, section_key
from .base import BaseService


class DataAccessService(BaseService):
    """Store operations for one (optional) authenticated user."""

    def __init__(self, db: Session, user_id: Optional[str] = None, display_timezone: Optional[str] = None):
        super().__init__(db)
        self.user_id = user_id
        self.task_repo = TaskRepository(db, display_timezone or settings.display_timezone)
        self.section_repo = SectionRepository(db)
        self.note_repo = NoteRepository(db)
        self.rich_note_repo = RichNoteRepository(db)
        self.preference_repo = PreferenceRepository(db)

    def _require_user(self) -> str:
        if not self.user_id:
            raise AuthenticationError()
        return self.user_id

    def _read(self, operation: str, default, query) -> Fetched:
        # No session means nothing to read yet, not a failure
        if not self.user_id:
            self.logger.debug(f"{operation}: no user session, returning default")
            return Fetched.success(default)
        return self.run_read(operation, default, lambda: query(self.user_id))

    def _write(self, operation: str, mutation):
        def run():
            return mutation(self._require_user())
        return self.run_write(operation, run)

    @staticmethod
    def _clean_text(text: Optional[str], what: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError(f"{what} cannot be empty")
        return cleaned

    # Tasks

    def list_tasks(self) -> Fetched[List[TaskOut]]:
        return self._read(
            "list_tasks", [],
            lambda user_id: self.task_repo.to_schema_batch(self.task_repo.list_for_user(user_id))
        )

    def add_task(self, text: str, section: str = DEFAULT_SECTION) -> TaskOut:
        def mutation(user_id: str) -> TaskOut:
            clean = self._clean_text(text, "Task text")
            self.logger.info(f"Adding task for user {user_id} in section {section}")
            task = self.task_repo.create(user_id, clean, section or DEFAULT_SECTION)
            return self.task_repo.to_schema(task)
        return self._write("add_task", mutation)

    def toggle_task(self, task_id: int) -> bool:
        """Flip a task's completion flag and return the stored value.

        Read-modify-write: two sessions toggling the same task at once can
        both read the same flag, and the last write wins.
        """
        def mutation(user_id: str) -> bool:
            current = self.task_repo.get_completed(task_id, user_id)
            if current is None:
                raise NotFoundError("Task", task_id)
            return bool(self.task_repo.set_completed(task_id, user_id, not current))
        return self._write("toggle_task", mutation)

    def delete_task(self, task_id: int) -> None:
        def mutation(user_id: str) -> None:
            if not self.task_repo.delete_by_user(task_id, user_id):
                raise NotFoundError("Task", task_id)
        self._write("delete_task", mutation)

    def edit_task(self, task_id: int, text: str) -> None:
        def mutation(user_id: str) -> None:
            clean = self._clean_text(text, "Task text")
            task = self.task_repo.get_by_user(task_id, user_id)
            if task is None:
                raise NotFoundError("Task", task_id)
            self.task_repo.update(task, text=clean)
        self._write("edit_task", mutation)

    def update_task_section(self, task_id: int, section: str) -> None:
        def mutation(user_id: str) -> None:
            task = self.task_repo.get_by_user(task_id, user_id)
            if task is None:
                raise NotFoundError("Task", task_id)
            self.task_repo.update(task, section=section or DEFAULT_SECTION)
        self._write("update_task_section", mutation)

    def reassign_tasks_section(self, task_ids: Iterable[int], section: str) -> ReassignResult:
        """Move a batch of tasks in one write, reporting ids that did not match."""
        requested = [int(task_id) for task_id in task_ids]

        def mutation(user_id: str) -> ReassignResult:
            updated = self.task_repo.reassign_section(user_id, requested, section)
            failed = sorted(set(requested) - set(updated))
            if failed:
                self.logger.warning(f"Could not move tasks {failed} to section {section}")
            return ReassignResult(section=section, updated=updated, failed=failed)
        return self._write("reassign_tasks_section", mutation)

    # Plain notes

    def get_notes(self) -> Fetched[str]:
        def query(user_id: str) -> str:
            note = self.note_repo.get(user_id)
            return note.body if note and note.body else ""
        return self._read("get_notes", "", query)

    def set_notes(self, body: str) -> None:
        self._write("set_notes", lambda user_id: self.note_repo.upsert(user_id, body or ""))

    # Rich notes

    def get_rich_notes(self, section: str = DEFAULT_SECTION) -> Fetched[str]:
        def query(user_id: str) -> str:
            note = self.rich_note_repo.get(user_id, section)
            return note.markdown if note and note.markdown else ""
        return self._read("get_rich_notes", "", query)

    def set_rich_notes(self, section: str, markdown: str) -> None:
        self._write(
            "set_rich_notes",
            lambda user_id: self.rich_note_repo.upsert(user_id, section or DEFAULT_SECTION, markdown or "")
        )

    def list_rich_notes_sections(self) -> Fetched[List[str]]:
        return self._read("list_rich_notes_sections", [], self.rich_note_repo.list_sections)

    def delete_rich_notes_section(self, section: str) -> None:
        self._write("delete_rich_notes_section", lambda user_id: self.rich_note_repo.delete(user_id, section))

    # Sections

    def list_sections(self) -> Fetched[List[SectionOut]]:
        return self._read(
            "list_sections", [],
            lambda user_id: [self.section_repo.to_schema(s) for s in self.section_repo.list_for_user(user_id)]
        )

    def add_section(self, name: str, color: str, icon: str, sort_order: int) -> SectionOut:
        """Create a user section whose id is derived from its name.

        Two sections whose names slug to the same id collide at the store.
        """
        def mutation(user_id: str) -> SectionOut:
            clean = self._clean_text(name, "Section name")
            section_id = section_key(clean)
            self.logger.info(f"Adding section {section_id} for user {user_id}")
            section = self.section_repo.create(user_id, section_id, clean, color, icon, sort_order)
            return self.section_repo.to_schema(section)
        return self._write("add_section", mutation)

    def delete_section(self, section_id: str) -> None:
        def mutation(user_id: str) -> None:
            if not self.section_repo.delete_by_user(section_id, user_id):
                raise NotFoundError("Section", section_id)
        self._write("delete_section", mutation)

    # Preferences

    def get_user_preferences(self) -> Fetched[PreferencesOut]:
        def query(user_id: str) -> PreferencesOut:
            prefs = self.preference_repo.get(user_id)
            if prefs is None:
                return PreferencesOut()
            return PreferencesOut(theme=prefs.theme)
        return self._read("get_user_preferences", PreferencesOut(), query)

    def set_user_preferences(self, theme: str) -> None:
        self._write("set_user_preferences", lambda user_id: self.preference_repo.upsert(user_id, theme))


@contextmanager
def open_store(user_id: Optional[str], session_factory=None) -> Iterator[DataAccessService]:
    """Open a data access service on a fresh session for one operation."""
    with get_db_context(session_factory) as db:
        yield DataAccessService(db, user_id)
