from typing import Optional

from tracker.core.logging import get_logger
from tracker.exceptions import NotFoundError, ValidationError
from tracker.schemas import BoardView, ReassignResult, SectionOut, TaskOut
from tracker.sections import ALL_SECTIONS, DEFAULT_SECTION
from tracker.state import AppState, StoreFactory
from .board_view import COMPLETED_PAGE_SIZE, build_board
from .sections import create_section, remove_section


class TaskBoardController:
    """Task list view: filter, paginate, and mutate tasks through the store.

    Every write waits for the store round trip and then patches only the
    affected record in the shared state.
    """

    def __init__(self, state: AppState, store_factory: StoreFactory, page_size: int = COMPLETED_PAGE_SIZE):
        self.state = state
        self.store_factory = store_factory
        self.page_size = page_size
        self.current_section = ALL_SECTIONS
        self.completed_page = 1
        self.editing_id: Optional[int] = None
        self.edit_text = ""
        self.logger = get_logger(self.__class__.__name__)
        state.on_section_removed(self._section_removed)

    def _section_removed(self, section_id: str) -> None:
        if self.current_section == section_id:
            self.select_section(ALL_SECTIONS)

    def _require_task(self, task_id: int) -> TaskOut:
        task = self.state.find_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def _require_section(self, section_id: str) -> str:
        if section_id != DEFAULT_SECTION and self.state.find_section(section_id) is None:
            raise ValidationError(f"Unknown section '{section_id}'", details={"section": section_id})
        return section_id

    def select_section(self, section_id: str) -> None:
        self.current_section = section_id or ALL_SECTIONS
        self.completed_page = 1

    def view(self, page: Optional[int] = None) -> BoardView:
        if page is not None:
            self.completed_page = page
        return build_board(
            self.state.tasks,
            self.state.sections,
            self.current_section,
            self.completed_page,
            self.page_size
        )

    # Tasks

    def add_task(self, text: str, section: Optional[str] = None) -> Optional[TaskOut]:
        """Add a task to the given or selected section; blank input is ignored."""
        if not text or not text.strip():
            return None
        if section is None:
            section = DEFAULT_SECTION if self.current_section == ALL_SECTIONS else self.current_section
        self._require_section(section)
        with self.store_factory() as store:
            created = store.add_task(text.strip(), section)
        self.state.add_task(created)
        return created

    def toggle_task(self, task_id: int) -> bool:
        self._require_task(task_id)
        with self.store_factory() as store:
            completed = store.toggle_task(task_id)
        self.state.replace_task(task_id, completed=completed)
        return completed

    def delete_task(self, task_id: int) -> None:
        self._require_task(task_id)
        with self.store_factory() as store:
            store.delete_task(task_id)
        self.state.remove_task(task_id)

    def start_edit(self, task_id: int, text: str) -> None:
        self.editing_id = task_id
        self.edit_text = text

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_text = ""

    def save_edit(self) -> Optional[TaskOut]:
        """Write the edit; blank text falls back to cancel with no write."""
        if self.editing_id is None or not self.edit_text.strip():
            self.cancel_edit()
            return None
        task_id, text = self.editing_id, self.edit_text.strip()
        with self.store_factory() as store:
            store.edit_task(task_id, text)
        updated = self.state.replace_task(task_id, text=text)
        self.cancel_edit()
        return updated

    def edit_task(self, task_id: int, text: str) -> TaskOut:
        """Edit in one step; returns the task as it stands afterwards."""
        task = self._require_task(task_id)
        self.start_edit(task_id, text)
        return self.save_edit() or task

    def move_task(self, task_id: int, section: str) -> TaskOut:
        self._require_task(task_id)
        self._require_section(section)
        with self.store_factory() as store:
            store.update_task_section(task_id, section)
        return self.state.replace_task(task_id, section=section)

    # Sections

    def add_section(self, name: str) -> Optional[SectionOut]:
        return create_section(self.state, self.store_factory, name)

    def delete_section(self, section_id: str) -> Optional[ReassignResult]:
        return remove_section(self.state, self.store_factory, section_id)

    # Theme

    def set_theme(self, theme: str) -> str:
        """Apply a theme and persist it if it changed."""
        if theme == self.state.theme:
            return theme
        self.state.apply_theme(theme)
        try:
            with self.store_factory() as store:
                store.set_user_preferences(self.state.theme)
        except Exception as e:
            self.logger.error(f"Failed to save theme preference: {e}")
        return self.state.theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.state.theme == "light" else "light")
