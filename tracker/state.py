"""In-memory application data for one user session.

Loaded once, then kept current by the controllers through the named
mutations below; it is never re-fetched wholesale.
"""
from __future__ import annotations

import asyncio
from typing import Callable, ContextManager, Dict, Iterable, List, Optional

from tracker.core.logging import get_logger
from tracker.exceptions import ConsistencyError
from tracker.schemas import AppDataOut, SectionOut, TaskOut
from tracker.sections import BUILTIN_SECTIONS, DEFAULT_SECTION

logger = get_logger(__name__)

# Zero-argument callable returning ``with``-able DataAccessService
StoreFactory = Callable[[], ContextManager["DataAccessService"]]

# Called with the id of a section that was just removed
SectionListener = Callable[[str], None]


class AppState:
    """Tasks, notes, sections, rich-note cache and theme for one user."""

    def __init__(self) -> None:
        self.tasks: List[TaskOut] = []
        self.notes: str = ""
        self.sections: List[SectionOut] = [s.model_copy() for s in BUILTIN_SECTIONS]
        self.rich_note_sections: List[str] = []
        self.rich_notes_cache: Dict[str, str] = {}
        self.theme: str = "light"
        self.is_loading: bool = True
        self.load_error: Optional[str] = None
        self._section_listeners: List[SectionListener] = []

    @property
    def dark_mode(self) -> bool:
        """Document-level style flag mirrored from the theme."""
        return self.theme == "dark"

    # Loading

    def load(self, store) -> bool:
        """Fetch everything for the session; all-or-nothing."""
        self.is_loading = True
        results = {
            "tasks": store.list_tasks(),
            "notes": store.get_notes(),
            "sections": store.list_sections(),
            "preferences": store.get_user_preferences(),
            "rich_note_sections": store.list_rich_notes_sections(),
        }
        failed = [name for name, result in results.items() if result.failed]
        if failed:
            self._reset()
            self.load_error = f"Failed to load {', '.join(failed)}"
            self.is_loading = False
            logger.error(f"Failed to load app data: {results[failed[0]].error}")
            return False

        self.tasks = list(results["tasks"].value)
        self.notes = results["notes"].value or ""
        self.sections = [s.model_copy() for s in BUILTIN_SECTIONS] + list(results["sections"].value)
        self.rich_note_sections = list(results["rich_note_sections"].value)
        self.apply_theme(results["preferences"].value.theme)
        self.load_error = None
        self.is_loading = False
        dangling = self.dangling_sections()
        if dangling:
            # Left behind by an earlier delete that did not finish
            logger.warning(f"Loaded tasks reference unknown sections: {dangling}")
        logger.info(f"Loaded {len(self.tasks)} tasks and {len(self.sections)} sections")
        return True

    def _reset(self) -> None:
        self.tasks = []
        self.notes = ""
        self.sections = [s.model_copy() for s in BUILTIN_SECTIONS]
        self.rich_note_sections = []
        self.rich_notes_cache = {}
        self.apply_theme("light")

    async def warm_rich_notes(self, store_factory: StoreFactory, delay: float = 0.1) -> None:
        """Fill the rich-note cache for every section in the background."""
        await asyncio.sleep(delay)
        for section in list(self.sections):
            if section.id in self.rich_notes_cache:
                continue
            with store_factory() as store:
                result = store.get_rich_notes(section.id)
            if result.failed:
                logger.error(f"Failed to load rich notes for section {section.id}: {result.error}")
                continue
            if self.find_section(section.id) is None:
                continue
            # An edit may have landed while we were fetching
            self.rich_notes_cache.setdefault(section.id, result.value or "")

    # Tasks

    def find_task(self, task_id: int) -> Optional[TaskOut]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def add_task(self, task: TaskOut) -> None:
        self.tasks.append(task)

    def replace_task(self, task_id: int, **fields) -> Optional[TaskOut]:
        """Patch only the given fields of one task, matched by id."""
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[index] = task.model_copy(update=fields)
                return self.tasks[index]
        return None

    def remove_task(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def remove_tasks(self, task_ids: Iterable[int]) -> None:
        ids = set(task_ids)
        self.tasks = [t for t in self.tasks if t.id not in ids]

    def move_tasks_to_section(self, task_ids: Iterable[int], section: str) -> None:
        ids = set(task_ids)
        self.tasks = [
            t.model_copy(update={"section": section}) if t.id in ids else t
            for t in self.tasks
        ]

    def tasks_in_section(self, section_id: str) -> List[TaskOut]:
        return [t for t in self.tasks if t.section == section_id]

    # Sections

    def find_section(self, section_id: str) -> Optional[SectionOut]:
        return next((s for s in self.sections if s.id == section_id), None)

    def add_section(self, section: SectionOut) -> None:
        self.sections.append(section)

    def on_section_removed(self, listener: SectionListener) -> None:
        """Register a callback run after a section leaves the cache."""
        self._section_listeners.append(listener)

    def remove_section(self, section_id: str) -> None:
        self.sections = [s for s in self.sections if s.id != section_id]
        self.drop_rich_note_section(section_id)
        for listener in list(self._section_listeners):
            listener(section_id)

    def dangling_sections(self) -> List[str]:
        """Section ids referenced by tasks but missing from the section list."""
        known = {s.id for s in self.sections} | {DEFAULT_SECTION}
        return sorted({t.section for t in self.tasks} - known)

    def assert_sections_resolvable(self) -> None:
        dangling = self.dangling_sections()
        if dangling:
            raise ConsistencyError(
                f"Tasks reference unknown sections: {dangling}",
                details={"sections": dangling}
            )

    # Notes

    def set_notes(self, body: str) -> None:
        self.notes = body

    def cache_rich_note(self, section_id: str, content: str) -> None:
        self.rich_notes_cache[section_id] = content

    def mark_rich_note_section(self, section_id: str) -> None:
        if section_id not in self.rich_note_sections:
            self.rich_note_sections.append(section_id)

    def drop_rich_note_section(self, section_id: str) -> None:
        self.rich_note_sections = [s for s in self.rich_note_sections if s != section_id]
        self.rich_notes_cache.pop(section_id, None)

    # Theme

    def apply_theme(self, theme: str) -> None:
        self.theme = theme if theme in ("light", "dark") else "light"

    def snapshot(self) -> AppDataOut:
        return AppDataOut(
            tasks=list(self.tasks),
            notes=self.notes,
            sections=list(self.sections),
            rich_note_sections=list(self.rich_note_sections),
            theme=self.theme,
            dark_mode=self.dark_mode,
            is_loading=self.is_loading,
            load_error=self.load_error,
            cached_rich_notes=sorted(self.rich_notes_cache),
        )
