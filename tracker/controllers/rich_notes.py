from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from tracker.autosave import AutosaveDocument
from tracker.core.logging import get_logger
from tracker.exceptions import ValidationError
from tracker.schemas import RichNotesOut, ReassignResult, SectionOut
from tracker.sections import DEFAULT_SECTION, is_builtin
from tracker.state import AppState, StoreFactory
from .sections import create_section, remove_section

# Called with (section_id, content) after content is loaded into the editor
EditorHook = Callable[[str, str], None]


class RichNotesController:
    """Per-section rich text editor with a shared content cache and autosave.

    Each section gets its own autosave document, so a save scheduled for one
    section still lands on that section after the user switches away.
    """

    def __init__(
        self,
        state: AppState,
        store_factory: StoreFactory,
        autosave_delay: float = 1.0,
        on_load: Optional[EditorHook] = None,
    ):
        self.state = state
        self.store_factory = store_factory
        self.autosave_delay = autosave_delay
        self.on_load = on_load
        self.current_section = DEFAULT_SECTION
        self.content = ""
        self.last_saved: Optional[datetime] = None
        self._loading = False
        self._documents: Dict[str, AutosaveDocument] = {}
        self.logger = get_logger(self.__class__.__name__)
        state.on_section_removed(self._section_removed)

    @property
    def is_loading_content(self) -> bool:
        return self._loading

    @property
    def is_saving(self) -> bool:
        return any(doc.is_saving for doc in self._documents.values())

    def open(self) -> str:
        """Load the current section into the editor."""
        return self._load(self.current_section)

    def switch_section(self, section_id: str) -> bool:
        """Show another section's document; returns False for the current one."""
        if section_id == self.current_section:
            return False
        if self.state.find_section(section_id) is None:
            raise ValidationError(f"Unknown section '{section_id}'", details={"section": section_id})
        self.current_section = section_id
        self._load(section_id)
        return True

    def _load(self, section_id: str) -> str:
        # Change events fired while this flag is set come from the load, not the user
        self._loading = True
        try:
            content = self.state.rich_notes_cache.get(section_id)
            if content is None:
                with self.store_factory() as store:
                    result = store.get_rich_notes(section_id)
                if result.failed:
                    self.logger.error(f"Error loading rich notes for {section_id}: {result.error}")
                    content = ""
                else:
                    content = result.value or ""
                    self.state.cache_rich_note(section_id, content)
            self.content = content
            if self.on_load is not None:
                self.on_load(section_id, content)
            return content
        finally:
            self._loading = False

    def handle_change(self, content: str) -> bool:
        """Editor change event. Returns True when a save was scheduled."""
        self.content = content
        if self._loading:
            return False
        self.state.cache_rich_note(self.current_section, content)
        self._document(self.current_section).touch(content)
        return True

    async def save(self) -> bool:
        """Manual save of the current section, bypassing the debounce."""
        return await self._document(self.current_section).flush(self.content)

    def _document(self, section_id: str) -> AutosaveDocument:
        doc = self._documents.get(section_id)
        if doc is None:
            doc = AutosaveDocument(
                f"rich-notes:{section_id}",
                lambda content: self._persist(section_id, content),
                delay=self.autosave_delay
            )
            self._documents[section_id] = doc
        return doc

    def _persist(self, section_id: str, content: str) -> None:
        if self.state.find_section(section_id) is None:
            self.logger.info(f"Section {section_id} was deleted, dropping its pending save")
            return
        with self.store_factory() as store:
            store.set_rich_notes(section_id, content)
        self.last_saved = datetime.now(timezone.utc)
        if content:
            self.state.mark_rich_note_section(section_id)

    # Sections

    def add_section(self, name: str) -> Optional[SectionOut]:
        section = create_section(self.state, self.store_factory, name)
        if section is not None:
            self.switch_section(section.id)
        return section

    def delete_section(self, section_id: str) -> Optional[ReassignResult]:
        if is_builtin(section_id):
            return None
        return remove_section(self.state, self.store_factory, section_id)

    def _section_removed(self, section_id: str) -> None:
        doc = self._documents.pop(section_id, None)
        if doc is not None:
            doc.cancel()
        if self.current_section == section_id:
            self.switch_section(DEFAULT_SECTION)

    def view(self) -> RichNotesOut:
        doc = self._documents.get(self.current_section)
        return RichNotesOut(
            current_section=self.current_section,
            content=self.content,
            sections_with_content=list(self.state.rich_note_sections),
            state=doc.state if doc is not None else "clean",
            is_saving=self.is_saving,
            last_saved=self.last_saved
        )

    def close(self) -> None:
        """Tear down: pending saves are dropped."""
        for doc in self._documents.values():
            doc.cancel()

    async def wait_for_saves(self) -> None:
        """Wait for scheduled and in-flight saves of every section."""
        for doc in list(self._documents.values()):
            await doc.wait()
