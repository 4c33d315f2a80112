from tracker.autosave import AutosaveDocument
from tracker.schemas import NotesOut
from tracker.state import AppState, StoreFactory


class QuickNotesController:
    """The plain-text sidebar note, autosaved on its own timer."""

    def __init__(self, state: AppState, store_factory: StoreFactory, autosave_delay: float = 1.0):
        self.state = state
        self.store_factory = store_factory
        self.document = AutosaveDocument("quick-notes", self._persist, delay=autosave_delay)

    def _persist(self, body: str) -> None:
        with self.store_factory() as store:
            store.set_notes(body)

    def handle_change(self, body: str) -> None:
        self.state.set_notes(body)
        self.document.touch(body)

    async def save(self) -> bool:
        return await self.document.flush(self.state.notes)

    def view(self) -> NotesOut:
        return NotesOut(
            body=self.state.notes,
            state=self.document.state,
            last_saved=self.document.last_saved
        )

    def close(self) -> None:
        self.document.cancel()

    async def wait_for_saves(self) -> None:
        await self.document.wait()
