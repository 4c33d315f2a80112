import asyncio

import pytest

from tracker.controllers import QuickNotesController


class TestQuickNotesController:
    """Plain sidebar note."""

    @pytest.fixture
    def notes(self, state, store_factory):
        return QuickNotesController(state, store_factory, autosave_delay=0.01)

    def test_change_is_saved_after_pause(self, notes, store):
        async def typing():
            notes.handle_change("buy")
            notes.handle_change("buy milk")
            assert notes.view().state == "dirty"
            await notes.wait_for_saves()

        asyncio.run(typing())

        assert store.get_notes().value == "buy milk"
        assert notes.view().state == "clean"
        assert notes.view().last_saved is not None

    def test_state_updates_before_save(self, notes, store):
        async def typing():
            notes.handle_change("draft")
            assert notes.state.notes == "draft"
            assert store.get_notes().value == ""
            notes.close()

        asyncio.run(typing())

    def test_manual_save(self, notes, store):
        notes.document.delay = 60

        async def typing_then_save():
            notes.handle_change("saved now")
            return await notes.save()

        assert asyncio.run(typing_then_save()) is True
        assert store.get_notes().value == "saved now"
