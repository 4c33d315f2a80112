import asyncio
from unittest.mock import patch

import pytest

from tracker.exceptions import ConsistencyError
from tracker.results import Fetched
from tracker.schemas import SectionOut
from tracker.services.data_access import DataAccessService
from tracker.state import AppState


class TestAppStateLoad:
    """Session start-up load."""

    def test_fresh_state_shows_builtins(self):
        state = AppState()

        assert state.is_loading is True
        assert [s.id for s in state.sections] == ["work", "personal", "urgent", "ideas"]
        assert state.theme == "light"

    def test_load_merges_store_data(self, store):
        store.add_task("Stored", "work")
        store.set_notes("scratch")
        store.add_section("Errands", "yellow", "📁", 4)
        store.set_user_preferences("dark")
        store.set_rich_notes("work", "<p>w</p>")

        state = AppState()
        assert state.load(store) is True

        assert state.is_loading is False
        assert state.load_error is None
        assert [t.text for t in state.tasks] == ["Stored"]
        assert state.notes == "scratch"
        assert [s.id for s in state.sections][-1] == "errands"
        assert len(state.sections) == 5
        assert state.theme == "dark" and state.dark_mode
        assert state.rich_note_sections == ["work"]

    def test_partial_failure_leaves_empty_state(self, store):
        store.add_task("Stored")
        store.set_notes("scratch")

        state = AppState()
        failing = Fetched.failure("", RuntimeError("notes unavailable"))
        with patch.object(DataAccessService, "get_notes", return_value=failing):
            assert state.load(store) is False

        assert state.is_loading is False
        assert state.load_error == "Failed to load notes"
        assert state.tasks == []
        assert state.notes == ""
        assert len(state.sections) == 4
        assert state.theme == "light"

    def test_load_without_user_is_empty_not_failed(self, test_db):
        state = AppState()

        assert state.load(DataAccessService(test_db)) is True
        assert state.tasks == [] and state.load_error is None

    def test_builtins_are_copies(self, store):
        state = AppState()
        state.load(store)
        state.sections[0].name = "Changed"

        assert AppState().sections[0].name == "Work"


class TestAppStateMutations:
    """Named mutations keep every other record untouched."""

    def test_replace_task_patches_one_field(self, make_task):
        state = AppState()
        first, second = make_task("a"), make_task("b")
        state.tasks = [first, second]

        updated = state.replace_task(first.id, completed=True)

        assert updated.completed is True
        assert updated.text == "a"
        assert state.tasks[1] is second

    def test_replace_missing_task(self, make_task):
        state = AppState()
        state.tasks = [make_task()]
        assert state.replace_task(999, text="x") is None

    def test_move_tasks_to_section(self, make_task):
        state = AppState()
        state.tasks = [make_task(section="errands"), make_task(section="errands"), make_task(section="work")]

        state.move_tasks_to_section([state.tasks[0].id], "personal")

        assert [t.section for t in state.tasks] == ["personal", "errands", "work"]

    def test_drop_rich_note_section_clears_cache(self):
        state = AppState()
        state.cache_rich_note("errands", "list")
        state.mark_rich_note_section("errands")
        state.mark_rich_note_section("errands")

        assert state.rich_note_sections == ["errands"]
        state.drop_rich_note_section("errands")

        assert state.rich_note_sections == []
        assert "errands" not in state.rich_notes_cache

    def test_remove_section_notifies_listeners(self):
        state = AppState()
        state.add_section(SectionOut(id="errands", name="Errands"))
        state.cache_rich_note("errands", "list")
        state.mark_rich_note_section("errands")
        removed = []
        state.on_section_removed(removed.append)

        state.remove_section("errands")

        assert removed == ["errands"]
        assert state.find_section("errands") is None
        assert state.rich_note_sections == []
        assert "errands" not in state.rich_notes_cache

    def test_remove_tasks(self, make_task):
        state = AppState()
        state.tasks = [make_task(), make_task(), make_task()]
        kept = state.tasks[1].id

        state.remove_tasks([state.tasks[0].id, state.tasks[2].id, 999])

        assert [t.id for t in state.tasks] == [kept]

    def test_unknown_theme_falls_back_to_light(self):
        state = AppState()
        state.apply_theme("sepia")
        assert state.theme == "light"

    def test_sections_resolvable(self, make_task):
        state = AppState()
        state.tasks = [make_task(section="work")]
        state.assert_sections_resolvable()

        state.tasks.append(make_task(section="gone"))
        assert state.dangling_sections() == ["gone"]
        with pytest.raises(ConsistencyError) as exc_info:
            state.assert_sections_resolvable()
        assert exc_info.value.details == {"sections": ["gone"]}


class TestRichNoteWarmup:
    """Background fill of the rich-note cache."""

    def test_warmup_caches_every_section(self, state, store, store_factory):
        store.set_rich_notes("work", "<p>work</p>")

        asyncio.run(state.warm_rich_notes(store_factory, delay=0))

        assert state.rich_notes_cache["work"] == "<p>work</p>"
        assert state.rich_notes_cache["ideas"] == ""
        assert set(state.rich_notes_cache) == {s.id for s in state.sections}

    def test_warmup_keeps_newer_edits(self, state, store, store_factory):
        store.set_rich_notes("work", "stale")
        state.cache_rich_note("work", "typed while loading")

        asyncio.run(state.warm_rich_notes(store_factory, delay=0))

        assert state.rich_notes_cache["work"] == "typed while loading"

    def test_warmup_skips_failed_sections(self, state, store_factory):
        failing = Fetched.failure("", RuntimeError("timeout"))
        with patch.object(DataAccessService, "get_rich_notes", return_value=failing):
            asyncio.run(state.warm_rich_notes(store_factory, delay=0))

        assert state.rich_notes_cache == {}
