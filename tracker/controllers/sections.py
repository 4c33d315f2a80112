"""Section lifecycle shared by the task board and the rich notes editor."""
from typing import Optional

from tracker.core.logging import get_logger
from tracker.exceptions import NotFoundError
from tracker.schemas import ReassignResult, SectionOut
from tracker.sections import DEFAULT_SECTION, is_builtin, pick_style
from tracker.state import AppState, StoreFactory

logger = get_logger(__name__)


def create_section(state: AppState, store_factory: StoreFactory, name: str) -> Optional[SectionOut]:
    """Create a user section styled by position; blank names are ignored."""
    if not name or not name.strip():
        return None
    color, icon = pick_style(len(state.sections))
    try:
        with store_factory() as store:
            section = store.add_section(name.strip(), color, icon, len(state.sections))
    except Exception as e:
        logger.error(f"Failed to add section {name!r}: {e}")
        raise
    state.add_section(section)
    return section


def remove_section(state: AppState, store_factory: StoreFactory, section_id: str) -> Optional[ReassignResult]:
    """Delete a user section, its rich note, and move its tasks to the default section.

    Built-in sections are left alone (returns None). Tasks move first in one
    batched write, so a failure there leaves the section and its tasks as
    they were. Ids the store did not match no longer exist and are dropped
    from the cache. Listeners on the state reset any view showing the section.
    """
    if is_builtin(section_id):
        logger.info(f"Refusing to delete built-in section {section_id}")
        return None
    if state.find_section(section_id) is None:
        raise NotFoundError("Section", section_id)

    task_ids = [t.id for t in state.tasks_in_section(section_id)]
    try:
        with store_factory() as store:
            result = store.reassign_tasks_section(task_ids, DEFAULT_SECTION)
            state.move_tasks_to_section(result.updated, DEFAULT_SECTION)
            if result.failed:
                logger.warning(f"Tasks {result.failed} were not found in the store, dropping them")
                state.remove_tasks(result.failed)
            store.delete_rich_notes_section(section_id)
            store.delete_section(section_id)
    except Exception as e:
        logger.error(f"Failed to delete section {section_id}: {e}")
        raise

    state.remove_section(section_id)
    return result
