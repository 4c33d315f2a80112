"""Pure derivations for the task board, recomputed on every call."""
import math
from typing import List, Sequence, Tuple

from tracker.schemas import BoardView, CompletedPage, SectionOut, SectionStats, TaskOut
from tracker.sections import ALL_SECTIONS

COMPLETED_PAGE_SIZE = 5


def filter_by_section(tasks: Sequence[TaskOut], section_id: str) -> List[TaskOut]:
    if section_id == ALL_SECTIONS:
        return list(tasks)
    return [t for t in tasks if t.section == section_id]


def partition_tasks(tasks: Sequence[TaskOut]) -> Tuple[List[TaskOut], List[TaskOut]]:
    """Split into (active, completed), each newest first."""
    newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    active = [t for t in newest_first if not t.completed]
    completed = [t for t in newest_first if t.completed]
    return active, completed


def section_stats(sections: Sequence[SectionOut], tasks: Sequence[TaskOut]) -> List[SectionStats]:
    stats = []
    for section in sections:
        in_section = [t for t in tasks if t.section == section.id]
        done = sum(1 for t in in_section if t.completed)
        stats.append(SectionStats(
            **section.model_dump(),
            total=len(in_section),
            completed=done,
            active=len(in_section) - done
        ))
    return stats


def paginate(items: Sequence[TaskOut], page: int, page_size: int = COMPLETED_PAGE_SIZE) -> CompletedPage:
    """1-based page slice; pages past the end are empty."""
    total_pages = math.ceil(len(items) / page_size) if page_size > 0 else 0
    start = (page - 1) * page_size
    return CompletedPage(
        items=list(items[start:start + page_size]) if page >= 1 else [],
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=len(items)
    )


def build_board(
    tasks: Sequence[TaskOut],
    sections: Sequence[SectionOut],
    section_id: str = ALL_SECTIONS,
    page: int = 1,
    page_size: int = COMPLETED_PAGE_SIZE,
) -> BoardView:
    active, completed = partition_tasks(filter_by_section(tasks, section_id))
    return BoardView(
        section=section_id,
        active=active,
        completed=paginate(completed, page, page_size),
        stats=section_stats(sections, tasks),
        completed_count=sum(1 for t in tasks if t.completed),
        total_count=len(tasks)
    )
