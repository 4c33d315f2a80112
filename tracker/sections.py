"""Built-in sections, the "all" pseudo-section and section key derivation."""
import re
from typing import List, Tuple

from tracker.schemas import SectionOut

DEFAULT_SECTION = "personal"
ALL_SECTIONS = "all"

BUILTIN_SECTIONS: List[SectionOut] = [
    SectionOut(id="work", name="Work", color="blue", icon="💼", builtin=True),
    SectionOut(id="personal", name="Personal", color="green", icon="🏠", builtin=True),
    SectionOut(id="urgent", name="Urgent", color="red", icon="🚨", builtin=True),
    SectionOut(id="ideas", name="Ideas", color="purple", icon="💡", builtin=True),
]
BUILTIN_SECTION_IDS = frozenset(section.id for section in BUILTIN_SECTIONS)

SECTION_COLORS = ["blue", "green", "red", "purple", "yellow", "pink", "indigo", "orange"]
SECTION_ICONS = ["📁", "🎯", "⭐", "🔥", "📋", "🎨", "🔧", "📊"]

_WHITESPACE = re.compile(r"\s+")


def is_builtin(section_id: str) -> bool:
    return section_id in BUILTIN_SECTION_IDS


def section_key(name: str) -> str:
    """Derive a section id from its display name: "Deep Work" -> "deep-work"."""
    return _WHITESPACE.sub("-", name.strip().lower())


def pick_style(existing_count: int) -> Tuple[str, str]:
    """Color and icon for a new section, rotating by how many sections exist."""
    return (
        SECTION_COLORS[existing_count % len(SECTION_COLORS)],
        SECTION_ICONS[existing_count % len(SECTION_ICONS)],
    )
