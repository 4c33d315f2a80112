from .base import BaseRepository
from .task import TaskRepository
from .section import SectionRepository
from .note import NoteRepository, RichNoteRepository
from .preference import PreferenceRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
    "SectionRepository",
    "NoteRepository",
    "RichNoteRepository",
    "PreferenceRepository"
]
