from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal
from datetime import datetime

Theme = Literal["light", "dark"]
SaveState = Literal["clean", "dirty", "saving"]


class TaskCreate(BaseModel):
    text: str
    section: Optional[str] = None


class TaskEdit(BaseModel):
    text: str


class TaskSectionUpdate(BaseModel):
    section: str


class TaskOut(BaseModel):
    id: int
    text: str
    completed: bool = False
    created_at: datetime
    created_time: str  # localized hh:mm AM/PM
    section: str = "personal"

    model_config = ConfigDict(from_attributes=True)


class SectionCreate(BaseModel):
    name: str


class SectionOut(BaseModel):
    id: str
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    sort_order: Optional[int] = None
    builtin: bool = False

    model_config = ConfigDict(from_attributes=True)


class SectionStats(SectionOut):
    total: int = 0
    completed: int = 0
    active: int = 0


class SelectSection(BaseModel):
    section: str


class ReassignResult(BaseModel):
    """Outcome of moving a batch of tasks to another section."""
    section: str
    updated: List[int] = []
    failed: List[int] = []

    @property
    def ok(self) -> bool:
        return not self.failed


class CompletedPage(BaseModel):
    items: List[TaskOut] = []
    page: int = 1
    page_size: int = 5
    total_pages: int = 0
    total_items: int = 0


class BoardView(BaseModel):
    section: str
    active: List[TaskOut] = []
    completed: CompletedPage
    stats: List[SectionStats] = []
    completed_count: int = 0
    total_count: int = 0


class NotesUpdate(BaseModel):
    body: str


class NotesOut(BaseModel):
    body: str
    state: SaveState = "clean"
    last_saved: Optional[datetime] = None


class RichNoteContent(BaseModel):
    content: str


class RichNotesOut(BaseModel):
    current_section: str
    content: str
    sections_with_content: List[str] = []
    state: SaveState = "clean"
    is_saving: bool = False
    last_saved: Optional[datetime] = None


class PreferencesOut(BaseModel):
    theme: Theme = "light"


class PreferencesUpdate(BaseModel):
    theme: Theme


class AppDataOut(BaseModel):
    tasks: List[TaskOut] = []
    notes: str = ""
    sections: List[SectionOut] = []
    rich_note_sections: List[str] = []
    theme: Theme = "light"
    dark_mode: bool = False
    is_loading: bool = False
    load_error: Optional[str] = None
    cached_rich_notes: List[str] = Field(default_factory=list)
