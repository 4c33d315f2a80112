from fastapi import APIRouter, Depends, status

from tracker.api.v1.deps import get_workspace
from tracker.exceptions import ValidationError
from tracker.schemas import NotesOut, NotesUpdate, RichNoteContent, RichNotesOut, SectionCreate, SectionOut, SelectSection, ReassignResult
from tracker.sections import is_builtin
from tracker.workspace import Workspace


router = APIRouter()


# Quick notes

@router.get("/notes", response_model=NotesOut)
async def get_notes(workspace: Workspace = Depends(get_workspace)):
    return workspace.quick_notes.view()


@router.put("/notes", response_model=NotesOut)
async def change_notes(payload: NotesUpdate, workspace: Workspace = Depends(get_workspace)):
    """Record an edit; the write happens after a pause in typing."""
    workspace.quick_notes.handle_change(payload.body)
    return workspace.quick_notes.view()


@router.post("/notes/save", response_model=NotesOut)
async def save_notes(workspace: Workspace = Depends(get_workspace)):
    await workspace.quick_notes.save()
    return workspace.quick_notes.view()


# Rich notes

@router.get("/rich-notes", response_model=RichNotesOut)
async def get_rich_notes(workspace: Workspace = Depends(get_workspace)):
    return workspace.rich_notes.view()


@router.post("/rich-notes/switch", response_model=RichNotesOut)
async def switch_rich_notes_section(payload: SelectSection, workspace: Workspace = Depends(get_workspace)):
    workspace.rich_notes.switch_section(payload.section)
    return workspace.rich_notes.view()


@router.put("/rich-notes/content", response_model=RichNotesOut)
async def change_rich_notes(payload: RichNoteContent, workspace: Workspace = Depends(get_workspace)):
    """Record an edit of the current section; saved after a pause in typing."""
    workspace.rich_notes.handle_change(payload.content)
    return workspace.rich_notes.view()


@router.post("/rich-notes/save", response_model=RichNotesOut)
async def save_rich_notes(workspace: Workspace = Depends(get_workspace)):
    await workspace.rich_notes.save()
    return workspace.rich_notes.view()


@router.post("/rich-notes/sections", response_model=SectionOut, status_code=status.HTTP_201_CREATED)
async def create_rich_notes_section(payload: SectionCreate, workspace: Workspace = Depends(get_workspace)):
    """Create a section and open it in the editor."""
    section = workspace.rich_notes.add_section(payload.name)
    if section is None:
        raise ValidationError("Section name cannot be empty")
    return section


@router.delete("/rich-notes/sections/{section_id}", response_model=ReassignResult)
async def delete_rich_notes_section(section_id: str, workspace: Workspace = Depends(get_workspace)):
    if is_builtin(section_id):
        raise ValidationError("Built-in sections cannot be deleted", details={"section": section_id})
    return workspace.rich_notes.delete_section(section_id)
