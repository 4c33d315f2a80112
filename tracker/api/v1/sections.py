from typing import List
from fastapi import APIRouter, Depends, status

from tracker.api.v1.deps import get_workspace
from tracker.exceptions import ValidationError
from tracker.schemas import ReassignResult, SectionCreate, SectionOut
from tracker.sections import is_builtin
from tracker.workspace import Workspace


router = APIRouter()


@router.get("", response_model=List[SectionOut])
async def list_sections(workspace: Workspace = Depends(get_workspace)):
    """Built-in sections followed by the user's own."""
    return workspace.state.sections


@router.post("", response_model=SectionOut, status_code=status.HTTP_201_CREATED)
async def create_section(payload: SectionCreate, workspace: Workspace = Depends(get_workspace)):
    section = workspace.board.add_section(payload.name)
    if section is None:
        raise ValidationError("Section name cannot be empty")
    return section


@router.delete("/{section_id}", response_model=ReassignResult)
async def delete_section(section_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a user section; its tasks move to 'personal'."""
    if is_builtin(section_id):
        raise ValidationError("Built-in sections cannot be deleted", details={"section": section_id})
    return workspace.board.delete_section(section_id)
