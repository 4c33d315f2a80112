from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from tracker.api.v1.deps import get_workspace
from tracker.exceptions import ValidationError
from tracker.schemas import BoardView, SelectSection, TaskCreate, TaskEdit, TaskOut, TaskSectionUpdate
from tracker.workspace import Workspace


router = APIRouter()


@router.get("/board", response_model=BoardView)
async def get_board(
    section: str = Query(None, description="Section filter; 'all' for every section"),
    page: int = Query(None, ge=1, description="Completed tasks page (1-based)"),
    workspace: Workspace = Depends(get_workspace)
):
    """Active tasks, a page of completed tasks and per-section counts."""
    if section is not None and section != workspace.board.current_section:
        workspace.board.select_section(section)
    return workspace.board.view(page)


@router.post("/board/section", response_model=BoardView)
async def select_board_section(payload: SelectSection, workspace: Workspace = Depends(get_workspace)):
    """Change the section filter; resets the completed page."""
    workspace.board.select_section(payload.section)
    return workspace.board.view()


@router.post("/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate, workspace: Workspace = Depends(get_workspace)):
    """Add a task to the given section, or the selected one."""
    task = workspace.board.add_task(payload.text, payload.section or None)
    if task is None:
        raise ValidationError("Task text cannot be empty")
    return task


@router.post("/tasks/{task_id}/toggle", response_model=TaskOut)
async def toggle_task(task_id: int, workspace: Workspace = Depends(get_workspace)):
    workspace.board.toggle_task(task_id)
    return workspace.state.find_task(task_id)


@router.patch("/tasks/{task_id}", response_model=TaskOut)
async def edit_task(task_id: int, payload: TaskEdit, workspace: Workspace = Depends(get_workspace)):
    """Replace a task's text; blank text leaves it unchanged."""
    return workspace.board.edit_task(task_id, payload.text)


@router.patch("/tasks/{task_id}/section", response_model=TaskOut)
async def move_task(task_id: int, payload: TaskSectionUpdate, workspace: Workspace = Depends(get_workspace)):
    return workspace.board.move_task(task_id, payload.section)


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: int, workspace: Workspace = Depends(get_workspace)):
    workspace.board.delete_task(task_id)
    return Response(status_code=204)
