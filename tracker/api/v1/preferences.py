from fastapi import APIRouter, Depends

from tracker.api.v1.deps import get_workspace
from tracker.schemas import AppDataOut, PreferencesOut, PreferencesUpdate
from tracker.workspace import Workspace


router = APIRouter()


@router.get("/app-data", response_model=AppDataOut)
async def get_app_data(workspace: Workspace = Depends(get_workspace)):
    """Everything loaded for the session, as the front-end sees it at startup."""
    return workspace.state.snapshot()


@router.get("/preferences", response_model=PreferencesOut)
async def get_preferences(workspace: Workspace = Depends(get_workspace)):
    return PreferencesOut(theme=workspace.state.theme)


@router.put("/preferences", response_model=PreferencesOut)
async def update_preferences(payload: PreferencesUpdate, workspace: Workspace = Depends(get_workspace)):
    return PreferencesOut(theme=workspace.board.set_theme(payload.theme))
