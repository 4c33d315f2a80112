from typing import Dict, Any
from fastapi import Depends, Request

from tracker.api.v1.auth import get_current_user_dep
from tracker.workspace import Workspace, WorkspaceRegistry


def get_registry(request: Request) -> WorkspaceRegistry:
    """The app-wide workspace registry created at startup."""
    return request.app.state.workspaces


async def get_workspace(
    current_user: Dict[str, Any] = Depends(get_current_user_dep),
    registry: WorkspaceRegistry = Depends(get_registry)
) -> Workspace:
    """Workspace of the authenticated user, loaded on first use."""
    return await registry.get(current_user["user_id"])
