"""Per-user workspaces: the loaded state plus the controllers that drive it."""
from __future__ import annotations

import asyncio
import contextlib
from functools import partial
from typing import Dict, Optional

from tracker.controllers import QuickNotesController, RichNotesController, TaskBoardController
from tracker.core.config import settings
from tracker.core.logging import get_logger
from tracker.services.data_access import open_store
from tracker.state import AppState

logger = get_logger(__name__)


class Workspace:
    """Everything one signed-in user is working with."""

    def __init__(self, user_id: str, session_factory=None):
        self.user_id = user_id
        self.store_factory = partial(open_store, user_id, session_factory)
        self.state = AppState()
        self.board = TaskBoardController(self.state, self.store_factory, page_size=settings.completed_page_size)
        self.rich_notes = RichNotesController(
            self.state, self.store_factory, autosave_delay=settings.autosave_delay_seconds
        )
        self.quick_notes = QuickNotesController(
            self.state, self.store_factory, autosave_delay=settings.autosave_delay_seconds
        )
        self._warmup: Optional[asyncio.Task] = None

    def load(self) -> bool:
        with self.store_factory() as store:
            loaded = self.state.load(store)
        self.rich_notes.open()
        return loaded

    def start_warmup(self, delay: float) -> None:
        """Schedule the background rich-note fetch; needs a running loop."""
        self._warmup = asyncio.get_running_loop().create_task(
            self.state.warm_rich_notes(self.store_factory, delay),
            name=f"warm-rich-notes-{self.user_id}"
        )

    async def close(self) -> None:
        self.rich_notes.close()
        self.quick_notes.close()
        if self._warmup is not None and not self._warmup.done():
            self._warmup.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._warmup


class WorkspaceRegistry:
    """Loads a workspace the first time a user shows up and keeps it."""

    def __init__(self, session_factory=None, warmup_delay: Optional[float] = None):
        self.session_factory = session_factory
        self.warmup_delay = settings.warmup_delay_seconds if warmup_delay is None else warmup_delay
        self._workspaces: Dict[str, Workspace] = {}

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._workspaces

    async def get(self, user_id: str) -> Workspace:
        workspace = self._workspaces.get(user_id)
        if workspace is None:
            logger.info(f"Loading workspace for user {user_id}")
            workspace = Workspace(user_id, self.session_factory)
            if workspace.load():
                self._workspaces[user_id] = workspace
                workspace.start_warmup(self.warmup_delay)
            else:
                # Not kept: the next request loads from scratch
                logger.warning(f"Workspace load failed for user {user_id}: {workspace.state.load_error}")
                await workspace.close()
        return workspace

    async def close(self) -> None:
        for workspace in list(self._workspaces.values()):
            await workspace.close()
        self._workspaces.clear()
