import asyncio
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.db import Base
from tracker.results import Fetched
from tracker.services.data_access import DataAccessService, open_store
from tracker.workspace import WorkspaceRegistry


@pytest.fixture
def session_factory():
    """Sessions sharing one in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


class TestWorkspaceRegistry:
    """First-use loading of per-user workspaces."""

    def test_workspace_is_loaded_once(self, session_factory):
        with open_store("user-1", session_factory) as store:
            store.add_task("Stored")
        registry = WorkspaceRegistry(session_factory, warmup_delay=0)

        async def scenario():
            first = await registry.get("user-1")
            second = await registry.get("user-1")
            await registry.close()
            return first, second

        first, second = asyncio.run(scenario())

        assert first is second
        assert [t.text for t in first.state.tasks] == ["Stored"]

    def test_failed_load_is_retried_on_next_request(self, session_factory):
        with open_store("user-1", session_factory) as store:
            store.add_task("Stored")
        registry = WorkspaceRegistry(session_factory, warmup_delay=0)
        failing = Fetched.failure([], RuntimeError("connection reset"))

        async def scenario():
            with patch.object(DataAccessService, "list_tasks", return_value=failing):
                failed = await registry.get("user-1")
            assert "user-1" not in registry
            loaded = await registry.get("user-1")
            await registry.close()
            return failed, loaded

        failed, loaded = asyncio.run(scenario())

        assert failed.state.load_error == "Failed to load tasks"
        assert failed.state.tasks == []
        assert loaded is not failed
        assert loaded.state.load_error is None
        assert [t.text for t in loaded.state.tasks] == ["Stored"]
