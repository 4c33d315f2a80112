from __future__ import annotations

import os
from fastapi import FastAPI
from fastapi import Request
from sqlalchemy.orm import sessionmaker

from tracker.db import Base, build_engine
from tracker.workspace import WorkspaceRegistry

TEST_DATABASE_URL = "sqlite:///./test.db"


def is_test_mode() -> bool:
    return os.getenv("TRACKER_TEST_MODE") == "1"


def configure_test_overrides(app: FastAPI) -> None:
    """Isolated SQLite store and header-based auth for the API tests."""
    from tracker.api.v1.auth import get_current_user_dep

    test_engine = build_engine(TEST_DATABASE_URL)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)

    app.state.workspaces = WorkspaceRegistry(TestingSessionLocal, warmup_delay=0)
    app.state.test_session_factory = TestingSessionLocal

    def override_current_user_dep(request: Request):
        user_id = request.headers.get("x-test-user-id") or "user_test"
        return {"user_id": user_id, "email": f"{user_id}@example.com"}

    app.dependency_overrides[get_current_user_dep] = override_current_user_dep
