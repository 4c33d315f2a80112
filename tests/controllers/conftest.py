from datetime import datetime, timedelta

import pytest

from tracker.schemas import TaskOut
from tracker.state import AppState


@pytest.fixture
def state(store):
    """Application state loaded from the (empty) test store."""
    app_state = AppState()
    assert app_state.load(store)
    return app_state


@pytest.fixture
def make_task():
    """Build task records with strictly increasing creation times."""
    base = datetime(2026, 10, 19, 8, 0)
    counter = {"n": 0}

    def _make(text="Task", completed=False, section="personal", task_id=None):
        counter["n"] += 1
        n = counter["n"]
        return TaskOut(
            id=task_id or n,
            text=text,
            completed=completed,
            created_at=base + timedelta(minutes=n),
            created_time="08:00 AM",
            section=section
        )
    return _make
