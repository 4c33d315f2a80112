import pytest


@pytest.fixture
def sample_tasks():
    """Task texts spread over a few sections."""
    return [
        ("Write report", "work"),
        ("Buy milk", "personal"),
        ("Fix prod bug", "urgent"),
    ]


@pytest.fixture
def sample_rich_note():
    """Formatted note body as the editor produces it."""
    return "<h1>Plan</h1><p>Ship the <strong>beta</strong></p>"
