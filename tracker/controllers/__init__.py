from .task_board import TaskBoardController
from .rich_notes import RichNotesController
from .quick_notes import QuickNotesController

__all__ = [
    "TaskBoardController",
    "RichNotesController",
    "QuickNotesController"
]
