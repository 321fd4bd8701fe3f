"""
FILE: taskboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .system import (
    version,
    board,
)
from .projects import (
    project_add,
    project_ls,
    project_edit,
    project_share,
    project_unshare,
    project_rm,
)
from .tasks import (
    task_add,
    task_ls,
    task_show,
    task_rm,
)
from .todos import (
    todo_add,
    todo_ls,
    todo_edit,
    todo_done,
    todo_undo,
    todo_rm,
)

__all__ = [
    "version",
    "board",
    "project_add",
    "project_ls",
    "project_edit",
    "project_share",
    "project_unshare",
    "project_rm",
    "task_add",
    "task_ls",
    "task_show",
    "task_rm",
    "todo_add",
    "todo_ls",
    "todo_edit",
    "todo_done",
    "todo_undo",
    "todo_rm",
]
