"""
FILE: taskboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot project / task / to-do commands
EXPORTS:
  - app (Typer application)
  - project_app, task_app, todo_app (sub-command groups)
  - console, error_console (Rich consoles)
  - get_context() -> AppContext
  - print_plain(text) - print JSON/raw output without Rich markup or wrapping
  - fail(message, prefix) - print an error to stderr and exit 1
  - main() (entry point)
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - taskboard.config, taskboard.context, taskboard.logging_setup
NOTES:
  - All listing/creation commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - The store is opened per invocation from TASKBOARD_* settings
"""

import sys

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console
from rich.markup import escape

from ..config import load_settings
from ..context import AppContext
from ..logging_setup import setup_logging

# Typer app setup
app = typer.Typer(
    name="taskboard",
    help="Projects, tasks and to-dos with derived task status",
    add_completion=False,
    no_args_is_help=True,
)

# Sub-command groups
project_app = typer.Typer(name="project", help="Project management commands", no_args_is_help=True)
task_app = typer.Typer(name="task", help="Task management commands", no_args_is_help=True)
todo_app = typer.Typer(name="todo", help="To-do entry commands", no_args_is_help=True)
app.add_typer(project_app, name="project")
app.add_typer(task_app, name="task")
app.add_typer(todo_app, name="todo")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"


@app.callback()
def configure():
    """
    Projects, tasks and to-dos with derived task status.

    Reads TASKBOARD_DB_PATH, TASKBOARD_MAX_WORKERS, TASKBOARD_LOG_LEVEL
    and TASKBOARD_LOG_FILE from the environment.
    """
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)


def get_context() -> AppContext:
    """Open the store configured by the environment."""
    return AppContext.from_settings(load_settings())


def print_plain(text: str) -> None:
    """Print machine-readable output verbatim."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def fail(message: str, prefix: str = "Error") -> None:
    error_console.print(f"[red]{prefix}:[/red] {escape(message)}")
    raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @<group>.command() in their modules
from .commands import (  # noqa: E402
    # System commands
    version,
    board,
    # Project commands
    project_add,
    project_ls,
    project_edit,
    project_share,
    project_unshare,
    project_rm,
    # Task commands
    task_add,
    task_ls,
    task_show,
    task_rm,
    # To-do commands
    todo_add,
    todo_ls,
    todo_edit,
    todo_done,
    todo_undo,
    todo_rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
