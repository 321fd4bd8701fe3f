"""
FILE: taskboard/cli/commands/todos.py
PURPOSE: To-do entry commands (add, ls, edit, done, undo, rm)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..main import console, fail, get_context, print_plain, todo_app
from ...core.exceptions import (
    InvalidInputError,
    NotFoundError,
    TaskboardError,
)
from ...core.models import Todo
from ...formatting import TodoFormatter, to_json_array


def _parse_priority(value: Optional[str]):
    """Numeric priorities are stored as ints, anything else as a label."""
    if value is None:
        return None
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        return value or None


def _print_todo(todo: Todo, message: str, json_output: bool, raw: bool) -> None:
    if json_output:
        print_plain(todo.to_json())
    elif raw:
        print_plain(TodoFormatter.to_raw_lines([todo])[0])
    else:
        console.print(f"[green]✓ {message}[/green] [cyan]{todo.id}[/cyan]: {escape(todo.name)}")


@todo_app.command("add")
def todo_add(
    task_id: str = typer.Argument(..., help="Task ID"),
    name: str = typer.Argument(..., help="To-do name"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="Priority (number or label)"),
    genre: str = typer.Option("", "--genre", "-g", help="Free-form category"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add a to-do entry to a task.

    Example:
        taskboard todo add 9c1e... "Write copy" --priority 1 --genre content
    """
    try:
        todo = get_context().board.create_todo(
            task_id, name, priority=_parse_priority(priority), genre=genre
        )
        _print_todo(todo, "Created to-do", json_output, raw)

    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@todo_app.command("ls")
def todo_ls(
    task_id: str = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """List a task's to-dos."""
    try:
        todos = get_context().todos.list_by_task(task_id)

        if json_output:
            print_plain(to_json_array(todos))
        elif raw:
            for line in TodoFormatter.to_raw_lines(todos):
                print_plain(line)
        else:
            if not todos:
                console.print("[dim]No to-dos found[/dim]")
                return
            console.print(TodoFormatter.create_table(todos))
            finished = sum(1 for t in todos if t.is_finish)
            console.print(f"\n[dim]{finished}/{len(todos)} finished[/dim]")

    except InvalidInputError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@todo_app.command("edit")
def todo_edit(
    todo_id: str = typer.Argument(..., help="To-do ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="New priority (number or label)"),
    genre: Optional[str] = typer.Option(None, "--genre", "-g", help="New category"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Rename a to-do or change its priority or genre.

    Example:
        taskboard todo edit 51ab... --priority 2
    """
    try:
        todo = get_context().board.update_todo(
            todo_id, name=name, priority=_parse_priority(priority), genre=genre
        )
        _print_todo(todo, "Updated", json_output, raw)
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@todo_app.command("done")
def todo_done(
    todo_id: str = typer.Argument(..., help="To-do ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Mark a to-do as finished."""
    try:
        todo = get_context().board.set_todo_finished(todo_id, True)
        _print_todo(todo, "Finished", json_output, raw)
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@todo_app.command("undo")
def todo_undo(
    todo_id: str = typer.Argument(..., help="To-do ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """Mark a to-do as not finished."""
    try:
        todo = get_context().board.set_todo_finished(todo_id, False)
        _print_todo(todo, "Reopened", json_output, raw)
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@todo_app.command("rm")
def todo_rm(
    todo_id: str = typer.Argument(..., help="To-do ID to delete"),
):
    """Delete a to-do entry."""
    try:
        get_context().board.delete_todo(todo_id)
        console.print(f"[red]✗[/red] Deleted to-do {escape(todo_id)}")
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")
