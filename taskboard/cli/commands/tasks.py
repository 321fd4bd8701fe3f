"""
FILE: taskboard/cli/commands/tasks.py
PURPOSE: Task management commands (add, ls, show, rm)
"""

import json
from dataclasses import asdict
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel

from ..main import console, fail, get_context, print_plain, task_app
from ...core.exceptions import (
    InvalidInputError,
    NotFoundError,
    TaskboardError,
)
from ...core.service import classify
from ...formatting import STATUS_STYLES, TaskFormatter, TodoFormatter, to_json_array


@task_app.command("add")
def task_add(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str = typer.Argument(..., help="Task name"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    status: str = typer.Option("default", "--status", "-s", help="Free-form status label"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    image: Optional[str] = typer.Option(None, "--image", help="Image URL"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task in a project.

    Example:
        taskboard task add 3f2a... "Design landing page"
        taskboard task add 3f2a... "Ship" --due 2026-12-01 --json
    """
    try:
        task = get_context().board.create_task(
            project_id,
            name,
            description=description,
            status=status,
            due_date=due,
            image_url=image,
        )

        if json_output:
            print_plain(task.to_json())
        elif raw:
            print_plain(f"{task.id}: {task.name}")
        else:
            console.print(f"[green]✓ Created task [bold]{task.id}[/bold]:[/green] {escape(task.name)}")

    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@task_app.command("ls")
def task_ls(
    project_id: str = typer.Argument(..., help="Project ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List a project's tasks, newest first.

    Example:
        taskboard task ls 3f2a...
    """
    try:
        tasks = get_context().tasks.list_by_project(project_id)

        if json_output:
            print_plain(to_json_array(tasks))
        elif raw:
            for line in TaskFormatter.to_raw_lines(tasks):
                print_plain(line)
        else:
            if not tasks:
                console.print("[dim]No tasks found[/dim]")
                return
            console.print(TaskFormatter.create_table(tasks))
            console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")

    except InvalidInputError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@task_app.command("show")
def task_show(
    task_id: str = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    View full task details with its to-dos and derived status.

    Example:
        taskboard task show 9c1e...
    """
    try:
        ctx = get_context()
        task = ctx.tasks.get_by_id(task_id)
        if task is None:
            fail(f"Task {task_id} not found")
        todos = ctx.todos.list_by_task(task.id)
        derived = classify(todos)

        if json_output:
            payload = asdict(task)
            payload["derived_status"] = derived.value
            payload["todos"] = [asdict(t) for t in todos]
            print_plain(json.dumps(payload, indent=2))
            return

        style = STATUS_STYLES[derived]
        lines = [
            f"[bold]{escape(task.name)}[/bold]",
            "",
            f"Progress: [{style}]{derived.label}[/{style}]",
            f"Status label: {escape(task.status)}",
            f"Due: {escape(task.due_date or '-')}",
            f"Project: {task.project_id}",
        ]
        if task.image_url:
            lines.append(f"Image: {escape(task.image_url)}")
        if task.description:
            lines.extend(["", escape(task.description)])

        console.print(Panel("\n".join(lines), title=f"Task {task.id}", border_style="cyan"))
        if todos:
            console.print(TodoFormatter.create_table(todos))
        else:
            console.print("[dim]No to-dos yet[/dim]")

    except InvalidInputError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@task_app.command("rm")
def task_rm(
    task_id: str = typer.Argument(..., help="Task ID to delete"),
):
    """
    Delete a task and its to-dos.

    Example:
        taskboard task rm 9c1e...
    """
    try:
        removed = get_context().board.delete_task(task_id)
        console.print(f"[red]✗[/red] Deleted task {escape(task_id)}")
        if removed:
            console.print(f"[dim]Also deleted {removed} to-do(s)[/dim]")

    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")
