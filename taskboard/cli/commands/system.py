"""
FILE: taskboard/cli/commands/system.py
PURPOSE: System and overview commands (version, board)
"""

import json

import typer
from rich.markup import escape

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, fail, get_context, print_plain, __version__
from ...core.exceptions import NotFoundError, TaskboardError
from ...formatting import BoardFormatter


@app.command()
def version():
    """Show taskboard version."""
    console.print(f"taskboard v{__version__}")


@app.command()
def board(
    project_id: str = typer.Argument(..., help="Project ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show a project's tasks split into Not Started / In Progress / Done.

    The split is derived from each task's to-dos, not from its status label.

    Example:
        taskboard board 3f2a...
        taskboard board 3f2a... --json
    """
    try:
        ctx = get_context()
        project = ctx.board.get_project_or_raise(project_id)
        partition = ctx.aggregator.classify_project_tasks(project.id)

        if json_output:
            payload = {"project": {"id": project.id, "name": project.name}}
            payload.update(partition.as_dict())
            print_plain(json.dumps(payload, indent=2))
        elif raw:
            for line in BoardFormatter.to_raw_lines(partition):
                print_plain(line)
        else:
            console.print(f"\n[bold cyan]{escape(project.name)}[/bold cyan]\n")
            console.print(BoardFormatter.create_columns(partition))
            counts = partition.counts()
            console.print(
                f"\n[dim]Total: {sum(counts.values())} task(s)[/dim]"
            )

    except NotFoundError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")
