"""
FILE: taskboard/cli/commands/projects.py
PURPOSE: Project management commands (add, ls, edit, share, unshare, rm)
"""

from typing import List, Optional

import typer
from rich.markup import escape

from ..main import console, error_console, fail, get_context, print_plain, project_app
from ...core.exceptions import (
    InvalidInputError,
    NotFoundError,
    TaskboardError,
)
from ...formatting import ProjectFormatter, to_json_array


@project_app.command("add")
def project_add(
    name: str = typer.Argument(..., help="Project name"),
    owner: str = typer.Option(..., "--owner", "-o", help="Owner user ID"),
    description: str = typer.Option("", "--description", "-d", help="Project description"),
    contributors: Optional[List[str]] = typer.Option(
        None, "--contributor", "-c", help="Contributor user ID (repeatable)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new project.

    Example:
        taskboard project add "Website" --owner alice
        taskboard project add "Website" --owner alice -c bob -c carol --json
    """
    try:
        project = get_context().board.create_project(
            name, owner, description=description, contributors=contributors or []
        )

        if json_output:
            print_plain(project.to_json())
        elif raw:
            print_plain(f"{project.id}: {project.name}")
        else:
            console.print(f"[green]✓[/green] Created project {project.id}: {escape(project.name)}")

    except InvalidInputError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@project_app.command("ls")
def project_ls(
    owner: Optional[str] = typer.Option(None, "--owner", help="Only projects owned by this user"),
    contributor: Optional[str] = typer.Option(
        None, "--contributor", help="Only projects listing this user as contributor"
    ),
    member: Optional[str] = typer.Option(
        None, "--member", help="Projects this user owns or contributes to"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List projects.

    Example:
        taskboard project ls
        taskboard project ls --owner alice
        taskboard project ls --member bob --json
    """
    if sum(x is not None for x in (owner, contributor, member)) > 1:
        fail("Use only one of --owner, --contributor, --member")

    try:
        projects_repo = get_context().projects
        if owner is not None:
            projects = projects_repo.list_by_owner(owner)
        elif contributor is not None:
            projects = projects_repo.list_by_contributor(contributor)
        elif member is not None:
            projects = projects_repo.list_for_member(member)
        else:
            projects = projects_repo.list_all()

        if json_output:
            print_plain(to_json_array(projects))
        elif raw:
            for line in ProjectFormatter.to_raw_lines(projects):
                print_plain(line)
        else:
            if not projects:
                console.print("[dim]No projects found[/dim]")
                return
            console.print(ProjectFormatter.create_table(projects))
            console.print(f"\n[dim]Total: {len(projects)} project(s)[/dim]")

    except InvalidInputError as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@project_app.command("edit")
def project_edit(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Rename a project or change its description.

    Example:
        taskboard project edit 3f2a... --name "Website v2"
    """
    try:
        project = get_context().board.update_project(project_id, name=name, description=description)
        if json_output:
            print_plain(project.to_json())
        else:
            console.print(f"[green]✓[/green] Updated project {project.id}: {escape(project.name)}")

    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@project_app.command("share")
def project_share(
    project_id: str = typer.Argument(..., help="Project ID"),
    user_id: str = typer.Argument(..., help="User ID to add as contributor"),
):
    """Add a contributor to a project."""
    try:
        project = get_context().board.add_contributor(project_id, user_id)
        console.print(
            f"[green]✓[/green] {escape(project.name)} contributors: {escape(', '.join(project.contributors))}"
        )
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@project_app.command("unshare")
def project_unshare(
    project_id: str = typer.Argument(..., help="Project ID"),
    user_id: str = typer.Argument(..., help="Contributor user ID to remove"),
):
    """Remove a contributor from a project."""
    try:
        project = get_context().board.remove_contributor(project_id, user_id)
        remaining = escape(", ".join(project.contributors)) or "none"
        console.print(f"[green]✓[/green] {escape(project.name)} contributors: {remaining}")
    except (InvalidInputError, NotFoundError) as e:
        fail(str(e))
    except TaskboardError as e:
        fail(str(e), "Unexpected error")


@project_app.command("rm")
def project_rm(
    project_id: str = typer.Argument(..., help="Project ID to delete"),
    keep_tasks: bool = typer.Option(
        False, "--keep-tasks", help="Leave the project's tasks and to-dos in place"
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete a project permanently.

    By default its tasks and their to-dos are deleted too.

    Example:
        taskboard project rm 3f2a...
        taskboard project rm 3f2a... --keep-tasks --yes
    """
    try:
        ctx = get_context()
        project = ctx.board.get_project_or_raise(project_id)

        if not yes:
            console.print(f"[yellow]About to delete project {project.id}: {escape(project.name)}[/yellow]")
            if not typer.confirm("Continue?", default=False):
                console.print("[yellow]Cancelled[/yellow]")
                raise typer.Exit(0)

        deleted_tasks = ctx.board.delete_project(project.id, cascade=not keep_tasks)
        console.print(f"[red]✗[/red] Deleted project {project.id}: {escape(project.name)}")
        if keep_tasks:
            console.print("[dim]Tasks of this project were kept[/dim]")
        elif deleted_tasks:
            console.print(f"[dim]Also deleted {deleted_tasks} task(s)[/dim]")

    except NotFoundError as e:
        fail(str(e))
    except TaskboardError as e:
        error_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
