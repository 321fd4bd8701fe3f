"""
FILE: taskboard/formatting.py
PURPOSE: Shared formatting utilities for CLI output
EXPORTS:
  - ProjectFormatter, TaskFormatter, TodoFormatter: table / JSON / raw rendering
  - BoardFormatter: three-column derived-status view
  - to_json_array(records) -> str
DEPENDENCIES:
  - rich (tables, columns)
  - json (for JSON serialization)
  - taskboard.core.models
NOTES:
  - Centralized formatting logic so command modules stay thin
"""

import json
from dataclasses import asdict
from typing import Any, List

from rich.columns import Columns
from rich.markup import escape
from rich.table import Table

from .core.models import DerivedStatus, Project, Task, TaskPartition, Todo

STATUS_STYLES = {
    DerivedStatus.NOT_STARTED: "dim",
    DerivedStatus.IN_PROGRESS: "yellow",
    DerivedStatus.DONE: "green",
}


def to_json_array(records: List[Any]) -> str:
    """Serialize a list of dataclass records to a JSON array string."""
    return json.dumps([asdict(r) for r in records], indent=2)


def _date_only(ts_iso: str) -> str:
    return ts_iso.split("T")[0] if ts_iso else ""


class ProjectFormatter:
    @staticmethod
    def create_table(projects: List[Project], title: str = "Projects") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Owner", style="magenta")
        table.add_column("Contributors", style="yellow")
        table.add_column("Created", style="dim")

        for project in projects:
            table.add_row(
                project.id,
                escape(project.name),
                escape(project.owner_id),
                escape(", ".join(project.contributors)) or "-",
                _date_only(project.created_at),
            )
        return table

    @staticmethod
    def to_raw_lines(projects: List[Project]) -> List[str]:
        return [f"{p.id}: {p.name}" for p in projects]


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks") -> Table:
        """
        Create Rich table for tasks.

        Note:
            The Status column is the stored free-form label, not the derived status.
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Status", style="magenta")
        table.add_column("Due", style="yellow")
        table.add_column("Created", style="dim")

        for task in tasks:
            table.add_row(
                task.id,
                escape(task.name),
                escape(task.status),
                task.due_date or "-",
                _date_only(task.created_at),
            )
        return table

    @staticmethod
    def to_raw_lines(tasks: List[Task]) -> List[str]:
        return [f"{t.id}: {t.name}" for t in tasks]


class TodoFormatter:
    @staticmethod
    def create_table(todos: List[Todo], title: str = "To-dos") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("", width=3)
        table.add_column("Name", style="white")
        table.add_column("Priority", style="magenta")
        table.add_column("Genre", style="yellow")

        for todo in todos:
            marker = "[green]✓[/green]" if todo.is_finish else " "
            priority = "-" if todo.priority is None else str(todo.priority)
            table.add_row(todo.id, marker, escape(todo.name), escape(priority), escape(todo.genre or "-"))
        return table

    @staticmethod
    def to_raw_lines(todos: List[Todo]) -> List[str]:
        lines = []
        for todo in todos:
            status_marker = "x" if todo.is_finish else " "
            lines.append(f"{todo.id}: [{status_marker}] {todo.name}")
        return lines


class BoardFormatter:
    """Renders a TaskPartition as three side-by-side columns."""

    @staticmethod
    def create_columns(partition: TaskPartition) -> Columns:
        tables = []
        for status in DerivedStatus:
            tasks = partition.bucket(status)
            style = STATUS_STYLES[status]
            table = Table(
                title=f"[{style}]{status.label}[/{style}] ({len(tasks)})",
                show_header=False,
                expand=True,
            )
            table.add_column("Task")
            for task in tasks:
                table.add_row(f"[cyan]{task.id[:8]}[/cyan] {escape(task.name)}")
            if not tasks:
                table.add_row("[dim]-[/dim]")
            tables.append(table)
        return Columns(tables, equal=True, expand=True)

    @staticmethod
    def to_raw_lines(partition: TaskPartition) -> List[str]:
        lines = []
        for status in DerivedStatus:
            for task in partition.bucket(status):
                lines.append(f"{status.value}\t{task.id}\t{task.name}")
        return lines
