"""
FILE: taskboard/core/service.py
PURPOSE: Derived task status aggregation and validated board operations
EXPORTS:
  - classify(todos) -> DerivedStatus
  - StatusAggregator
      - classify_project_tasks(project_id) -> TaskPartition
      - classify_task(task_id) -> DerivedStatus | None
  - BoardService
      - create_project / update_project / add_contributor / remove_contributor
      - delete_project(project_id, cascade=True)
      - create_task / delete_task
      - create_todo / update_todo / set_todo_finished / toggle_todo / delete_todo
DEPENDENCIES:
  - concurrent.futures (to-do fan-out)
  - taskboard.core.repository (ProjectRepository, TaskRepository, TodoRepository)
  - taskboard.core.models (Project, Task, Todo, DerivedStatus, TaskPartition)
  - taskboard.core.exceptions
NOTES:
  - Derived status depends only on to-do completion, never on Task.status
  - Derived status is never written back to the task record
  - Fan-out results are joined by task index, not by completion order
  - First failed fetch fails the whole aggregation (remaining fetches cancelled)
  - No direct store access (use repository layer)
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .constants import DEFAULT_MAX_WORKERS, DEFAULT_TASK_STATUS, FIELD_CONTRIBUTORS
from .exceptions import (
    InvalidInputError,
    ProjectNotFoundError,
    TaskNotFoundError,
    TodoNotFoundError,
)
from .models import DerivedStatus, Project, Task, TaskPartition, Todo
from .repository import ProjectRepository, TaskRepository, TodoRepository

logger = logging.getLogger(__name__)


def classify(todos: Sequence[Todo]) -> DerivedStatus:
    """
    Derive a task's status from its to-dos.

    - no to-dos           -> NOT_STARTED
    - all finished        -> DONE
    - none finished       -> NOT_STARTED
    - anything else       -> IN_PROGRESS
    """
    if not todos:
        return DerivedStatus.NOT_STARTED
    if all(t.is_finish is True for t in todos):
        return DerivedStatus.DONE
    if all(t.is_finish is False for t in todos):
        return DerivedStatus.NOT_STARTED
    return DerivedStatus.IN_PROGRESS


class StatusAggregator:
    """Partitions a project's tasks by derived status."""

    def __init__(
        self,
        tasks: TaskRepository,
        todos: TodoRepository,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise InvalidInputError("max_workers must be at least 1")
        self._tasks = tasks
        self._todos = todos
        self._max_workers = max_workers

    def classify_project_tasks(self, project_id: str) -> TaskPartition:
        """
        Fetch the project's tasks and their to-dos, then bucket each task.

        Returns:
            TaskPartition whose lists keep the task fetch order (newest first)

        Raises:
            StoreError: If any fetch fails; no partial partition is returned
        """
        tasks = self._tasks.list_by_project(project_id)
        todo_lists = self._fetch_todos(tasks)

        partition = TaskPartition()
        for task, todos in zip(tasks, todo_lists):
            partition.add(task, classify(todos))

        logger.info("Classified %d task(s) for project %s: %s", len(tasks), project_id, partition.counts())
        return partition

    def classify_task(self, task_id: str) -> Optional[DerivedStatus]:
        """Derived status of a single task, or None if it doesn't exist."""
        if self._tasks.get_by_id(task_id) is None:
            return None
        return classify(self._todos.list_by_task(task_id))

    def _fetch_todos(self, tasks: List[Task]) -> List[List[Todo]]:
        if not tasks:
            return []

        results_by_idx: Dict[int, List[Todo]] = {}
        workers = min(self._max_workers, len(tasks))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="todo-fetch") as executor:
            future_map = {
                executor.submit(self._todos.list_by_task, task.id): idx
                for idx, task in enumerate(tasks)
            }
            for future in as_completed(future_map):
                idx = future_map[future]
                try:
                    results_by_idx[idx] = future.result()
                except Exception:
                    logger.error("To-do fetch failed for task %s; abandoning aggregation", tasks[idx].id)
                    for other in future_map:
                        other.cancel()
                    raise

        return [results_by_idx[idx] for idx in range(len(tasks))]


class BoardService:
    """
    Validated write paths over the three repositories.

    Trims names, checks parent records exist, and owns the project
    deletion cascade policy.
    """

    def __init__(
        self,
        projects: ProjectRepository,
        tasks: TaskRepository,
        todos: TodoRepository,
    ):
        self.projects = projects
        self.tasks = tasks
        self.todos = todos

    # --- Projects ---

    def create_project(
        self,
        name: str,
        owner_id: str,
        description: str = "",
        contributors: Iterable[str] = (),
    ) -> Project:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Project name cannot be empty")
        project_id = self.projects.create(
            name, (description or "").strip(), (owner_id or "").strip(), contributors
        )
        return self.get_project_or_raise(project_id)

    def get_project_or_raise(self, project_id: str) -> Project:
        project = self.projects.get_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def update_project(
        self,
        project_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Project:
        changes = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidInputError("Project name cannot be empty")
            changes["name"] = name
        if description is not None:
            changes["description"] = description.strip()
        if not changes:
            raise InvalidInputError("Nothing to update. Pass a name or description")

        self.projects.update(project_id, changes)
        return self.get_project_or_raise(project_id)

    def add_contributor(self, project_id: str, user_id: str) -> Project:
        project = self.get_project_or_raise(project_id)
        if user_id not in project.contributors:
            self.projects.update(project_id, {FIELD_CONTRIBUTORS: project.contributors + [user_id]})
        return self.get_project_or_raise(project_id)

    def remove_contributor(self, project_id: str, user_id: str) -> Project:
        project = self.get_project_or_raise(project_id)
        if user_id in project.contributors:
            remaining = [c for c in project.contributors if c != user_id]
            self.projects.update(project_id, {FIELD_CONTRIBUTORS: remaining})
        return self.get_project_or_raise(project_id)

    def delete_project(self, project_id: str, cascade: bool = True) -> int:
        """
        Delete a project.

        Args:
            project_id: Project to delete
            cascade: Also delete its tasks and their to-dos (default).
                With cascade=False the tasks stay behind, orphaned.

        Returns:
            Number of tasks deleted along with the project

        Raises:
            ProjectNotFoundError: If the project doesn't exist
        """
        self.get_project_or_raise(project_id)

        deleted_tasks = 0
        if cascade:
            for task in self.tasks.list_by_project(project_id):
                self.delete_task(task.id)
                deleted_tasks += 1

        self.projects.delete(project_id)
        logger.info("Deleted project %s (cascade=%s, tasks=%d)", project_id, cascade, deleted_tasks)
        return deleted_tasks

    # --- Tasks ---

    def create_task(
        self,
        project_id: str,
        name: str,
        description: str = "",
        status: str = DEFAULT_TASK_STATUS,
        due_date: Union[date, str, None] = None,
        image_url: Optional[str] = None,
    ) -> Task:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Task name cannot be empty")
        self.get_project_or_raise(project_id)

        task_id = self.tasks.create(
            project_id,
            name,
            (description or "").strip(),
            (status or DEFAULT_TASK_STATUS).strip() or DEFAULT_TASK_STATUS,
            due_date,
            image_url,
        )
        return self.get_task_or_raise(task_id)

    def get_task_or_raise(self, task_id: str) -> Task:
        task = self.tasks.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def delete_task(self, task_id: str) -> int:
        """Delete a task and its to-dos. Returns the number of to-dos removed."""
        todos = self.todos.list_by_task(task_id)
        for todo in todos:
            self.todos.delete(todo.id)
        self.tasks.delete(task_id)
        return len(todos)

    # --- To-dos ---

    def create_todo(
        self,
        task_id: str,
        name: str,
        priority: Union[int, str, None] = None,
        genre: str = "",
        is_finish: bool = False,
    ) -> Todo:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("To-do name cannot be empty")
        self.get_task_or_raise(task_id)

        todo_id = self.todos.create(task_id, priority, (genre or "").strip(), name, is_finish)
        return self.get_todo_or_raise(todo_id)

    def get_todo_or_raise(self, todo_id: str) -> Todo:
        todo = self.todos.get_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    def update_todo(
        self,
        todo_id: str,
        name: Optional[str] = None,
        priority: Union[int, str, None] = None,
        genre: Optional[str] = None,
    ) -> Todo:
        """Change a to-do's name, priority or genre. None leaves a field as is."""
        changes: Dict[str, Union[int, str]] = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidInputError("To-do name cannot be empty")
            changes["name"] = name
        if priority is not None:
            changes["priority"] = priority
        if genre is not None:
            changes["genre"] = genre.strip()
        if not changes:
            raise InvalidInputError("Nothing to update. Pass a name, priority or genre")

        self.todos.update(todo_id, changes)
        return self.get_todo_or_raise(todo_id)

    def set_todo_finished(self, todo_id: str, is_finish: bool) -> Todo:
        self.todos.set_finished(todo_id, is_finish)
        return self.get_todo_or_raise(todo_id)

    def toggle_todo(self, todo_id: str) -> Todo:
        todo = self.get_todo_or_raise(todo_id)
        return self.set_todo_finished(todo_id, not todo.is_finish)

    def delete_todo(self, todo_id: str) -> None:
        self.todos.delete(todo_id)
