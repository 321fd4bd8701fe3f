"""
FILE: taskboard/core/repository.py
PURPOSE: Typed per-entity access on top of the document store
EXPORTS:
  - ProjectRepository
      - create(name, description, owner_id, contributors) -> str
      - get_by_id(project_id) -> Project | None
      - list_all() -> List[Project]
      - list_by_owner(owner_id) -> List[Project]
      - list_by_contributor(user_id) -> List[Project]
      - list_for_member(user_id) -> List[Project]
      - update(project_id, fields) -> None
      - delete(project_id) -> None
  - TaskRepository
      - create(project_id, name, description, status, due_date, image_url) -> str
      - get_by_id(task_id) -> Task | None
      - list_by_project(project_id) -> List[Task]
      - update(task_id, fields) -> None
      - delete(task_id) -> None
  - TodoRepository
      - create(task_id, priority, genre, name, is_finish) -> str
      - get_by_id(todo_id) -> Todo | None
      - list_by_task(task_id) -> List[Todo]
      - set_finished(todo_id, is_finish) -> None
      - update(todo_id, fields) -> None
      - delete(todo_id) -> None
DEPENDENCIES:
  - taskboard.core.store (DocumentStore, Filter, OrderBy)
  - taskboard.core.models (Project, Task, Todo)
  - taskboard.core.exceptions (NotFound errors, InvalidInputError)
NOTES:
  - Returns domain objects, never raw store dicts
  - Missing records on reads return None; on writes raise the matching NotFound error
  - Required ids are validated before touching the store
  - Store faults (StoreError) propagate unchanged
  - Lists are ordered by createdAt (newest first) except list_by_contributor
    and TodoRepository.list_by_task, which have no ordering clause
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from .constants import (
    COLLECTION_PROJECTS,
    COLLECTION_TASKS,
    COLLECTION_TODOS,
    DEFAULT_TASK_STATUS,
    FIELD_CONTRIBUTORS,
    FIELD_CREATED_AT,
    FIELD_IS_FINISH,
    FIELD_OWNER_ID,
    FIELD_PROJECT_ID,
    FIELD_TASK_ID,
    OP_ARRAY_CONTAINS,
    OP_EQ,
    PROJECT_FIELDS,
    TASK_FIELDS,
    TODO_FIELDS,
)
from .exceptions import (
    InvalidInputError,
    ProjectNotFoundError,
    TaskNotFoundError,
    TodoNotFoundError,
)
from .models import Project, Task, Todo
from .store import DocumentStore, Filter, OrderBy

logger = logging.getLogger(__name__)

NEWEST_FIRST = OrderBy(FIELD_CREATED_AT, descending=True)


def _require_id(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} is required")
    return value.strip()


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} name cannot be empty")
    return value


def _check_fields(fields: Dict[str, Any], allowed: Iterable[str], label: str) -> Dict[str, Any]:
    allowed = tuple(allowed)
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise InvalidInputError(
            f"Cannot update {label} field(s): {', '.join(unknown)}. "
            f"Allowed: {', '.join(allowed)}"
        )
    if not fields:
        raise InvalidInputError(f"No {label} fields to update")
    return dict(fields)


def _normalize_contributors(contributors: Iterable[str]) -> List[str]:
    if isinstance(contributors, str):
        raise InvalidInputError("contributors must be a collection of user ids, not a string")
    seen: List[str] = []
    for user_id in contributors:
        user_id = _require_id(user_id, "Contributor id")
        if user_id not in seen:
            seen.append(user_id)
    return seen


class ProjectRepository:
    """Projects collection."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def create(
        self,
        name: str,
        description: str,
        owner_id: str,
        contributors: Iterable[str] = (),
    ) -> str:
        """
        Create a new project.

        Returns:
            Generated project id

        Raises:
            InvalidInputError: If name or owner_id is missing
        """
        doc = {
            "name": _require_name(name, "Project"),
            "description": description or "",
            FIELD_OWNER_ID: _require_id(owner_id, "Owner id"),
            FIELD_CONTRIBUTORS: _normalize_contributors(contributors),
        }
        project_id = self._store.insert(COLLECTION_PROJECTS, doc)
        logger.info("Created project %s owned by %s", project_id, doc[FIELD_OWNER_ID])
        return project_id

    def get_by_id(self, project_id: str) -> Optional[Project]:
        doc = self._store.get_by_id(COLLECTION_PROJECTS, _require_id(project_id, "Project id"))
        return Project.from_document(doc) if doc else None

    def list_all(self) -> List[Project]:
        docs = self._store.list_where(COLLECTION_PROJECTS, order_by=NEWEST_FIRST)
        return [Project.from_document(d) for d in docs]

    def list_by_owner(self, owner_id: str) -> List[Project]:
        docs = self._store.list_where(
            COLLECTION_PROJECTS,
            [Filter(FIELD_OWNER_ID, OP_EQ, _require_id(owner_id, "Owner id"))],
            order_by=NEWEST_FIRST,
        )
        return [Project.from_document(d) for d in docs]

    def list_by_contributor(self, user_id: str) -> List[Project]:
        """
        Projects whose contributors contain user_id.

        Note:
            No ordering clause here, unlike the other project queries;
            results come back in store (insertion) order. Owners who are not
            listed as contributors are not matched; see list_for_member().
        """
        docs = self._store.list_where(
            COLLECTION_PROJECTS,
            [Filter(FIELD_CONTRIBUTORS, OP_ARRAY_CONTAINS, _require_id(user_id, "User id"))],
        )
        return [Project.from_document(d) for d in docs]

    def list_for_member(self, user_id: str) -> List[Project]:
        """Owned and contributed projects, de-duplicated, newest first."""
        merged = {p.id: p for p in self.list_by_owner(user_id)}
        for project in self.list_by_contributor(user_id):
            merged.setdefault(project.id, project)
        return sorted(merged.values(), key=lambda p: p.created_at or "", reverse=True)

    def update(self, project_id: str, fields: Dict[str, Any]) -> None:
        """
        Apply a partial update (stored field names, e.g. {"name": ...}).

        Raises:
            ProjectNotFoundError: If the project doesn't exist
            InvalidInputError: If a field is unknown or a required value is empty
        """
        project_id = _require_id(project_id, "Project id")
        changes = _check_fields(fields, PROJECT_FIELDS, "project")
        if "name" in changes:
            _require_name(changes["name"], "Project")
        if FIELD_OWNER_ID in changes:
            changes[FIELD_OWNER_ID] = _require_id(changes[FIELD_OWNER_ID], "Owner id")
        if FIELD_CONTRIBUTORS in changes:
            changes[FIELD_CONTRIBUTORS] = _normalize_contributors(changes[FIELD_CONTRIBUTORS])

        if not self._store.update(COLLECTION_PROJECTS, project_id, changes):
            raise ProjectNotFoundError(project_id)

    def delete(self, project_id: str) -> None:
        """
        Delete a single project record.

        Note:
            Does not touch the project's tasks; BoardService.delete_project
            owns the cascade policy.
        """
        project_id = _require_id(project_id, "Project id")
        if not self._store.delete(COLLECTION_PROJECTS, project_id):
            raise ProjectNotFoundError(project_id)
        logger.info("Deleted project %s", project_id)


class TaskRepository:
    """Tasks collection."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def create(
        self,
        project_id: str,
        name: str,
        description: str = "",
        status: str = DEFAULT_TASK_STATUS,
        due_date: Union[date, str, None] = None,
        image_url: Optional[str] = None,
    ) -> str:
        """
        Create a new task under project_id.

        Args:
            project_id: Owning project (required, immutable afterwards)
            name: Task name (required)
            description: Free text
            status: Free-form user label, unrelated to derived status
            due_date: Optional date (date object or ISO string)
            image_url: Optional image link

        Returns:
            Generated task id
        """
        doc = {
            FIELD_PROJECT_ID: _require_id(project_id, "Project id"),
            "name": _require_name(name, "Task"),
            "description": description or "",
            "status": status or DEFAULT_TASK_STATUS,
            "dueDate": _normalize_due_date(due_date),
            "imageUrl": image_url or None,
        }
        task_id = self._store.insert(COLLECTION_TASKS, doc)
        logger.info("Created task %s in project %s", task_id, doc[FIELD_PROJECT_ID])
        return task_id

    def get_by_id(self, task_id: str) -> Optional[Task]:
        doc = self._store.get_by_id(COLLECTION_TASKS, _require_id(task_id, "Task id"))
        if doc is None:
            logger.warning("No task found with id %s", task_id)
            return None
        return Task.from_document(doc)

    def list_by_project(self, project_id: str) -> List[Task]:
        docs = self._store.list_where(
            COLLECTION_TASKS,
            [Filter(FIELD_PROJECT_ID, OP_EQ, _require_id(project_id, "Project id"))],
            order_by=NEWEST_FIRST,
        )
        return [Task.from_document(d) for d in docs]

    def update(self, task_id: str, fields: Dict[str, Any]) -> None:
        """
        Apply a partial update. projectId is immutable and rejected here.

        Raises:
            TaskNotFoundError: If the task doesn't exist
        """
        task_id = _require_id(task_id, "Task id")
        changes = _check_fields(fields, TASK_FIELDS, "task")
        if "name" in changes:
            _require_name(changes["name"], "Task")
        if "dueDate" in changes:
            changes["dueDate"] = _normalize_due_date(changes["dueDate"])

        if not self._store.update(COLLECTION_TASKS, task_id, changes):
            raise TaskNotFoundError(task_id)

    def delete(self, task_id: str) -> None:
        task_id = _require_id(task_id, "Task id")
        if not self._store.delete(COLLECTION_TASKS, task_id):
            raise TaskNotFoundError(task_id)
        logger.info("Deleted task %s", task_id)


class TodoRepository:
    """To-do entries collection."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def create(
        self,
        task_id: str,
        priority: Union[int, str, None],
        genre: str,
        name: str,
        is_finish: bool = False,
    ) -> str:
        if not isinstance(is_finish, bool):
            raise InvalidInputError("is_finish must be a boolean")
        doc = {
            FIELD_TASK_ID: _require_id(task_id, "Task id"),
            "priority": priority,
            "genre": genre or "",
            "name": _require_name(name, "To-do"),
            FIELD_IS_FINISH: is_finish,
        }
        todo_id = self._store.insert(COLLECTION_TODOS, doc)
        logger.debug("Created to-do %s for task %s", todo_id, doc[FIELD_TASK_ID])
        return todo_id

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        doc = self._store.get_by_id(COLLECTION_TODOS, _require_id(todo_id, "To-do id"))
        return Todo.from_document(doc) if doc else None

    def list_by_task(self, task_id: str) -> List[Todo]:
        """To-dos of one task, in store order (no ordering clause)."""
        docs = self._store.list_where(
            COLLECTION_TODOS,
            [Filter(FIELD_TASK_ID, OP_EQ, _require_id(task_id, "Task id"))],
        )
        return [Todo.from_document(d) for d in docs]

    def set_finished(self, todo_id: str, is_finish: bool) -> None:
        todo_id = _require_id(todo_id, "To-do id")
        if not isinstance(is_finish, bool):
            raise InvalidInputError("is_finish must be a boolean")
        if not self._store.update(COLLECTION_TODOS, todo_id, {FIELD_IS_FINISH: is_finish}):
            raise TodoNotFoundError(todo_id)

    def update(self, todo_id: str, fields: Dict[str, Any]) -> None:
        todo_id = _require_id(todo_id, "To-do id")
        changes = _check_fields(fields, TODO_FIELDS, "to-do")
        if "name" in changes:
            _require_name(changes["name"], "To-do")
        if FIELD_IS_FINISH in changes and not isinstance(changes[FIELD_IS_FINISH], bool):
            raise InvalidInputError("isFinish must be a boolean")
        if not self._store.update(COLLECTION_TODOS, todo_id, changes):
            raise TodoNotFoundError(todo_id)

    def delete(self, todo_id: str) -> None:
        todo_id = _require_id(todo_id, "To-do id")
        if not self._store.delete(COLLECTION_TODOS, todo_id):
            raise TodoNotFoundError(todo_id)
        logger.debug("Deleted to-do %s", todo_id)


def _normalize_due_date(value: Union[date, str, None]) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value)).isoformat()
    except ValueError:
        raise InvalidInputError(f"Invalid due date '{value}'. Expected YYYY-MM-DD")
