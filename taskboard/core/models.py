"""
FILE: taskboard/core/models.py
PURPOSE: Domain models for projects, tasks, to-do entries and derived task status
EXPORTS:
  - Project (dataclass)
  - Task (dataclass)
  - Todo (dataclass)
  - DerivedStatus (enum)
  - TaskPartition (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - typing (stdlib)
  - taskboard.core.constants (collection names)
  - taskboard.core.exceptions (MalformedDocumentError)
NOTES:
  - All stored models have from_document() for store record conversion
  - from_document() validates required fields instead of trusting the store;
    a bad stored document is a store fault (MalformedDocumentError), not bad input
  - All models have to_json() for serialization
  - Optional fields use None as default
  - Timestamps stored as ISO-8601 strings
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import json

from .constants import COLLECTION_PROJECTS, COLLECTION_TASKS, COLLECTION_TODOS
from .exceptions import MalformedDocumentError


def _require_str(doc: Dict[str, Any], key: str, collection: str) -> str:
    value = doc.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedDocumentError(
            collection, f"document {doc.get('id')!r} is missing required field '{key}'"
        )
    return value


def _optional_str(doc: Dict[str, Any], key: str) -> Optional[str]:
    value = doc.get(key)
    return None if value is None else str(value)


@dataclass
class Project:
    """A project owned by one user and shared with contributors."""

    id: str
    name: str
    owner_id: str
    description: str = ""
    contributors: List[str] = field(default_factory=list)
    created_at: Optional[str] = None

    @property
    def members(self) -> List[str]:
        """Owner first, then contributors; the owner always has access."""
        return [self.owner_id] + [c for c in self.contributors if c != self.owner_id]

    def has_member(self, user_id: str) -> bool:
        return user_id == self.owner_id or user_id in self.contributors

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Project":
        """Convert a store record to a Project object."""
        contributors = doc.get("contributors") or []
        if not isinstance(contributors, list):
            raise MalformedDocumentError(
                COLLECTION_PROJECTS, f"document {doc.get('id')!r} field 'contributors' must be a list"
            )

        return cls(
            id=_require_str(doc, "id", COLLECTION_PROJECTS),
            name=_require_str(doc, "name", COLLECTION_PROJECTS),
            owner_id=_require_str(doc, "ownerId", COLLECTION_PROJECTS),
            description=doc.get("description") or "",
            contributors=[str(c) for c in contributors],
            created_at=_optional_str(doc, "createdAt"),
        )

    def to_json(self) -> str:
        """Serialize project to JSON string."""
        return json.dumps(asdict(self), indent=2)


@dataclass
class Task:
    """A task inside a project. `status` is a free-form user label."""

    id: str
    project_id: str
    name: str
    description: str = ""
    status: str = "default"
    due_date: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Task":
        """Convert a store record to a Task object."""
        return cls(
            id=_require_str(doc, "id", COLLECTION_TASKS),
            project_id=_require_str(doc, "projectId", COLLECTION_TASKS),
            name=_require_str(doc, "name", COLLECTION_TASKS),
            description=doc.get("description") or "",
            status=doc.get("status") or "default",
            due_date=_optional_str(doc, "dueDate"),
            image_url=_optional_str(doc, "imageUrl"),
            created_at=_optional_str(doc, "createdAt"),
        )

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(asdict(self), indent=2)


@dataclass
class Todo:
    """A to-do entry; the only ground truth for task completion."""

    id: str
    task_id: str
    name: str
    priority: Union[int, str, None] = None
    genre: str = ""
    is_finish: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Todo":
        """Convert a store record to a Todo object."""
        is_finish = doc.get("isFinish", False)
        if not isinstance(is_finish, bool):
            raise MalformedDocumentError(
                COLLECTION_TODOS,
                f"document {doc.get('id')!r} field 'isFinish' must be a boolean, got {is_finish!r}",
            )

        return cls(
            id=_require_str(doc, "id", COLLECTION_TODOS),
            task_id=_require_str(doc, "taskId", COLLECTION_TODOS),
            name=_require_str(doc, "name", COLLECTION_TODOS),
            priority=doc.get("priority"),
            genre=doc.get("genre") or "",
            is_finish=is_finish,
            created_at=_optional_str(doc, "createdAt"),
        )

    def to_json(self) -> str:
        """Serialize to-do to JSON string."""
        return json.dumps(asdict(self), indent=2)


class DerivedStatus(str, Enum):
    """Task completion computed from its to-dos. Never stored."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass
class TaskPartition:
    """Tasks of one project split by derived status, each list in fetch order."""

    not_started: List[Task] = field(default_factory=list)
    in_progress: List[Task] = field(default_factory=list)
    done: List[Task] = field(default_factory=list)

    def bucket(self, status: DerivedStatus) -> List[Task]:
        if status is DerivedStatus.NOT_STARTED:
            return self.not_started
        if status is DerivedStatus.IN_PROGRESS:
            return self.in_progress
        return self.done

    def add(self, task: Task, status: DerivedStatus) -> None:
        self.bucket(status).append(task)

    def status_of(self, task_id: str) -> Optional[DerivedStatus]:
        for status in DerivedStatus:
            if any(t.id == task_id for t in self.bucket(status)):
                return status
        return None

    def counts(self) -> Dict[str, int]:
        return {status.value: len(self.bucket(status)) for status in DerivedStatus}

    def all_tasks(self) -> List[Task]:
        return self.not_started + self.in_progress + self.done

    def as_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            status.value: [asdict(t) for t in self.bucket(status)]
            for status in DerivedStatus
        }

    def to_json(self) -> str:
        """Serialize partition to JSON string."""
        return json.dumps(self.as_dict(), indent=2)
