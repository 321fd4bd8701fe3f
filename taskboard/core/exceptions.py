"""
FILE: taskboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskboardError (base exception)
  - NotFoundError
  - ProjectNotFoundError
  - TaskNotFoundError
  - TodoNotFoundError
  - StoreError
  - MalformedDocumentError
  - InvalidInputError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskboardError for easy catching
  - Exceptions include context (IDs) for helpful error messages
  - Single-record reads return None instead of raising NotFoundError
  - Core layers raise these, the CLI catches and displays
"""


class TaskboardError(Exception):
    """Base exception for all taskboard errors."""
    pass


class NotFoundError(TaskboardError):
    """A record with the given ID doesn't exist."""

    kind = "Record"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{self.kind} {record_id} not found")


class ProjectNotFoundError(NotFoundError):
    """Project with given ID doesn't exist."""

    kind = "Project"

    @property
    def project_id(self) -> str:
        return self.record_id


class TaskNotFoundError(NotFoundError):
    """Task with given ID doesn't exist."""

    kind = "Task"

    @property
    def task_id(self) -> str:
        return self.record_id


class TodoNotFoundError(NotFoundError):
    """To-do entry with given ID doesn't exist."""

    kind = "To-do"

    @property
    def todo_id(self) -> str:
        return self.record_id


class StoreError(TaskboardError):
    """The document store could not complete an operation."""

    def __init__(self, operation: str, collection: str, detail: str):
        self.operation = operation
        self.collection = collection
        super().__init__(f"Store {operation} on '{collection}' failed: {detail}")


class MalformedDocumentError(StoreError):
    """A stored document doesn't have the shape its model requires."""

    def __init__(self, collection: str, detail: str):
        super().__init__("read", collection, detail)


class InvalidInputError(TaskboardError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)
