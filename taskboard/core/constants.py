"""
FILE: taskboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - Collection names (PROJECTS, TASKS, TODOS)
  - Document field names shared by the store and repositories
  - Default values for new records
NOTES:
  - Centralized constants to avoid magic strings
  - Field names are the stored (camelCase) document keys
"""

# Document collections
COLLECTION_PROJECTS = "projects"
COLLECTION_TASKS = "tasks"
COLLECTION_TODOS = "todoTasks"

# Fields managed by the store (never written by callers)
FIELD_ID = "id"
FIELD_CREATED_AT = "createdAt"

# Reference fields
FIELD_OWNER_ID = "ownerId"
FIELD_CONTRIBUTORS = "contributors"
FIELD_PROJECT_ID = "projectId"
FIELD_TASK_ID = "taskId"
FIELD_IS_FINISH = "isFinish"

# Filter operators
OP_EQ = "=="
OP_ARRAY_CONTAINS = "array-contains"
VALID_OPERATORS = (OP_EQ, OP_ARRAY_CONTAINS)

# Updatable fields per entity (stored names)
PROJECT_FIELDS = ("name", "description", "ownerId", "contributors")
TASK_FIELDS = ("name", "description", "status", "dueDate", "imageUrl")
TODO_FIELDS = ("priority", "genre", "name", "isFinish")

# Default values
DEFAULT_TASK_STATUS = "default"
DEFAULT_MAX_WORKERS = 8
