"""
FILE: taskboard/core/__init__.py
PURPOSE: Store adapter, repositories and status aggregation (no UI code)
EXPORTS:
  - DocumentStore (from core.store)
  - ProjectRepository, TaskRepository, TodoRepository (from core.repository)
  - StatusAggregator, BoardService, classify (from core.service)
"""

from .repository import ProjectRepository, TaskRepository, TodoRepository
from .service import BoardService, StatusAggregator, classify
from .store import DocumentStore

__all__ = [
    "DocumentStore",
    "ProjectRepository",
    "TaskRepository",
    "TodoRepository",
    "StatusAggregator",
    "BoardService",
    "classify",
]
