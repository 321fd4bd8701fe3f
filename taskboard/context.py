"""
FILE: taskboard/context.py
PURPOSE: Explicit wiring of store, repositories and services
EXPORTS:
  - AppContext (dataclass)
NOTES:
  - Built once per CLI invocation (or per test) and passed around
  - Replaces any process-wide store handle
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .config import Settings
from .core.constants import DEFAULT_MAX_WORKERS
from .core.repository import ProjectRepository, TaskRepository, TodoRepository
from .core.service import BoardService, StatusAggregator
from .core.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Central container for shared app resources."""

    store: DocumentStore
    projects: ProjectRepository
    tasks: TaskRepository
    todos: TodoRepository
    board: BoardService
    aggregator: StatusAggregator

    @classmethod
    def create(cls, db_path: Union[str, Path], max_workers: int = DEFAULT_MAX_WORKERS) -> "AppContext":
        """Open the store and build repositories and services on top of it."""
        store = DocumentStore(db_path)
        projects = ProjectRepository(store)
        tasks = TaskRepository(store)
        todos = TodoRepository(store)
        logger.debug("AppContext initialized with DB=%s", store.path)
        return cls(
            store=store,
            projects=projects,
            tasks=tasks,
            todos=todos,
            board=BoardService(projects, tasks, todos),
            aggregator=StatusAggregator(tasks, todos, max_workers=max_workers),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls.create(settings.db_path, max_workers=settings.max_workers)
