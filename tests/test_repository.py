"""
Tests for the entity repositories (projects, tasks, to-dos).
"""

from datetime import date

import pytest

from taskboard.core.exceptions import (
    InvalidInputError,
    MalformedDocumentError,
    ProjectNotFoundError,
    StoreError,
    TaskNotFoundError,
    TodoNotFoundError,
)
from taskboard.core.models import Project, Task, Todo
from taskboard.core.repository import ProjectRepository, TaskRepository, TodoRepository


@pytest.fixture()
def projects(store):
    return ProjectRepository(store)


@pytest.fixture()
def tasks(store):
    return TaskRepository(store)


@pytest.fixture()
def todos(store):
    return TodoRepository(store)


# --- Projects ---

def test_create_project(projects):
    project_id = projects.create("Website", "Landing page", "alice", ["bob"])

    project = projects.get_by_id(project_id)

    assert isinstance(project, Project)
    assert project.name == "Website"
    assert project.description == "Landing page"
    assert project.owner_id == "alice"
    assert project.contributors == ["bob"]
    assert project.created_at is not None


def test_create_project_defaults_to_no_contributors(projects):
    project = projects.get_by_id(projects.create("Solo", "", "alice"))

    assert project.contributors == []
    assert project.members == ["alice"]


def test_create_project_deduplicates_contributors(projects):
    project = projects.get_by_id(projects.create("P", "", "alice", ["bob", "bob", "carol"]))

    assert project.contributors == ["bob", "carol"]


def test_owner_is_always_a_member(projects):
    project = projects.get_by_id(projects.create("P", "", "alice", ["bob"]))

    assert project.has_member("alice")
    assert project.has_member("bob")
    assert not project.has_member("mallory")
    assert project.members == ["alice", "bob"]


def test_create_project_requires_owner(projects):
    with pytest.raises(InvalidInputError):
        projects.create("P", "", "")
    with pytest.raises(InvalidInputError):
        projects.create("P", "", None)


def test_create_project_requires_name(projects):
    with pytest.raises(InvalidInputError):
        projects.create("   ", "", "alice")


def test_contributors_must_not_be_a_string(projects):
    with pytest.raises(InvalidInputError):
        projects.create("P", "", "alice", "bob")


def test_list_all_newest_first(projects):
    first = projects.create("First", "", "alice")
    second = projects.create("Second", "", "bob")
    third = projects.create("Third", "", "alice")

    assert [p.id for p in projects.list_all()] == [third, second, first]


def test_list_by_owner(projects):
    a1 = projects.create("A1", "", "alice")
    projects.create("B1", "", "bob")
    a2 = projects.create("A2", "", "alice")

    assert [p.id for p in projects.list_by_owner("alice")] == [a2, a1]
    assert projects.list_by_owner("nobody") == []


def test_list_by_contributor_has_no_ordering_clause(projects):
    older = projects.create("Older", "", "alice", ["bob"])
    projects.create("Other", "", "alice", ["carol"])
    newer = projects.create("Newer", "", "dave", ["bob"])

    # Store order, not newest-first
    assert [p.id for p in projects.list_by_contributor("bob")] == [older, newer]


def test_list_by_contributor_excludes_owner_not_listed(projects):
    projects.create("Mine", "", "alice")

    assert projects.list_by_contributor("alice") == []


def test_list_for_member_merges_owned_and_shared(projects):
    owned_old = projects.create("Owned old", "", "alice")
    shared = projects.create("Shared", "", "bob", ["alice"])
    both = projects.create("Both", "", "alice", ["alice"])
    projects.create("Unrelated", "", "bob")

    result = projects.list_for_member("alice")

    assert [p.id for p in result] == [both, shared, owned_old]


def test_update_project(projects):
    project_id = projects.create("Old", "desc", "alice")

    projects.update(project_id, {"name": "New", "contributors": ["zoe"]})

    project = projects.get_by_id(project_id)
    assert project.name == "New"
    assert project.description == "desc"
    assert project.contributors == ["zoe"]


def test_update_project_unknown_field(projects):
    project_id = projects.create("P", "", "alice")

    with pytest.raises(InvalidInputError):
        projects.update(project_id, {"createdAt": "2000-01-01"})


def test_update_missing_project_raises(projects):
    with pytest.raises(ProjectNotFoundError) as excinfo:
        projects.update("missing", {"name": "x"})
    assert excinfo.value.project_id == "missing"


def test_delete_project(projects):
    project_id = projects.create("P", "", "alice")

    projects.delete(project_id)

    assert projects.get_by_id(project_id) is None
    with pytest.raises(ProjectNotFoundError):
        projects.delete(project_id)


def test_get_missing_project_returns_none(projects):
    assert projects.get_by_id("missing") is None


# --- Tasks ---

def test_create_task_defaults(tasks):
    task = tasks.get_by_id(tasks.create("p1", "Design", "Mockups"))

    assert isinstance(task, Task)
    assert task.project_id == "p1"
    assert task.status == "default"
    assert task.due_date is None
    assert task.image_url is None


def test_create_task_with_due_date_and_image(tasks):
    task_id = tasks.create(
        "p1", "Ship", "", status="urgent", due_date=date(2026, 12, 1), image_url="http://img/x.png"
    )

    task = tasks.get_by_id(task_id)

    assert task.status == "urgent"
    assert task.due_date == "2026-12-01"
    assert task.image_url == "http://img/x.png"


def test_create_task_rejects_bad_due_date(tasks):
    with pytest.raises(InvalidInputError):
        tasks.create("p1", "Ship", "", due_date="next week")


def test_create_task_requires_project_id(tasks):
    with pytest.raises(InvalidInputError):
        tasks.create("", "Orphan")
    with pytest.raises(InvalidInputError):
        tasks.create(None, "Orphan")


def test_list_by_project_newest_first(tasks):
    t1 = tasks.create("p1", "one")
    tasks.create("p2", "elsewhere")
    t2 = tasks.create("p1", "two")
    t3 = tasks.create("p1", "three")

    assert [t.id for t in tasks.list_by_project("p1")] == [t3, t2, t1]


def test_get_missing_task_returns_none(tasks):
    assert tasks.get_by_id("missing") is None


def test_update_task(tasks):
    task_id = tasks.create("p1", "Draft")

    tasks.update(task_id, {"status": "blocked", "dueDate": "2026-03-04"})

    task = tasks.get_by_id(task_id)
    assert task.status == "blocked"
    assert task.due_date == "2026-03-04"


def test_task_project_id_is_immutable(tasks):
    task_id = tasks.create("p1", "Draft")

    with pytest.raises(InvalidInputError):
        tasks.update(task_id, {"projectId": "p2"})

    assert tasks.get_by_id(task_id).project_id == "p1"


def test_update_and_delete_missing_task_raise(tasks):
    with pytest.raises(TaskNotFoundError):
        tasks.update("missing", {"name": "x"})
    with pytest.raises(TaskNotFoundError):
        tasks.delete("missing")


# --- To-dos ---

def test_create_todo_defaults_to_unfinished(todos):
    todo = todos.get_by_id(todos.create("t1", 1, "content", "Write copy"))

    assert isinstance(todo, Todo)
    assert todo.task_id == "t1"
    assert todo.priority == 1
    assert todo.genre == "content"
    assert todo.is_finish is False


def test_create_todo_requires_task_id(todos):
    with pytest.raises(InvalidInputError):
        todos.create("", 1, "g", "Name")


def test_create_todo_rejects_non_boolean_flag(todos):
    with pytest.raises(InvalidInputError):
        todos.create("t1", 1, "g", "Name", is_finish="yes")


def test_list_by_task(todos):
    a = todos.create("t1", 1, "g", "a")
    todos.create("t2", 1, "g", "other")
    b = todos.create("t1", "high", "g", "b")

    assert [t.id for t in todos.list_by_task("t1")] == [a, b]
    assert todos.list_by_task("t3") == []


def test_set_finished(todos):
    todo_id = todos.create("t1", 1, "g", "a")

    todos.set_finished(todo_id, True)
    assert todos.get_by_id(todo_id).is_finish is True

    todos.set_finished(todo_id, False)
    assert todos.get_by_id(todo_id).is_finish is False


def test_set_finished_missing_raises(todos):
    with pytest.raises(TodoNotFoundError) as excinfo:
        todos.set_finished("missing", True)
    assert excinfo.value.todo_id == "missing"


def test_update_todo(todos):
    todo_id = todos.create("t1", 1, "g", "a")

    todos.update(todo_id, {"name": "renamed", "priority": "high", "isFinish": True})

    todo = todos.get_by_id(todo_id)
    assert todo.name == "renamed"
    assert todo.priority == "high"
    assert todo.is_finish is True
    assert todo.task_id == "t1"


def test_update_todo_unknown_field(todos):
    todo_id = todos.create("t1", 1, "g", "a")

    with pytest.raises(InvalidInputError):
        todos.update(todo_id, {"taskId": "t2"})
    assert todos.get_by_id(todo_id).task_id == "t1"


def test_update_todo_rejects_non_boolean_flag(todos):
    todo_id = todos.create("t1", 1, "g", "a")

    with pytest.raises(InvalidInputError):
        todos.update(todo_id, {"isFinish": "yes"})
    assert todos.get_by_id(todo_id).is_finish is False


def test_update_missing_todo_raises(todos):
    with pytest.raises(TodoNotFoundError) as excinfo:
        todos.update("missing", {"name": "x"})
    assert excinfo.value.todo_id == "missing"


def test_delete_todo(todos):
    todo_id = todos.create("t1", 1, "g", "a")

    todos.delete(todo_id)

    assert todos.get_by_id(todo_id) is None
    with pytest.raises(TodoNotFoundError):
        todos.delete(todo_id)


def test_malformed_document_is_a_store_fault(store, todos):
    store.insert("todoTasks", {"taskId": "t1", "name": "bad", "isFinish": "true"})

    with pytest.raises(MalformedDocumentError) as exc_info:
        todos.list_by_task("t1")

    assert isinstance(exc_info.value, StoreError)
    assert not isinstance(exc_info.value, InvalidInputError)
    assert exc_info.value.collection == "todoTasks"


def test_null_finish_flag_is_a_store_fault(store, todos):
    store.insert("todoTasks", {"taskId": "t1", "name": "bad", "isFinish": None})

    with pytest.raises(MalformedDocumentError):
        todos.list_by_task("t1")


def test_task_missing_project_id_is_a_store_fault(store, tasks):
    task_id = store.insert("tasks", {"name": "stray"})

    with pytest.raises(MalformedDocumentError):
        tasks.get_by_id(task_id)


def test_missing_finish_flag_reads_as_unfinished(store, todos):
    store.insert("todoTasks", {"taskId": "t1", "name": "legacy"})

    [todo] = todos.list_by_task("t1")

    assert todo.is_finish is False
