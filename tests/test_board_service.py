"""
Tests for BoardService: validation, contributors, and the deletion cascade policy.
"""

import pytest

from taskboard.core.exceptions import (
    InvalidInputError,
    ProjectNotFoundError,
    TaskNotFoundError,
    TodoNotFoundError,
)


def test_create_project_trims_input(ctx):
    project = ctx.board.create_project("  Website  ", " alice ", description="  copy  ")

    assert project.name == "Website"
    assert project.owner_id == "alice"
    assert project.description == "copy"


def test_create_project_empty_name(ctx):
    with pytest.raises(InvalidInputError):
        ctx.board.create_project("   ", "alice")


def test_create_task_requires_existing_project(ctx):
    with pytest.raises(ProjectNotFoundError):
        ctx.board.create_task("missing", "Orphan")


def test_create_task_blank_status_falls_back_to_default(ctx):
    project = ctx.board.create_project("P", "alice")

    task = ctx.board.create_task(project.id, "T", status="   ")

    assert task.status == "default"


def test_create_todo_requires_existing_task(ctx):
    with pytest.raises(TaskNotFoundError):
        ctx.board.create_todo("missing", "Orphan")


def test_create_todo_empty_name(ctx):
    project = ctx.board.create_project("P", "alice")
    task = ctx.board.create_task(project.id, "T")

    with pytest.raises(InvalidInputError):
        ctx.board.create_todo(task.id, "  ")


def test_update_project(ctx):
    project = ctx.board.create_project("Old", "alice")

    updated = ctx.board.update_project(project.id, name=" New ")

    assert updated.name == "New"


def test_update_project_requires_changes(ctx):
    project = ctx.board.create_project("P", "alice")

    with pytest.raises(InvalidInputError):
        ctx.board.update_project(project.id)


def test_add_and_remove_contributor(ctx):
    project = ctx.board.create_project("P", "alice")

    project = ctx.board.add_contributor(project.id, "bob")
    project = ctx.board.add_contributor(project.id, "bob")
    assert project.contributors == ["bob"]
    assert [p.id for p in ctx.projects.list_by_contributor("bob")] == [project.id]

    project = ctx.board.remove_contributor(project.id, "bob")
    assert project.contributors == []
    assert ctx.projects.list_by_contributor("bob") == []


def test_contributor_changes_on_missing_project(ctx):
    with pytest.raises(ProjectNotFoundError):
        ctx.board.add_contributor("missing", "bob")


def test_toggle_todo(ctx):
    project = ctx.board.create_project("P", "alice")
    task = ctx.board.create_task(project.id, "T")
    todo = ctx.board.create_todo(task.id, "step")

    assert ctx.board.toggle_todo(todo.id).is_finish is True
    assert ctx.board.toggle_todo(todo.id).is_finish is False


def test_set_todo_finished_missing(ctx):
    with pytest.raises(TodoNotFoundError):
        ctx.board.set_todo_finished("missing", True)


def _populated_project(ctx):
    project = ctx.board.create_project("P", "alice")
    other = ctx.board.create_project("Other", "alice")
    tasks = [ctx.board.create_task(project.id, f"T{i}") for i in range(3)]
    todos = [ctx.board.create_todo(t.id, "step") for t in tasks]
    keeper = ctx.board.create_task(other.id, "Keep me")
    return project, tasks, todos, keeper


def test_delete_project_cascades_by_default(ctx):
    project, tasks, todos, keeper = _populated_project(ctx)

    deleted = ctx.board.delete_project(project.id)

    assert deleted == 3
    assert ctx.projects.get_by_id(project.id) is None
    assert ctx.tasks.list_by_project(project.id) == []
    for task in tasks:
        assert ctx.todos.list_by_task(task.id) == []
    for todo in todos:
        assert ctx.todos.get_by_id(todo.id) is None
    assert ctx.tasks.get_by_id(keeper.id) is not None


def test_delete_project_without_cascade_orphans_tasks(ctx):
    project, tasks, todos, _ = _populated_project(ctx)

    deleted = ctx.board.delete_project(project.id, cascade=False)

    assert deleted == 0
    assert ctx.projects.get_by_id(project.id) is None
    assert len(ctx.tasks.list_by_project(project.id)) == 3
    assert ctx.todos.get_by_id(todos[0].id) is not None


def test_delete_missing_project(ctx):
    with pytest.raises(ProjectNotFoundError):
        ctx.board.delete_project("missing")


def test_delete_task_removes_todos(ctx):
    project = ctx.board.create_project("P", "alice")
    task = ctx.board.create_task(project.id, "T")
    ctx.board.create_todo(task.id, "a")
    ctx.board.create_todo(task.id, "b")

    assert ctx.board.delete_task(task.id) == 2
    assert ctx.tasks.get_by_id(task.id) is None
    assert ctx.todos.list_by_task(task.id) == []


def test_update_todo_trims_and_keeps_unset_fields(ctx):
    project = ctx.board.create_project("P", "alice")
    task = ctx.board.create_task(project.id, "T")
    todo = ctx.board.create_todo(task.id, "draft", priority=2, genre="writing")

    updated = ctx.board.update_todo(todo.id, name="  final  ")

    assert updated.name == "final"
    assert updated.priority == 2
    assert updated.genre == "writing"


def test_update_todo_requires_changes(ctx):
    project = ctx.board.create_project("P", "alice")
    task = ctx.board.create_task(project.id, "T")
    todo = ctx.board.create_todo(task.id, "draft")

    with pytest.raises(InvalidInputError):
        ctx.board.update_todo(todo.id)
    with pytest.raises(InvalidInputError):
        ctx.board.update_todo(todo.id, name="   ")


def test_update_missing_todo(ctx):
    with pytest.raises(TodoNotFoundError):
        ctx.board.update_todo("missing", genre="x")
