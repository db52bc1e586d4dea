# tests/test_state.py

from __future__ import annotations

import pytest

from todo_sync.core.errors import ServerError
from todo_sync.core.state import (
    AppState,
    begin_edit,
    cancel_edit,
    filter_tasks,
    set_filter,
    set_title_input,
    toggle_dark_mode,
    visible_tasks,
)
from todo_sync.tasks.task_models import Task, TaskFilter

TASKS = (
    Task(id=1, title="a", completed=False),
    Task(id=2, title="b", completed=True),
    Task(id=3, title="c", completed=False),
    Task(id=4, title="d", completed=True),
)


def test_completed_and_pending_partition_the_list() -> None:
    done = filter_tasks(TASKS, TaskFilter.COMPLETED)
    todo = filter_tasks(TASKS, TaskFilter.PENDING)

    assert {t.id for t in done} | {t.id for t in todo} == {t.id for t in TASKS}
    assert not ({t.id for t in done} & {t.id for t in todo})
    assert filter_tasks(TASKS, TaskFilter.ALL) == list(TASKS)


def test_filter_keeps_server_order() -> None:
    assert [t.id for t in filter_tasks(TASKS, TaskFilter.COMPLETED)] == [2, 4]
    assert [t.id for t in filter_tasks(TASKS, TaskFilter.PENDING)] == [1, 3]


def test_filter_does_not_touch_task_list() -> None:
    state = AppState(tasks=TASKS)
    filtered = set_filter(state, TaskFilter.PENDING)

    assert filtered.tasks == TASKS
    assert [t.id for t in visible_tasks(filtered)] == [1, 3]
    assert state.filter is TaskFilter.ALL


def test_edit_session_transitions() -> None:
    state = set_title_input(AppState(tasks=TASKS), "draft")

    editing = begin_edit(state, TASKS[1])
    assert editing.title_input == "b"
    assert editing.edit_session is not None
    assert editing.edit_session.task == TASKS[1]

    idle = cancel_edit(editing)
    assert not idle.editing
    assert idle.title_input == ""


def test_toggle_dark_mode_round_trip() -> None:
    state = AppState()
    assert toggle_dark_mode(state).dark_mode is True
    assert toggle_dark_mode(toggle_dark_mode(state)) == state


@pytest.mark.parametrize(
    "raw, expected",
    [("completed", TaskFilter.COMPLETED), (" PENDING ", TaskFilter.PENDING), ("bogus", TaskFilter.ALL), (None, TaskFilter.ALL)],
)
def test_filter_parse(raw, expected) -> None:
    assert TaskFilter.parse(raw) is expected


def test_task_from_json_defaults_completed() -> None:
    assert Task.from_json({"id": "x1", "title": "t"}) == Task(id="x1", title="t", completed=False)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"title": "t"},
        {"id": True, "title": "t"},
        {"id": "", "title": "t"},
        {"id": 1, "title": None},
        {"id": 1, "title": "t", "completed": "false"},
        {"id": 1, "title": "t", "completed": 0},
    ],
)
def test_task_from_json_rejects_malformed(payload) -> None:
    with pytest.raises(ServerError):
        Task.from_json(payload)


def test_task_to_payload() -> None:
    assert Task(id=1, title="t", completed=True).to_payload() == {"title": "t", "completed": True}


def test_task_from_json_null_completed_is_pending() -> None:
    assert Task.from_json({"id": 1, "title": "t", "completed": None}).completed is False
