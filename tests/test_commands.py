# tests/test_commands.py

from __future__ import annotations

import pytest

from todo_sync.cli.commands import CommandRegistry, ConsoleSession, registry
from todo_sync.core.errors import TransportError
from todo_sync.tasks.task_models import Task, TaskFilter


@pytest.fixture()
def session(client, state) -> ConsoleSession:
    return ConsoleSession(client=client, state=state, color=False)


@pytest.mark.asyncio
async def test_command_registry_routes_and_aliases(session) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    async def handler(session, args):
        called["a"] += 1
        return " ".join(args)

    reg.register("echo", handler, "echo", aliases=["e"])

    assert await reg.handle(session, "/echo x y") == "x y"
    assert await reg.handle(session, "/E z") == "z"
    assert called["a"] == 2


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(session) -> None:
    reg = CommandRegistry()
    assert await reg.handle(session, "hello") is None
    assert "Unknown command" in (await reg.handle(session, "/nope") or "")
    assert "Empty command" in (await reg.handle(session, "/") or "")


@pytest.mark.asyncio
async def test_list_renders_rows(session) -> None:
    out = await registry.handle(session, "/list")
    assert out is not None
    assert "1. [ ] Buy milk" in out
    assert "3. [x] Pay rent" in out


@pytest.mark.asyncio
async def test_row_numbers_follow_the_filtered_view(session, repo) -> None:
    await registry.handle(session, "/filter completed")
    assert session.state.filter is TaskFilter.COMPLETED

    await registry.handle(session, "/done 1")

    # Row 1 of the completed view is "Pay rent" (id 3).
    assert ("update_task", {"id": 3, "title": "Pay rent", "completed": False}) in repo.calls


@pytest.mark.asyncio
async def test_add_edit_save_flow(session, repo) -> None:
    await registry.handle(session, "/add Call mom")
    assert any(t.title == "Call mom" for t in session.state.tasks)

    reply = await registry.handle(session, "/edit 2")
    assert reply is not None and "Walk dog" in reply
    assert session.state.editing

    refused = await registry.handle(session, "/add other")
    assert refused is not None and "in progress" in refused

    await registry.handle(session, "/save Walk the dog")
    assert not session.state.editing
    assert Task(id=2, title="Walk the dog", completed=False) in session.state.tasks


@pytest.mark.asyncio
async def test_cancel_edit(session, repo) -> None:
    assert await registry.handle(session, "/cancel") == "Not editing anything."
    await registry.handle(session, "/edit 1")
    assert await registry.handle(session, "/cancel") == "Edit cancelled."
    assert not session.state.editing
    assert repo.calls == []


@pytest.mark.asyncio
async def test_rm_failure_keeps_rows(session, repo, notifier) -> None:
    repo.fail_on["delete_task"] = TransportError("down")
    before = session.state.tasks

    await registry.handle(session, "/rm 1")

    assert session.state.tasks == before
    assert notifier.messages


@pytest.mark.asyncio
@pytest.mark.parametrize("line", ["/done", "/done x", "/done 0", "/done 99"])
async def test_bad_row_numbers(session, repo, line) -> None:
    reply = await registry.handle(session, line)
    assert reply is not None
    assert repo.calls == []


@pytest.mark.asyncio
async def test_dark_toggle_and_explicit(session) -> None:
    assert await registry.handle(session, "/dark") == "Dark mode ON."
    assert await registry.handle(session, "/dark on") == "Dark mode ON."
    assert await registry.handle(session, "/dark off") == "Dark mode OFF."
    assert "Usage" in (await registry.handle(session, "/dark maybe") or "")


@pytest.mark.asyncio
async def test_status_mentions_server_and_mode(session) -> None:
    out = await registry.handle(session, "/status")
    assert out is not None
    assert "http://todo.test" in out
    assert "CREATE" in out
