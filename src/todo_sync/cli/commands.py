# src/todo_sync/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..connectors.console_render import render_state
from ..core.state import AppState, set_filter, toggle_dark_mode, visible_tasks
from ..tasks.task_models import Task, TaskFilter
from ..tasks.task_sync import SyncResult, TaskSyncClient

logger = logging.getLogger(__name__)


@dataclass
class ConsoleSession:
    """What a command handler works on: the client plus the current state."""

    client: TaskSyncClient
    state: AppState
    color: bool = True

    def accept(self, result: SyncResult) -> SyncResult:
        self.state = result.state
        return result

    def render(self) -> str:
        return render_state(self.state, color=self.color)


CommandHandler = Callable[[ConsoleSession, list[str]], Awaitable[str]]


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, session: ConsoleSession, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(session, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Any other text is saved as a task title (adds, or updates while editing).")
        return "\n".join(lines)


registry = CommandRegistry()


def _pick_row(session: ConsoleSession, args: list[str]) -> Task | str:
    """Resolve a 1-based row number in the visible list; return an error text on failure."""
    if not args:
        return "Missing row number. Use /list to see rows."
    try:
        n = int(args[0])
    except ValueError:
        return f"Not a row number: {args[0]!r}."
    rows = visible_tasks(session.state)
    if n < 1 or n > len(rows):
        return f"No row {n} (showing {len(rows)} tasks)."
    return rows[n - 1]


async def cmd_help(session: ConsoleSession, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(session: ConsoleSession, args: list[str]) -> str:
    return session.render()


async def cmd_refresh(session: ConsoleSession, args: list[str]) -> str:
    session.accept(await session.client.refresh(session.state))
    return session.render()


async def cmd_add(session: ConsoleSession, args: list[str]) -> str:
    """
    /add <title>  -> create a task
    Refused while an edit is in progress so the edit is not lost silently.
    """
    if session.state.editing:
        return "An edit is in progress. Use /save to finish it or /cancel to drop it."
    title = " ".join(args)
    result = session.accept(await session.client.submit(session.state, title))
    if result.skipped:
        return "Usage: /add <title> (title cannot be empty)."
    return session.render()


async def cmd_edit(session: ConsoleSession, args: list[str]) -> str:
    picked = _pick_row(session, args)
    if isinstance(picked, str):
        return picked
    session.state = session.client.begin_edit(session.state, picked)
    return f"Editing {picked.title!r}. Type the new title (or /save <title>); /cancel to stop."


async def cmd_save(session: ConsoleSession, args: list[str]) -> str:
    """
    /save          -> submit the pending input as-is
    /save <title>  -> submit <title>
    """
    title = " ".join(args) if args else None
    result = session.accept(await session.client.submit(session.state, title))
    if result.skipped:
        return "Nothing to save: the title is empty."
    return session.render()


async def cmd_cancel(session: ConsoleSession, args: list[str]) -> str:
    if not session.state.editing:
        return "Not editing anything."
    session.state = session.client.cancel_edit(session.state)
    return "Edit cancelled."


async def cmd_done(session: ConsoleSession, args: list[str]) -> str:
    picked = _pick_row(session, args)
    if isinstance(picked, str):
        return picked
    session.accept(await session.client.toggle_completed(session.state, picked))
    return session.render()


async def cmd_rm(session: ConsoleSession, args: list[str]) -> str:
    picked = _pick_row(session, args)
    if isinstance(picked, str):
        return picked
    session.accept(await session.client.remove(session.state, picked.id))
    return session.render()


async def cmd_filter(session: ConsoleSession, args: list[str]) -> str:
    """
    /filter                           -> show current filter
    /filter all|completed|pending     -> change the view (no network)
    """
    if not args:
        return f"Filter is {session.state.filter.value}. Use /filter all|completed|pending."
    raw = args[0].lower()
    if raw not in {f.value for f in TaskFilter}:
        return "Usage: /filter all|completed|pending."
    session.state = set_filter(session.state, TaskFilter(raw))
    return session.render()


async def cmd_dark(session: ConsoleSession, args: list[str]) -> str:
    """
    /dark         -> toggle
    /dark on|off  -> set explicitly
    """
    want: bool | None = None
    if args:
        arg = args[0].lower()
        if arg in ("on", "1", "true", "yes"):
            want = True
        elif arg in ("off", "0", "false", "no"):
            want = False
        else:
            return "Usage: /dark [on|off]."

    if want is None or want != session.state.dark_mode:
        session.state = toggle_dark_mode(session.state)
    return f"Dark mode {'ON' if session.state.dark_mode else 'OFF'}."


async def cmd_status(session: ConsoleSession, args: list[str]) -> str:
    state = session.state
    settings = state.settings
    mode = f"UPDATE ({state.edit_session.task.title!r})" if state.edit_session else "CREATE"
    server = getattr(settings, "api_base_url", "?")
    policy = session.client.policy.__class__.__name__
    return (
        "Status:\n"
        f"  Server: {server}\n"
        f"  Consistency: {policy}\n"
        f"  Mode: {mode}\n"
        f"  Filter: {state.filter.value}\n"
        f"  Dark mode: {'ON' if state.dark_mode else 'OFF'}\n"
        f"  Tasks: {len(state.tasks)} ({len(visible_tasks(state))} shown)"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the (filtered) task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.", aliases=["r"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.", aliases=["a"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <row>.", aliases=["e"])
registry.register("save", cmd_save, help_text="Save the pending title: /save [title].")
registry.register("cancel", cmd_cancel, help_text="Cancel the current edit.")
registry.register("done", cmd_done, help_text="Toggle completed: /done <row>.", aliases=["toggle", "x"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <row>.", aliases=["del", "delete"])
registry.register("filter", cmd_filter, help_text="Filter view: /filter all|completed|pending.", aliases=["f"])
registry.register("dark", cmd_dark, help_text="Dark mode: /dark [on|off].")
registry.register("status", cmd_status, help_text="Show server, mode, filter and counts.")
