# src/todo_sync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import ConsoleSession
from ..cli.commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleNotifier:
    """Notifier port for the console: one timestamped line per failure."""

    def notify(self, text: str) -> None:
        _print_ts(f"[!] {text}")


def _prompt(session: ConsoleSession) -> str:
    return ">>> Edit: " if session.state.editing else ">>> Task: "


LineReader = Callable[[str], Awaitable[str]]


def _settle(fut: asyncio.Future, value: str | None, exc: BaseException | None) -> None:
    if fut.done():
        return
    if exc is not None:
        fut.set_exception(exc)
    else:
        fut.set_result(value)


async def read_line(prompt: str) -> str:
    """
    input() on a daemon thread.

    Not the default executor: asyncio.run waits for executor threads on shutdown,
    so a thread stuck in input() would keep the process alive after Ctrl+C.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future = loop.create_future()

    def worker() -> None:
        value: str | None = None
        exc: BaseException | None = None
        try:
            value = input(prompt)
        except BaseException as e:
            exc = e
        # The loop may already be closed if the app exited while we were waiting.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_settle, fut, value, exc)

    threading.Thread(target=worker, name="console-input", daemon=True).start()
    return await fut


async def run_console_loop(session: ConsoleSession, *, reader: LineReader = read_line) -> None:
    """
    Interactive presentation layer.

    Loads the list once on start, then reads lines:
    - "/command args" goes to the command registry,
    - anything else is a title: added, or saved into the task being edited.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task title to add it. Use /help for commands. Use /exit to quit.\n")

    session.accept(await session.client.refresh(session.state))
    print(session.render(), flush=True)

    while True:
        try:
            raw = await reader(_prompt(session))
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(session, user_input)
            if reply is None:
                result = session.accept(await session.client.submit(session.state, raw))
                reply = session.render() if result.ok else None
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling input."

        if reply:
            print(reply, flush=True)

    logger.info("Console connector finished.")


def stdout_supports_color() -> bool:
    try:
        return sys.stdout.isatty()
    except Exception:
        return False
