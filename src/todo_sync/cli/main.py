# src/todo_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, wires the sync client, then runs the console REPL
until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, create_sync_client
from ..cli.commands import ConsoleSession
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop, stdout_supports_color
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    client = create_sync_client(settings=settings, notifier=ConsoleNotifier())
    session = ConsoleSession(
        client=client,
        state=create_initial_state(settings=settings),
        color=stdout_supports_color(),
    )
    try:
        await run_console_loop(session)
    finally:
        await client.aclose()


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s against %s...", settings.app_name, settings.api_base_url)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
