# src/todo_sync/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo-sync.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL readable: todo_sync logs pass, httpx/httpcore request lines
    only at WARNING+, anything else from third parties only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("todo_sync."):
            return True
        if name.startswith(("httpx", "httpcore")):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(*, log_dir: str | Path, console_level: int = logging.INFO) -> Path:
    """
    Console (filtered, console_level) + file (everything, DEBUG) under log_dir.

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file = logging.FileHandler(str(log_file), encoding="utf-8")
    file.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
    for handler in (console, file):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    return log_file
