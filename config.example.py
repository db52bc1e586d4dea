# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting without opening config.py.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-sync).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    "TODO_DATA_DIR": "Local data directory for the log file (default: .local/todo-sync).",
    # Remote task store
    "TODO_API_BASE_URL": "Base URL of the /todos API (default: http://127.0.0.1:8000).",
    "TODO_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5.0).",
    "TODO_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 10.0).",
    "TODO_MAX_RETRIES": "Retries on network errors for GET/PUT/DELETE; POST is never retried (default: 2).",
    "TODO_RETRY_BACKOFF_SECONDS": "First retry delay, doubled per attempt (default: 0.5).",
    # Sync behaviour
    "TODO_CONSISTENCY": "refetch (full GET after each change) or patch (apply server response) (default: refetch).",
    # Initial UI state
    "TODO_DARK_MODE": "Start in dark mode (true/false, default: false).",
    "TODO_DEFAULT_FILTER": "all | completed | pending (default: all).",
}
