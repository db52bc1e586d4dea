"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter)
- task_store.py: httpx-backed client for the remote /todos API
- task_sync.py: sync client that keeps AppState.tasks consistent with the server
"""
