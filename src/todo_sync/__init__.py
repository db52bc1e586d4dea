"""
todo-sync: headless to-do client kept in sync with a remote /todos CRUD API.
"""
