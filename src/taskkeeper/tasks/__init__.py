"""
Task subsystem.

Components:
- task_models.py: data structures (Task, LoadResult) and the at-rest codec
- task_store.py: CRUD over the task list kept in one key-value slot
- task_api.py: small high-level helpers (create defaults, completed toggle)
- due_dates.py: human-readable due dates and user input parsing
"""
