"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKKEEPER_APP_NAME": "App display name, used as the console prompt (default: taskkeeper).",
    "TASKKEEPER_LOG_LEVEL": "File log level; DEBUG also turns on console logging (default: INFO).",
    # Storage
    "TASKKEEPER_STORAGE_BACKEND": "sqlite (persistent) or memory (gone on exit). Default: sqlite.",
    "TASKKEEPER_STORAGE_KEY": "Name of the slot holding the task list (default: tasks).",
    # Paths (gitignored)
    "TASKKEEPER_DATA_DIR": "Local data directory for the database and logs (default: .local/taskkeeper).",
    "TASKKEEPER_STORAGE_DB_PATH": "SQLite key-value file (default: <data_dir>/storage.sqlite3).",
    # Assignees
    "TASKKEEPER_ASSIGNEES_PATH": (
        "JSON array of assignee names or {\"name\": ...} objects "
        "(default: the list bundled with the package)."
    ),
}
