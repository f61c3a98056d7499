# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todolist).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todolist).",
    "TODO_TASKS_PATH": "Task snapshot JSON path (default: <data_dir>/todo_data.json).",
    "TODO_LOG_DIR": "Directory for todolist.log (default: <data_dir>).",
    # Snapshot handling
    "TODO_QUARANTINE_CORRUPT": (
        "Move an unreadable snapshot aside to <name>.corrupt-<stamp> before starting empty "
        "(true/false, default: true)."
    ),
    "TODO_JSON_INDENT": "Indentation of the snapshot JSON; 0 writes it compact (default: 2).",
}
