# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo).",
    "TODO_TASKS_PATH": "Task file path (default: <data_dir>/tasks.json).",
    # Behaviour
    "TODO_AUTOSAVE": "Save after every change (true/false, default: true).",
}
