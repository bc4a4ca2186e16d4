# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) for machine-specific values.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKS_APP_NAME": "App display name (default: task-tracker).",
    "TASKS_LOG_LEVEL": "Console logging level (default: INFO; console never shows below WARNING).",
    "TASKS_LOG_DIR": "Directory for tasks.log (default: <data_dir>).",
    # Storage (gitignored)
    "TASKS_DATA_DIR": "Local data directory (default: .local/tasks).",
    "TASKS_DB_PATH": "SQLite database path (default: <data_dir>/tasks.sqlite3).",
    "TASKS_DB_TIMEOUT": "Seconds to wait on a locked database (default: 30).",
    # CLI
    "TASKS_NEWEST_DEFAULT": "Row count for /newest without an argument (default: 5).",
}
