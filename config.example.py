# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name shown in the console banner (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console log level; the log file always gets DEBUG (default: WARNING).",
    # Console
    "TASKTRACK_SHOW_TIMESTAMPS": "Prefix console replies with local time (true/false, default: true).",
    # Paths (gitignored)
    "TASKTRACK_DATA_DIR": "Local data directory (default: .local/tasktrack).",
    "TASKTRACK_TASKS_PATH": "Task file path (default: <data_dir>/tasks.txt).",
    "TASKTRACK_LOG_DIR": "Directory for tasktrack.log (default: <data_dir>).",
}
