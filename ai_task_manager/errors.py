"""
AI Task Manager - Error Types

Exceptions shared by the analysis pipeline and the task layer.
Backend errors never leave an analysis stage; they select its fallback path.
"""

from typing import Optional


class TaskManagerError(Exception):
    """Base error for the task manager."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendUnavailableError(TaskManagerError):
    """No credential or configuration for the completion backend."""


class BackendCallError(TaskManagerError):
    """Network, quota or model error while calling the completion backend."""


class MalformedBackendOutputError(TaskManagerError):
    """Backend output could not be parsed against the expected shape."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class PersistenceError(TaskManagerError):
    """Task store read or write failed."""


class InputValidationError(TaskManagerError, ValueError):
    """User input rejected before entering the pipeline."""


class TaskLimitReachedError(TaskManagerError):
    """Owner already holds the maximum number of tasks."""

    def __init__(self, limit: int):
        super().__init__(f"Task limit of {limit} tasks reached")
        self.limit = limit
