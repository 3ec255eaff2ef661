from __future__ import annotations


class TaskTrackerError(Exception):
    """Base error. `status_code` and `error` drive the HTTP response."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(TaskTrackerError):
    status_code = 400

    def to_body(self) -> dict:
        return {"error": self.message}


class ConfigurationError(TaskTrackerError):
    pass


class StoreNotConfigured(TaskTrackerError):
    error = "Task store not initialized"

    def __init__(self, message: str = "Task store not initialized"):
        super().__init__(message)

    def to_body(self) -> dict:
        return {"error": self.error}


class StoreError(TaskTrackerError):
    """Raised by task stores; wraps the backend exception as `__cause__`."""


class ConnectivityError(StoreError):
    status_code = 503
    error = "not ready"


class ReadError(StoreError):
    error = "Failed to retrieve tasks"


class WriteError(StoreError):
    error = "Failed to create task"
