# utils/errors.py
"""
Domain errors raised by the tracker functions.

Each error carries the HTTP status it maps to; main.py turns any
TrackerError into a ``{"error": message}`` response.
"""


class TrackerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(TrackerError):
    status_code = 400


class InvalidStatus(TrackerError):
    status_code = 400

    def __init__(self, message: str = "Invalid status"):
        super().__init__(message)


class NotFound(TrackerError):
    status_code = 404


class Conflict(TrackerError):
    status_code = 409


class CategoryCapacityError(Conflict):
    def __init__(self, limit: int):
        super().__init__(f"A tracker type can have at most {limit} active categories.")
        self.limit = limit
