"""Error hierarchy for the trade and points engine.

Domain errors (4xx) are raised at the point of detection and never retried.
StoreError wraps infrastructure failures after the unit of work has rolled back.
"""


class BookExchangeError(Exception):
    """Base exception for all book exchange failures."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        """Render the standard response envelope."""
        return {
            "statusCode": self.http_status,
            "message": self.message,
            "code": self.code,
            "data": None,
        }


class NotFoundError(BookExchangeError):
    """A referenced book, trade or user does not exist."""

    def __init__(self, message: str):
        super().__init__(message, "NOT_FOUND", 404)


class InvalidOperationError(BookExchangeError):
    """A domain rule was violated, or required configuration is missing."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_OPERATION", 400)


class UnauthorizedError(BookExchangeError):
    """The acting user may not perform the requested transition."""

    def __init__(self, message: str):
        super().__init__(message, "UNAUTHORIZED", 403)


class ConflictError(BookExchangeError):
    """The request clashes with existing data, e.g. an email already registered."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)


class StoreError(BookExchangeError):
    """The store was unavailable or the transaction aborted."""

    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message, "STORE_UNAVAILABLE", 503)
        self.operation = operation


class NotUpdatedError(BookExchangeError):
    """A change request matched no rows, e.g. the trade already has that status."""

    def __init__(self, message: str):
        super().__init__(message, "NOT_UPDATED", 400)
